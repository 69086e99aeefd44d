"""REST API routes, mounted under the configured API prefix."""

from fastapi import APIRouter

from essential_times.api.routes import articles, auth, categories, health

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(categories.router, tags=["categories"])
router.include_router(articles.router, tags=["articles"])
