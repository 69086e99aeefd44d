"""Request/response schemas for category endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from essential_times.models.base import MAX_ROW_ID


class CategoryIn(BaseModel):
    """Body for creating or replacing a category."""

    name: str = Field(..., max_length=100, description="Unique display name")
    slug: str = Field(..., max_length=100, description="Unique URL-safe identifier")
    display_order: int = Field(
        default=0, ge=-MAX_ROW_ID - 1, le=MAX_ROW_ID, description="Ascending sort rank"
    )


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    display_order: int
