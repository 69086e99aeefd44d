"""Page/limit parsing and page counters shared by the paginated article listings."""

import math

from essential_times.schemas.article import Pagination


def _positive_int(raw: str | int | None, default: int) -> int:
    """Parse raw as a positive int; anything missing, non-numeric or < 1 gives default."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def parse_page_params(
    page: str | int | None,
    limit: str | int | None,
    default_limit: int = 10,
    max_limit: int = 100,
) -> tuple[int, int]:
    """Return (page, limit) with page >= 1 and 1 <= limit <= max_limit."""
    return _positive_int(page, 1), min(_positive_int(limit, default_limit), max_limit)


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total_count: int) -> Pagination:
    """
    Counters for one page: total = ceil(total_count / limit), hasNext only when a
    later page exists, hasPrev for every page after the first.
    """
    total_pages = math.ceil(total_count / limit) if total_count > 0 else 0
    return Pagination(
        current=page,
        total=total_pages,
        hasNext=page < total_pages,
        hasPrev=page > 1,
    )
