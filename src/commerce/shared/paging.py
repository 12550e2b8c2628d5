"""Pagination for admin and catalogue listings."""

from dataclasses import dataclass, field

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain


@dataclass(frozen=True)
class Page:
    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    pages: int = 0


def page_window(page=1, limit=None) -> tuple[int, int]:
    """Validate ``page``/``limit`` against the configured sizes; returns ``(offset, limit)``."""
    if limit is None:
        limit = int(getattr(current_domain, "DEFAULT_PAGE_SIZE", 20))
    max_limit = int(getattr(current_domain, "MAX_PAGE_SIZE", 100))
    if page < 1 or limit < 1 or limit > max_limit:
        raise ValidationError({"pagination": [f"page must be >= 1 and limit between 1 and {max_limit}"]})
    return (page - 1) * limit, limit


def paginate(query, page=1, limit=None) -> Page:
    offset, limit = page_window(page, limit)
    results = query.offset(offset).limit(limit).all()
    return Page(items=results.items, total=results.total, page=page, pages=results.total_pages)
