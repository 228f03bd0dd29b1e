import math

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


def clamp_pagination(limit: int, offset: int, max_limit: int = 100):
    limit = max(1, min(limit, max_limit))
    offset = max(0, offset)
    return limit, offset


def page_window(total: int, page: int, limit: int) -> tuple[int, bool, bool]:
    """Return (total_pages, has_next, has_prev) for a 1-based page."""
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return total_pages, page < total_pages, page > 1
