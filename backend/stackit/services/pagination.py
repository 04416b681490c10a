"""Offset pagination arithmetic shared by every list endpoint."""

import math

from stackit.schemas.common import Pagination


def page_offset(page: int, limit: int) -> int:
    """Rows to skip for a 1-based page number."""
    return (max(page, 1) - 1) * limit


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_count=total,
        has_more=page < total_pages,
    )
