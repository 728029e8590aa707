"""Shared pagination constants and response header helpers."""

from fastapi import Response

from core import settings

MAX_PAGE_SIZE = settings.max_page_size
# Keeps LIMIT/OFFSET inside the database's 64-bit integer range.
MAX_OFFSET = 1_000_000_000
MAX_PAGE = MAX_OFFSET // MAX_PAGE_SIZE + 1


def set_next_offset_header(
    response: Response,
    *,
    offset: int,
    limit: int,
    has_more: bool,
) -> None:
    if has_more:
        response.headers["X-Next-Offset"] = str(offset + limit)


def set_page_headers(
    response: Response,
    *,
    page: int,
    per_page: int,
    total: int,
    total_pages: int,
) -> None:
    response.headers["X-Page"] = str(page)
    response.headers["X-Per-Page"] = str(per_page)
    response.headers["X-Total-Count"] = str(total)
    response.headers["X-Total-Pages"] = str(total_pages)
