"""Pagination helpers shared by every list endpoint."""
import math
import re
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_LEADING_INT = re.compile(r"^\s*([-+]?\d+)")


def pagination_to_range(page: int, limit: int) -> dict[str, int]:
    """Convert a 1-based page and page size to an inclusive row range, e.g. (1, 20) -> {"from": 0, "to": 19}."""
    start = (page - 1) * limit
    return {"from": start, "to": start + limit - 1}


class PaginationMeta(BaseModel):
    """Serialized with camelCase keys (currentPage, totalPages, ...) for the dashboard."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    has_prev_page: bool
    has_next_page: bool


def calculate_pagination_meta(page: int, limit: int, total: int) -> PaginationMeta:
    if limit <= 0:
        raise ValueError("limit must be a positive integer")
    total_pages = math.ceil(total / limit)
    return PaginationMeta(
        current_page=page,
        page_size=limit,
        total_items=total,
        total_pages=total_pages,
        has_prev_page=page > 1,
        has_next_page=page < total_pages,
    )


def create_paginated_response(data: list, page: int, limit: int, total: int) -> dict[str, Any]:
    return {
        "data": data,
        "pagination": calculate_pagination_meta(page, limit, total).model_dump(by_alias=True),
    }


def _parse_int(value: Any) -> int | None:
    """Leading integer of a query value ("12abc" -> 12); None when there is none."""
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None


def extract_pagination_params(
    query: dict[str, Any],
    default_limit: int = 20,
    max_limit: int = 100,
) -> tuple[int, int]:
    """Read page/limit from request query params. Missing, unparsable or zero values fall back to defaults."""
    page = max(1, _parse_int(query.get("page")) or 1)
    limit = _parse_int(query.get("limit")) or default_limit
    limit = min(max_limit, max(1, limit))
    return page, limit


def generate_pagination_links(
    base_url: str,
    page: int,
    limit: int,
    total: int,
    query_params: dict[str, Any] | None = None,
) -> dict[str, str | None]:
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    other = "&".join(
        f"{k}={quote(str(v), safe='')}"
        for k, v in (query_params or {}).items()
        if k not in ("page", "limit")
    )
    qs = f"&{other}" if other else ""

    def _link(p: int) -> str:
        return f"{base_url}?page={p}&limit={limit}{qs}"

    return {
        "first": _link(1),
        "last": _link(total_pages),
        "prev": _link(page - 1) if page > 1 else None,
        "next": _link(page + 1) if page < total_pages else None,
    }
