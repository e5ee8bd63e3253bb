"""Paginated list responses ({data, pagination, links}) for the CRUD routers."""
from typing import Any

from fastapi import Request
from pydantic import BaseModel

from innkeep.config import get_settings
from innkeep.services.base import BaseService
from innkeep.utils.filters import parse_filter_params
from innkeep.utils.pagination import (
    create_paginated_response,
    extract_pagination_params,
    generate_pagination_links,
)


def paginated_list(
    request: Request,
    service: BaseService,
    schema: type[BaseModel],
    extra_filter_fields: tuple[str, ...] = (),
) -> dict[str, Any]:
    settings = get_settings()
    query = dict(request.query_params)
    page, limit = extract_pagination_params(query, settings.default_page_limit, settings.max_page_limit)
    filters = parse_filter_params(query, (*service.filter_fields, *extra_filter_fields))
    rows, total = service.list(filters, page, limit, query.get("search"), query.get("sort"))
    body = create_paginated_response(
        [schema.model_validate(r).model_dump(mode="json") for r in rows], page, limit, total
    )
    body["links"] = generate_pagination_links(request.url.path, page, limit, total, query)
    return body
