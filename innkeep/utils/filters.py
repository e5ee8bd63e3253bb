"""Filter helpers: turn query-string filters into SQLAlchemy WHERE clauses."""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from sqlalchemy import String, and_, or_
from sqlalchemy.orm import ColumnProperty, Query

from innkeep.errors import ServiceError


class FilterOperator(str, enum.Enum):
    eq = "eq"
    neq = "neq"
    gt = "gt"
    gte = "gte"
    lt = "lt"
    lte = "lte"
    like = "like"
    ilike = "ilike"
    is_ = "is"
    in_ = "in"
    contains = "contains"
    contained = "contained"


_OPERATORS = {op.value: op for op in FilterOperator}

# Query keys that never name a column
RESERVED_PARAMS = ("page", "limit", "sort", "order", "search")

_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
_ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class FilterCondition:
    field: str
    operator: FilterOperator
    value: Any


@dataclass
class FilterConfig:
    conditions: list[FilterCondition] = field(default_factory=list)
    match_any: bool = False  # OR instead of AND


def split_operator(key: str, fields: list[str] | tuple[str, ...] | None = None) -> tuple[str, FilterOperator | None]:
    """Split an operator suffix: name_ilike -> (name, ilike). A key that is itself a known field is never split."""
    if fields is not None and key in fields:
        return key, None
    base, sep, suffix = key.rpartition("_")
    if sep and base and suffix in _OPERATORS:
        return base, _OPERATORS[suffix]
    return key, None


def build_filter_conditions(
    filters: dict[str, Any],
    default_operator: FilterOperator = FilterOperator.eq,
    fields: list[str] | tuple[str, ...] | None = None,
) -> list[FilterCondition]:
    conditions = []
    for key, value in filters.items():
        name, op = split_operator(key, fields)
        op = op or default_operator
        if op is not FilterOperator.is_ and (value is None or value == ""):
            continue
        conditions.append(FilterCondition(field=name, operator=op, value=value))
    return conditions


def _like_pattern(value: Any) -> str:
    return str(value).replace("*", "%")


def _is_text(column) -> bool:
    return isinstance(column.property.columns[0].type, String)


def condition_clause(model, condition: FilterCondition):
    column = getattr(model, condition.field, None)
    if column is None or not isinstance(getattr(column, "property", None), ColumnProperty):
        raise ServiceError(f"Unknown filter field: {condition.field}", "INVALID_FILTER")
    op, value = condition.operator, condition.value
    if isinstance(value, enum.Enum):
        value = value.value
    # "101" parsed as a number still compares as text against a string column
    if _is_text(column) and isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    elif _is_text(column) and isinstance(value, list):
        value = [str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v for v in value]
    if op is FilterOperator.eq:
        return column == value
    if op is FilterOperator.neq:
        return column != value
    if op is FilterOperator.gt:
        return column > value
    if op is FilterOperator.gte:
        return column >= value
    if op is FilterOperator.lt:
        return column < value
    if op is FilterOperator.lte:
        return column <= value
    if op is FilterOperator.like:
        return column.like(_like_pattern(value))
    if op is FilterOperator.ilike:
        return column.ilike(_like_pattern(value))
    if op is FilterOperator.is_:
        return column.is_(value)
    if op is FilterOperator.in_:
        values = value if isinstance(value, (list, tuple, set)) else [value]
        return column.in_([v.value if isinstance(v, enum.Enum) else v for v in values])
    # JSON array operators need JSONB (PostgreSQL)
    if op is FilterOperator.contains:
        return column.contains(value if isinstance(value, list) else [value])
    if op is FilterOperator.contained:
        return column.contained_by(value if isinstance(value, list) else [value])
    raise ServiceError(f"Unsupported filter operator: {op}", "INVALID_FILTER")


def apply_filters(query: Query, model, config: FilterConfig) -> Query:
    if not config.conditions:
        return query
    clauses = [condition_clause(model, c) for c in config.conditions]
    if config.match_any and len(clauses) > 1:
        return query.filter(or_(*clauses))
    return query.filter(and_(*clauses))


def parse_filter_value(value: Any, operator: str = "eq") -> Any:
    if not isinstance(value, str):
        return value
    if operator == "in":
        return [parse_filter_value(v.strip(), "eq") for v in value.split(",") if v.strip()]
    if value == "true":
        return True
    if value == "false":
        return False
    if value == "null":
        return None
    if _NUMBER.match(value):
        return float(value) if "." in value else int(value)
    if _ISO_DATETIME.match(value):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    if _ISO_DATE.match(value):
        return date.fromisoformat(value)
    return value


def parse_filter_params(query: dict[str, Any], allowed_fields: list[str] | tuple[str, ...]) -> dict[str, Any]:
    """Keep only filterable keys (optionally with an operator suffix) and convert their values."""
    filters: dict[str, Any] = {}
    for key, value in query.items():
        if key in RESERVED_PARAMS:
            continue
        name, op = split_operator(key, allowed_fields)
        if name not in allowed_fields:
            continue
        filters[key] = parse_filter_value(value, op.value if op else "eq")
    return filters


def create_text_search_filter(search_term: str | None, search_fields: list[str] | tuple[str, ...]) -> FilterConfig:
    if not search_term or not search_fields:
        return FilterConfig()
    return FilterConfig(
        conditions=[FilterCondition(f, FilterOperator.ilike, f"%{search_term}%") for f in search_fields],
        match_any=True,
    )


def parse_sort_param(value: str | None) -> tuple[str, bool] | None:
    """Sort value: -created_at or created_at:desc -> ("created_at", True)."""
    if not value:
        return None
    value = value.strip()
    if value.startswith("-"):
        return value[1:], True
    name, _, direction = value.partition(":")
    return name, direction.lower() == "desc"
