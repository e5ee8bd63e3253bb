"""Generic CRUD wrapper over one SQLAlchemy model. Every call is a direct forward to the session."""
from __future__ import annotations

import logging
from typing import Any, Generic, NoReturn, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from innkeep.errors import NotFoundError, ServiceError, ValidationFailed
from innkeep.utils.filters import (
    FilterConfig,
    apply_filters,
    build_filter_conditions,
    create_text_search_filter,
    parse_sort_param,
)
from innkeep.utils.pagination import pagination_to_range

__all__ = ["BaseService", "ServiceError", "NotFoundError", "ValidationFailed"]

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class BaseService(Generic[ModelT]):
    model: type[ModelT]
    # Columns matched (OR, ilike) by the free-text ?search= parameter
    search_fields: tuple[str, ...] = ()
    # Columns accepted as ?field= filters on list endpoints
    filter_fields: tuple[str, ...] = ()

    def __init__(self, db: Session):
        self.db = db

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def _handle_error(self, error: Exception) -> NoReturn:
        self.db.rollback()
        if isinstance(error, ServiceError):
            raise error
        if isinstance(error, IntegrityError):
            logger.info("[%s] integrity error: %s", self.table_name, error.orig)
            raise ServiceError(str(error.orig), "CONFLICT", error) from error
        if isinstance(error, SQLAlchemyError):
            logger.warning("[%s] database error: %s", self.table_name, error)
            raise ServiceError(str(error), "DATABASE_ERROR", error) from error
        raise ServiceError(str(error) or "An unknown error occurred", "UNKNOWN_ERROR", error) from error

    def _query(self) -> Query:
        return self.db.query(self.model)

    def _check_columns(self, data: dict[str, Any]) -> None:
        unknown = [k for k in data if k not in self.model.__table__.columns]
        if unknown:
            raise ValidationFailed(f"Unknown field(s) for {self.table_name}: {', '.join(sorted(unknown))}")

    def create(self, data: dict[str, Any]) -> ModelT:
        self._check_columns(data)
        try:
            row = self.model(**data)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return row
        except Exception as e:
            self._handle_error(e)

    def bulk_create(self, rows: list[dict[str, Any]]) -> list[ModelT]:
        for data in rows:
            self._check_columns(data)
        try:
            objs = [self.model(**data) for data in rows]
            self.db.add_all(objs)
            self.db.commit()
            for obj in objs:
                self.db.refresh(obj)
            return objs
        except Exception as e:
            self._handle_error(e)

    def get_by_id(self, id: int) -> ModelT | None:
        try:
            return self.db.get(self.model, id)
        except Exception as e:
            self._handle_error(e)

    def require(self, id: int) -> ModelT:
        row = self.get_by_id(id)
        if row is None:
            raise NotFoundError(f"{self.table_name} {id} not found")
        return row

    def get_all(self) -> list[ModelT]:
        try:
            return self._query().order_by(self.model.id).all()
        except Exception as e:
            self._handle_error(e)

    def update(self, id: int, data: dict[str, Any]) -> ModelT:
        self._check_columns(data)
        row = self.require(id)
        try:
            for key, value in data.items():
                setattr(row, key, value)
            self.db.commit()
            self.db.refresh(row)
            return row
        except Exception as e:
            self._handle_error(e)

    def delete(self, id: int) -> None:
        row = self.require(id)
        try:
            self.db.delete(row)
            self.db.commit()
        except Exception as e:
            self._handle_error(e)

    def _order(self, query: Query, sort: str | None) -> Query:
        parsed = parse_sort_param(sort)
        if not parsed:
            return query.order_by(self.model.id)
        name, descending = parsed
        column = self.model.__table__.columns.get(name)
        if column is None:
            raise ServiceError(f"Unknown sort field: {name}", "INVALID_FILTER")
        return query.order_by(column.desc() if descending else column.asc(), self.model.id)

    def filtered_query(self, filters: dict[str, Any] | None = None, search: str | None = None) -> Query:
        query = self._query()
        if filters:
            conditions = build_filter_conditions(filters, fields=self.filter_fields or None)
            query = apply_filters(query, self.model, FilterConfig(conditions=conditions))
        if search:
            query = apply_filters(query, self.model, create_text_search_filter(search, self.search_fields))
        return query

    def list(
        self,
        filters: dict[str, Any] | None = None,
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        sort: str | None = None,
    ) -> tuple[list[ModelT], int]:
        """One page of rows plus the total count before paging."""
        rng = pagination_to_range(page, limit)
        query = self.filtered_query(filters, search)
        try:
            total = query.order_by(None).count()
            rows = self._order(query, sort).offset(rng["from"]).limit(rng["to"] - rng["from"] + 1).all()
            return rows, total
        except ServiceError:
            raise
        except Exception as e:
            self._handle_error(e)
