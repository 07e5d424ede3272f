"""UUID lookups on top of a query builder.

``UuidScope`` wraps any object following the ``QueryBuilder`` protocol and
adds find/filter helpers keyed on the model's UUID column. It only ever
calls the builder primitives, so it works with any backend that exposes
them. ``ListQuery`` is a small in-memory builder over model instances.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, Sequence, runtime_checkable

from loguru import logger

from model_traits.config import Settings, get_settings
from model_traits.exceptions import ModelNotFoundError


@runtime_checkable
class QueryBuilder(Protocol):
    """Primitives the scope relies on."""

    model: type

    def where_equals(self, column: str, value: Any) -> QueryBuilder: ...

    def where_not_equals(self, column: str, value: Any) -> QueryBuilder: ...

    def where_in(self, column: str, values: Sequence[Any]) -> QueryBuilder: ...

    def where_not_in(self, column: str, values: Sequence[Any]) -> QueryBuilder: ...

    def first(self) -> Any | None: ...

    def all(self) -> list[Any]: ...

    def new_model_instance(self) -> Any: ...


def is_many(value: Any) -> bool:
    """True for collections of identifiers, False for a single identifier."""
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes))


class ListQuery:
    """Immutable in-memory query builder over a list of model instances."""

    def __init__(self, model: type, rows: Iterable[Any] = ()) -> None:
        self.model = model
        self.rows = list(rows)

    def where_equals(self, column: str, value: Any) -> ListQuery:
        return self._filter(column, lambda field: field == value)

    def where_not_equals(self, column: str, value: Any) -> ListQuery:
        return self._filter(column, lambda field: field != value)

    def where_in(self, column: str, values: Sequence[Any]) -> ListQuery:
        allowed = list(values)
        return self._filter(column, lambda field: field in allowed)

    def where_not_in(self, column: str, values: Sequence[Any]) -> ListQuery:
        excluded = list(values)
        return self._filter(column, lambda field: field not in excluded)

    def first(self) -> Any | None:
        return self.rows[0] if self.rows else None

    def all(self) -> list[Any]:
        return list(self.rows)

    def new_model_instance(self) -> Any:
        return self.model()

    def _filter(self, column: str, predicate) -> ListQuery:
        # "table.column" -> "column"
        attribute = column.rsplit(".", 1)[-1]
        matched = [row for row in self.rows if predicate(getattr(row, attribute, None))]
        return ListQuery(self.model, matched)


class UuidScope:
    """UUID find and filter helpers for a query builder."""

    def __init__(self, builder: QueryBuilder, settings: Settings | None = None) -> None:
        self.builder = builder
        self.settings = settings or get_settings()

    @property
    def model(self) -> type:
        return self.builder.model

    def uuid_column(self) -> str:
        """Column to filter on, qualified by the model when it knows how.

        Models may define ``qualified_uuid_column(settings)``; it receives
        this scope's settings.
        """
        qualify = getattr(self.model, "qualified_uuid_column", None)
        if callable(qualify):
            return qualify(self.settings)
        return self.settings.uuid_column

    def where_uuid(self, uuid: Any) -> UuidScope:
        """Restrict the query to one UUID or a collection of them."""
        column = self.uuid_column()
        if is_many(uuid):
            return self._scoped(self.builder.where_in(column, list(uuid)))
        return self._scoped(self.builder.where_equals(column, uuid))

    def where_uuid_not(self, uuid: Any) -> UuidScope:
        """Exclude one UUID or a collection of them."""
        column = self.uuid_column()
        if is_many(uuid):
            return self._scoped(self.builder.where_not_in(column, list(uuid)))
        return self._scoped(self.builder.where_not_equals(column, uuid))

    def find_uuid(self, uuid: Any) -> Any:
        """Find a model by UUID; a collection of UUIDs returns a list."""
        if is_many(uuid):
            return self.find_many_uuid(uuid)
        return self.where_uuid(uuid).first()

    def find_many_uuid(self, uuids: Iterable[Any]) -> list[Any]:
        """Find every model matching the UUIDs; missing ones are left out."""
        uuids = list(uuids)
        if not uuids:
            return []
        return self.where_uuid(uuids).all()

    def find_uuid_or_fail(self, uuid: Any) -> Any:
        """Like ``find_uuid`` but raise when anything requested is missing.

        For a collection the lookup succeeds when the number of results
        matches the number of distinct UUIDs requested.

        Raises:
            ModelNotFoundError: If the lookup came back short.
        """
        if is_many(uuid):
            uuid = list(uuid)
            result = self.find_many_uuid(uuid)
            if len(result) == len(set(uuid)):
                return result
        else:
            result = self.find_uuid(uuid)
            if result is not None:
                return result

        logger.debug("UUID lookup on {} came back short for {}", self.model.__name__, uuid)
        raise ModelNotFoundError(self.model, uuid)

    def find_uuid_or_new(self, uuid: Any) -> Any:
        """Find a model by UUID or return a fresh, unsaved instance."""
        model = self.find_uuid(uuid)
        if model is not None:
            return model
        return self.builder.new_model_instance()

    def first(self) -> Any | None:
        return self.builder.first()

    def all(self) -> list[Any]:
        return self.builder.all()

    def _scoped(self, builder: QueryBuilder) -> UuidScope:
        return UuidScope(builder, settings=self.settings)
