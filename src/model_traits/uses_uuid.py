"""Mixin for models identified by a UUID column."""

from __future__ import annotations

from typing import Any, ClassVar, Iterable
from uuid import uuid4

from model_traits.config import Settings, get_settings
from model_traits.scopes.uuid_scope import ListQuery, UuidScope


class UsesUuid:
    """Gives a model a UUID column and a ``UuidScope`` query entry point."""

    table: ClassVar[str | None] = None
    uuid_column: ClassVar[str | None] = None

    @classmethod
    def get_uuid_column(cls, settings: Settings | None = None) -> str:
        """Unqualified UUID column name.

        The ``uuid_column`` class attribute wins over ``settings.uuid_column``.
        """
        return cls.uuid_column or (settings or get_settings()).uuid_column

    @classmethod
    def qualified_uuid_column(cls, settings: Settings | None = None) -> str:
        """UUID column prefixed with the table name when the model has one."""
        column = cls.get_uuid_column(settings)
        return f"{cls.table}.{column}" if cls.table else column

    @classmethod
    def query(cls, rows: Iterable[Any] = (), settings: Settings | None = None) -> UuidScope:
        """UUID scope over an in-memory set of rows."""
        return UuidScope(ListQuery(cls, rows), settings=settings)

    def ensure_uuid(self) -> str:
        """Assign a random UUID when the model has none yet and return it."""
        column = self.get_uuid_column()
        value = getattr(self, column, None)
        if not value:
            value = str(uuid4())
            setattr(self, column, value)
        return value
