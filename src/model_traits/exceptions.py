"""Exceptions raised by the traits."""

from __future__ import annotations

from typing import Any, Sequence


class ModelTraitsError(Exception):
    """Base class for all library errors."""


class ModelNotFoundError(ModelTraitsError, LookupError):
    """Raised when a lookup by identifier does not return every requested model."""

    def __init__(self, model: type, ids: Any | Sequence[Any] = ()) -> None:
        self.model = model
        if isinstance(ids, (list, tuple, set, frozenset)):
            self.ids = list(ids)
        else:
            self.ids = [ids]
        message = f"No query results for model [{model.__name__}]"
        if self.ids:
            message += " " + ", ".join(str(item) for item in self.ids)
        super().__init__(message)


class ConfigurationError(ModelTraitsError, RuntimeError):
    """Raised when a trait is used without the configuration it needs."""
