"""Session store contract and the ``SavesToSession`` mixin."""

from __future__ import annotations

import json
from functools import lru_cache
from threading import RLock
from typing import Any, Protocol, runtime_checkable

from loguru import logger
from pydantic import BaseModel

from model_traits.exceptions import ConfigurationError


@runtime_checkable
class SessionStore(Protocol):
    """Anything that can keep a value under a key."""

    def put(self, key: str, value: Any) -> None: ...


class MemorySessionStore:
    """Dict-backed session store."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._values: dict[str, Any] = {}

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def forget(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)

    def all(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._values)


_session_override: SessionStore | None = None


@lru_cache()
def _memory_session() -> MemorySessionStore:
    return MemorySessionStore()


def get_default_session() -> SessionStore:
    """Store used when the host is not handed one explicitly."""
    if _session_override is not None:
        return _session_override
    return _memory_session()


def set_default_session(session: SessionStore | None) -> None:
    """Swap the default store; ``None`` resets it to a fresh in-memory one."""
    global _session_override
    _session_override = session
    if session is None:
        _memory_session.cache_clear()


def serialize_for_session(value: Any) -> Any:
    """Turn an object into what gets stored in the session.

    Capabilities are probed in order: JSON conversion (``to_json()`` or a
    pydantic model), JSON-serializable data (``json_serialize()``), HTML
    rendering (``__html__()`` or ``to_html()``), a custom ``__str__``.
    Objects with none of these are stored as they are.
    """
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return to_json()
    if isinstance(value, BaseModel):
        return value.model_dump_json()

    json_serialize = getattr(value, "json_serialize", None)
    if callable(json_serialize):
        return json.dumps(json_serialize(), separators=(",", ":"), ensure_ascii=False)

    for name in ("__html__", "to_html"):
        render = getattr(value, name, None)
        if callable(render):
            return render()

    if type(value).__str__ is not object.__str__:
        return str(value)

    return value


class SavesToSession:
    """Adds ``save_to_session()`` to a host class.

    Hooks:

    - ``default_session_key()`` names the key used when none is passed;
    - ``to_session()`` returns the value to store;
    - ``session_store()`` returns the store to write to.
    """

    def default_session_key(self) -> str | None:
        return None

    def to_session(self) -> Any:
        return serialize_for_session(self)

    def session_store(self) -> SessionStore:
        return get_default_session()

    def save_to_session(self, key: str | None = None, session: SessionStore | None = None) -> None:
        """Store this object in the session.

        Raises:
            ConfigurationError: If no key is passed and the host has no
                ``default_session_key()``.
        """
        key = key or self.default_session_key()
        if not key:
            raise ConfigurationError(
                f"{type(self).__name__} has no session key: pass one or implement default_session_key()."
            )

        (session if session is not None else self.session_store()).put(key, self.to_session())
        logger.debug("Saved {} to session key '{}'", type(self).__name__, key)
