"""Shared fixtures."""

from __future__ import annotations

import pytest

from model_traits.config.settings import Settings
from model_traits.queue import MemoryQueue, set_default_queue
from model_traits.session import MemorySessionStore, set_default_session


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        uuid_column="uuid",
        default_queue="testing",
        queue_max_attempts=1,
        queue_progress=False,
        log_level="DEBUG",
        log_file=None,
    )


@pytest.fixture()
def queue(settings: Settings) -> MemoryQueue:
    queue = MemoryQueue(settings=settings)
    set_default_queue(queue)
    yield queue
    set_default_queue(None)


@pytest.fixture()
def session() -> MemorySessionStore:
    store = MemorySessionStore()
    set_default_session(store)
    yield store
    set_default_session(None)
