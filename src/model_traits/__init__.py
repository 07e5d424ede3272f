"""Reusable behaviors for application model classes.

Example:
    >>> from model_traits import PipesThrough, SavesToSession
    >>>
    >>> class Order(PipesThrough, SavesToSession):
    ...     def __str__(self):
    ...         return "order"
    >>>
    >>> order = Order().pipe(lambda order, next: next(order))
    >>> order.save_to_session("last_order")
"""

__version__ = "0.1.0"

# Public API exports
from model_traits.config import Settings, get_settings
from model_traits.exceptions import ConfigurationError, ModelNotFoundError, ModelTraitsError
from model_traits.pipeline import DispatchablePipeline, Pipeline, PipesThrough, run_pipeline
from model_traits.queue import (
    DispatchReceipt,
    FailedJob,
    MemoryQueue,
    TaskQueue,
    get_default_queue,
    set_default_queue,
)
from model_traits.scopes import ListQuery, QueryBuilder, UuidScope
from model_traits.session import (
    MemorySessionStore,
    SavesToSession,
    SessionStore,
    get_default_session,
    set_default_session,
)
from model_traits.uses_uuid import UsesUuid

__all__ = [
    # Pipelines
    "Pipeline",
    "PipesThrough",
    "DispatchablePipeline",
    "run_pipeline",
    # Queue
    "TaskQueue",
    "MemoryQueue",
    "DispatchReceipt",
    "FailedJob",
    "get_default_queue",
    "set_default_queue",
    # UUID lookups
    "QueryBuilder",
    "ListQuery",
    "UuidScope",
    "UsesUuid",
    # Session
    "SessionStore",
    "MemorySessionStore",
    "SavesToSession",
    "get_default_session",
    "set_default_session",
    # Errors
    "ModelTraitsError",
    "ModelNotFoundError",
    "ConfigurationError",
    # Configuration
    "Settings",
    "get_settings",
    # Version
    "__version__",
]
