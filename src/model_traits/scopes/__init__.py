"""Query scopes."""

from model_traits.scopes.uuid_scope import ListQuery, QueryBuilder, UuidScope, is_many

__all__ = ["ListQuery", "QueryBuilder", "UuidScope", "is_many"]
