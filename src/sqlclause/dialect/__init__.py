"""
Dialect factory for placeholder rendering.
"""
from functools import lru_cache

from sqlclause.dialect.base import _DIALECT_REGISTRY, INDEX_TOKEN
from sqlclause.dialect.base import Dialect as Dialect
from sqlclause.dialect.base import register_dialect as register_dialect
from sqlclause.dialect.mssql import SQLServerDialect as SQLServerDialect
from sqlclause.dialect.mysql import MySQLDialect as MySQLDialect
from sqlclause.dialect.postgres import PostgresDialect as PostgresDialect
from sqlclause.dialect.sqlite import SQLiteDialect as SQLiteDialect
from sqlclause.exceptions import UnsupportedDialectError

__all__ = [
    'INDEX_TOKEN',
    'Dialect',
    'register_dialect',
    'get_dialect',
    'get_dialect_class',
    'get_available_dialects',
    'is_supported_dialect',
    'placeholder_template',
]


def _validate_dialect(dialect: str) -> None:
    """Raise UnsupportedDialectError if dialect is not registered."""
    if dialect not in _DIALECT_REGISTRY:
        available = list(_DIALECT_REGISTRY.keys())
        raise UnsupportedDialectError(f'Unsupported dialect: {dialect}. Available: {available}')


@lru_cache(maxsize=8)
def _get_dialect(dialect: str) -> Dialect:
    """Get cached dialect instance for a name."""
    _validate_dialect(dialect)
    return _DIALECT_REGISTRY[dialect](dialect)


def get_dialect(dialect: str) -> Dialect:
    """Get dialect instance for a dialect name.
    """
    return _get_dialect(dialect)


def get_dialect_class(dialect: str) -> type[Dialect]:
    """Get the dialect class for a name without instantiating."""
    _validate_dialect(dialect)
    return _DIALECT_REGISTRY[dialect]


def get_available_dialects() -> list[str]:
    """Return list of registered dialect names."""
    return list(_DIALECT_REGISTRY.keys())


def is_supported_dialect(dialect: str) -> bool:
    """Check if a dialect is supported."""
    return dialect in _DIALECT_REGISTRY


def placeholder_template(dialect: str) -> str:
    """Return the placeholder template for a dialect name.

    Numbered dialects return a template containing `{index}` (`$N`, `@pN`);
    the others return their fixed token (`?`).
    """
    return get_dialect(dialect).placeholder_template
