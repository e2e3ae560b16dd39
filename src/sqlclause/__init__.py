"""
SQL clause fragments from declarative record schemas.

Supports PostgreSQL, MySQL/MariaDB, SQLite, and SQL Server placeholders.

All clause operations can be called either as:
- Module functions: sqlclause.where(schema, options, record)
- SchemaBinding methods: binding.where(record)

The module functions resolve the schema on every call; bind() once and reuse
the binding when rendering many records.
"""
__version__ = '0.1.0'

from typing import Any

from sqlclause.binding import SchemaBinding, bind
from sqlclause.dialect import get_available_dialects, placeholder_template
from sqlclause.directives import AsWhere, ClauseKind, Condition, ConditionAll
from sqlclause.directives import Ignore, IgnoreNone, IgnoreSet, Index, Rename
from sqlclause.directives import Value
from sqlclause.exceptions import ClauseError, ConfigError
from sqlclause.exceptions import DirectiveConflictError, MissingConditionError
from sqlclause.exceptions import TemplateError, UnsupportedDialectError
from sqlclause.generators import generate_fields, generate_select
from sqlclause.generators import generate_set, generate_set_where
from sqlclause.generators import generate_values, generate_where
from sqlclause.generators import last_param_index
from sqlclause.index import IndexAllocator
from sqlclause.options import ClauseOptions
from sqlclause.schema import FieldDescriptor, SchemaDescriptor, column
from sqlclause.schema import describe


def fields(schema: SchemaDescriptor | type) -> list[str]:
    """Column names of a schema.
    """
    return generate_fields(schema)


def select(schema: SchemaDescriptor | type) -> list[str]:
    """Select-list expressions of a schema.
    """
    return generate_select(schema)


def values(schema: SchemaDescriptor | type, options: ClauseOptions,
           **kwargs: Any) -> list[str]:
    """VALUES placeholders or literals of a schema.
    """
    return generate_values(schema, options, **kwargs)


def where(schema: SchemaDescriptor | type, options: ClauseOptions, record: Any,
          **kwargs: Any) -> list[str]:
    """WHERE predicates for a record.
    """
    return generate_where(schema, options, record, **kwargs)


def set_clause(schema: SchemaDescriptor | type, options: ClauseOptions, record: Any,
               **kwargs: Any) -> list[str]:
    """SET assignments for a record.
    """
    return generate_set(schema, options, record, **kwargs)


def set_where(schema: SchemaDescriptor | type, options: ClauseOptions, record: Any,
              **kwargs: Any) -> tuple[list[str], list[str]]:
    """SET assignments and redirected WHERE predicates for a record.

    Where placeholders continue numbering after the Set placeholders.
    """
    return generate_set_where(schema, options, record, **kwargs)


__all__ = [
    'bind',
    'SchemaBinding',
    'ClauseOptions',
    'SchemaDescriptor',
    'FieldDescriptor',
    'column',
    'describe',
    'ClauseKind',
    'Ignore',
    'Rename',
    'Condition',
    'ConditionAll',
    'Value',
    'Index',
    'IgnoreNone',
    'AsWhere',
    'IgnoreSet',
    'IndexAllocator',
    'placeholder_template',
    'get_available_dialects',
    'fields',
    'select',
    'values',
    'where',
    'set_clause',
    'set_where',
    'last_param_index',
    'generate_fields',
    'generate_select',
    'generate_values',
    'generate_where',
    'generate_set',
    'generate_set_where',
    'ClauseError',
    'ConfigError',
    'UnsupportedDialectError',
    'DirectiveConflictError',
    'TemplateError',
    'MissingConditionError',
]
