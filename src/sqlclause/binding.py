"""
Schema binding: resolve once, render many.

This module provides:
1. The `bind()` function validating options and resolving a schema for every
   clause kind up front
2. The `SchemaBinding` class rendering clauses for any number of records

SchemaBinding methods:
- fields() - Column names
- select() - Select-list expressions
- values() - VALUES placeholders
- where(record) - WHERE predicates
- set(record) - SET assignments
- set_where(record) - SET assignments plus redirected WHERE predicates
- last_param_index() - Last index consumed by values()

Every directive error (unknown directive for a clause, conflicting
directives, bad options) surfaces from bind(), before any clause is rendered.
"""
import logging
from dataclasses import replace
from typing import Any

from sqlclause.directives import ClauseKind
from sqlclause.exceptions import ConfigError
from sqlclause.generators import make_allocator, render_clause, render_names
from sqlclause.generators import render_set_where
from sqlclause.index import IndexAllocator
from sqlclause.options import ClauseOptions, load_clause_options
from sqlclause.resolve import resolve_schema, resolve_set_schema
from sqlclause.schema import SchemaDescriptor, as_schema

__all__ = [
    'SchemaBinding',
    'bind',
]

logger = logging.getLogger(__name__)


def _require_record(record: Any) -> None:
    if record is None:
        raise ConfigError('where and set clauses require a record instance')


class SchemaBinding:
    """A schema resolved against one set of options.

    Holds only frozen data, so one binding can serve concurrent callers.
    """

    def __init__(self, schema: SchemaDescriptor, options: ClauseOptions) -> None:
        self.schema = schema
        self.options = options
        self.dialect = options.dialect
        self._fields = resolve_schema(schema, ClauseKind.FIELDS, options)
        self._select = resolve_schema(schema, ClauseKind.SELECT, options)
        self._values = resolve_schema(schema, ClauseKind.VALUES, options)
        self._where = resolve_schema(schema, ClauseKind.WHERE, options)
        self._set = resolve_set_schema(schema, options)
        logger.debug(f'Bound {schema.name or "schema"} ({len(schema)} fields) for {options.database}')

    def __repr__(self) -> str:
        return f'SchemaBinding({self.schema.name!r}, database={self.options.database!r})'

    def fields(self) -> list[str]:
        """Column names for INSERT or RETURNING lists.
        """
        return render_names(self._fields)

    def select(self) -> list[str]:
        """Select-list expressions.
        """
        return render_names(self._select)

    def values(self, allocator: IndexAllocator | None = None,
               start: int | None = None) -> list[str]:
        """VALUES placeholders or literals.
        """
        allocator = make_allocator(self.options, allocator, start)
        return render_clause(self._values, self.dialect, allocator)

    def last_param_index(self, start: int | None = None) -> int:
        """Last index consumed by values().
        """
        allocator = make_allocator(self.options, start=start)
        self.values(allocator=allocator)
        return allocator.last

    def where(self, record: Any, allocator: IndexAllocator | None = None,
              start: int | None = None) -> list[str]:
        """WHERE predicates for a record.
        """
        _require_record(record)
        allocator = make_allocator(self.options, allocator, start)
        return render_clause(self._where, self.dialect, allocator, record)

    def set(self, record: Any, allocator: IndexAllocator | None = None,
            start: int | None = None) -> list[str]:
        """SET assignments for a record.
        """
        _require_record(record)
        allocator = make_allocator(self.options, allocator, start)
        return render_clause(self._set.set_part, self.dialect, allocator, record)

    def set_where(self, record: Any, allocator: IndexAllocator | None = None,
                  start: int | None = None) -> tuple[list[str], list[str]]:
        """SET assignments, then redirected WHERE predicates, on one counter.
        """
        _require_record(record)
        allocator = make_allocator(self.options, allocator, start)
        return render_set_where(self._set, self.dialect, allocator, record)


def bind(schema: SchemaDescriptor | type, options: ClauseOptions | dict[str, Any] | str,
         config: Any | None = None, **kw: Any) -> SchemaBinding:
    """Bind a schema (or dataclass type) to clause options.

    Args:
        schema: SchemaDescriptor, or a dataclass type to describe
        options: Can be:
                - ClauseOptions object
                - String name of a config section
                - Dictionary of options
        config: Configuration object (for loading from config files)
        **kw: Additional keyword arguments to override options

    Returns
        SchemaBinding rendering clauses for that schema
    """
    if isinstance(options, ClauseOptions):
        if kw:
            options = replace(options, **kw)
    else:
        options = load_clause_options(options, config, **kw)

    return SchemaBinding(as_schema(schema), options)
