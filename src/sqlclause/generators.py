"""
Clause generators.

One generator per clause kind. Each resolves the schema for its clause (see
`sqlclause.resolve`) and renders the resulting instructions in declaration
order:

    generate_fields(schema)                      -> ['id', 'user_name']
    generate_select(schema)                      -> ['id', 'now() as ts']
    generate_values(schema, options)             -> ['$1', '$2']
    generate_where(schema, options, record)      -> ['id = $1', 'age > $2']
    generate_set(schema, options, record)        -> ['name = $1']
    generate_set_where(schema, options, record)  -> (['name = $1'], ['id = $2'])

Fields, Select and Values describe the type and need no record. Where and Set
read the record to drop optional fields whose value is absent; that check
runs before an index is drawn, so a dropped field never leaves a gap in the
numbering.

The index-bearing generators take either a `start` override or a caller-owned
IndexAllocator (to keep numbering across several clauses and read the final
index back). Each call either returns its complete list or raises; a failed
call leaves a caller-owned allocator where it found it.
"""
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlclause.dialect import Dialect
from sqlclause.directives import ClauseKind
from sqlclause.exceptions import ClauseError, ConfigError
from sqlclause.index import IndexAllocator
from sqlclause.options import ClauseOptions
from sqlclause.resolve import Instruction, SetPlan, resolve_schema
from sqlclause.resolve import resolve_set_schema
from sqlclause.schema import SchemaDescriptor, as_schema
from sqlclause.template import check_condition, render

logger = logging.getLogger(__name__)

__all__ = [
    'record_value',
    'is_present',
    'make_allocator',
    'render_names',
    'render_clause',
    'render_set_where',
    'generate_fields',
    'generate_select',
    'generate_values',
    'generate_where',
    'generate_set',
    'generate_set_where',
    'last_param_index',
]


def record_value(record: Any, name: str) -> Any:
    """Read a field value from a record object or mapping.

    Missing attributes and keys read as None.
    """
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def is_present(record: Any, name: str) -> bool:
    """Check whether a record holds a value for a field."""
    return record_value(record, name) is not None


def make_allocator(options: ClauseOptions, allocator: IndexAllocator | None = None,
                   start: int | None = None) -> IndexAllocator:
    """Return the caller's allocator or a fresh one seeded from options.

    `start` overrides `options.index` for this call.
    """
    if allocator is not None:
        if start is not None:
            raise ConfigError('Pass either an allocator or a start index, not both')
        return allocator
    return IndexAllocator(options.index if start is None else start)


def _placeholder(instruction: Instruction, dialect: Dialect,
                 allocator: IndexAllocator) -> str | None:
    """Text filling `{index}`: literal, fixed placeholder, or next counter value."""
    if instruction.literal is not None:
        return instruction.literal
    if instruction.fixed_index is not None:
        return dialect.render_placeholder(instruction.fixed_index)
    if instruction.consumes:
        return dialect.render_placeholder(allocator.next())
    return None


def render_names(instructions: Iterable[Instruction]) -> list[str]:
    """Render Fields/Select instructions (no index, no record)."""
    return [render(i.template, field=i.field, name=i.name) for i in instructions]


def render_clause(instructions: Iterable[Instruction], dialect: Dialect,
                  allocator: IndexAllocator, record: Any = None) -> list[str]:
    """Render index-bearing instructions against one allocator.

    Instructions that check presence are dropped, without drawing an index,
    when the record holds no value for them.
    """
    snapshot = allocator.current
    fragments = []
    try:
        for instruction in instructions:
            if instruction.checks_presence and not is_present(record, instruction.field):
                logger.debug(f'Skipping absent optional field {instruction.field!r}')
                continue
            check_condition(instruction.template, instruction.field, instruction.condition)
            index = _placeholder(instruction, dialect, allocator)
            fragments.append(render(instruction.template, field=instruction.field,
                                    name=instruction.name, condition=instruction.condition,
                                    index=index))
    except ClauseError:
        allocator.current = snapshot
        raise
    return fragments


def render_set_where(plan: SetPlan, dialect: Dialect, allocator: IndexAllocator,
                     record: Any) -> tuple[list[str], list[str]]:
    """Render Set fragments, then redirected Where fragments, on one allocator.
    """
    snapshot = allocator.current
    try:
        set_fragments = render_clause(plan.set_part, dialect, allocator, record)
        where_fragments = render_clause(plan.where_part, dialect, allocator, record)
    except ClauseError:
        allocator.current = snapshot
        raise
    return set_fragments, where_fragments


def _require_record(kind: ClauseKind, record: Any) -> None:
    if record is None:
        raise ConfigError(f'{kind.value} clauses require a record instance')


def generate_fields(schema: SchemaDescriptor | type) -> list[str]:
    """Column names for INSERT or RETURNING lists.
    """
    schema = as_schema(schema)
    return render_names(resolve_schema(schema, ClauseKind.FIELDS))


def generate_select(schema: SchemaDescriptor | type) -> list[str]:
    """Select-list expressions; a rename may be any SQL expression.
    """
    schema = as_schema(schema)
    return render_names(resolve_schema(schema, ClauseKind.SELECT))


def generate_values(schema: SchemaDescriptor | type, options: ClauseOptions,
                    allocator: IndexAllocator | None = None,
                    start: int | None = None) -> list[str]:
    """Placeholders (or literals) for a VALUES list.
    """
    schema = as_schema(schema)
    allocator = make_allocator(options, allocator, start)
    fragments = render_clause(resolve_schema(schema, ClauseKind.VALUES, options),
                              options.dialect, allocator)
    logger.debug(f'values for {schema.name}: {len(fragments)} fragments, last index {allocator.last}')
    return fragments


def last_param_index(schema: SchemaDescriptor | type, options: ClauseOptions,
                     start: int | None = None) -> int:
    """Last index consumed by the VALUES list (`start - 1` when none)."""
    allocator = make_allocator(options, start=start)
    generate_values(schema, options, allocator=allocator)
    return allocator.last


def generate_where(schema: SchemaDescriptor | type, options: ClauseOptions, record: Any,
                   allocator: IndexAllocator | None = None,
                   start: int | None = None) -> list[str]:
    """WHERE predicates for one record, to be joined with `' AND '`.
    """
    _require_record(ClauseKind.WHERE, record)
    schema = as_schema(schema)
    allocator = make_allocator(options, allocator, start)
    return render_clause(resolve_schema(schema, ClauseKind.WHERE, options),
                         options.dialect, allocator, record)


def generate_set(schema: SchemaDescriptor | type, options: ClauseOptions, record: Any,
                 allocator: IndexAllocator | None = None,
                 start: int | None = None) -> list[str]:
    """SET assignments for one record, to be joined with `', '`.

    Fields redirected with AsWhere are left out; see generate_set_where().
    """
    _require_record(ClauseKind.SET, record)
    schema = as_schema(schema)
    allocator = make_allocator(options, allocator, start)
    plan = resolve_set_schema(schema, options)
    return render_clause(plan.set_part, options.dialect, allocator, record)


def generate_set_where(schema: SchemaDescriptor | type, options: ClauseOptions, record: Any,
                       allocator: IndexAllocator | None = None,
                       start: int | None = None) -> tuple[list[str], list[str]]:
    """SET assignments and redirected WHERE predicates of one UPDATE.

    Where placeholders continue numbering where Set left off.

    Returns
        (set_fragments, where_fragments)
    """
    _require_record(ClauseKind.SET, record)
    schema = as_schema(schema)
    allocator = make_allocator(options, allocator, start)
    return render_set_where(resolve_set_schema(schema, options), options.dialect, allocator, record)
