"""
Per-field directive model.

A directive is one attribute telling the engine how a field appears in one
clause kind. A field carries at most one *directive set* per clause kind: a
tuple of directive attributes such as ``(Rename('id'), Condition('>='))``. An
empty set means "directive present, all defaults", which differs from having
no set at all for the Where and Set clauses.

Recognized attributes per clause kind:

    fields, select  Ignore, Rename
    values          Ignore, Index, Value
    where           Ignore, IgnoreNone, ConditionAll, Rename, Condition,
                    Value, Index
    set             Ignore, IgnoreNone, AsWhere, IgnoreSet, Rename,
                    Condition, Value, Index
"""
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlclause.exceptions import ConfigError, DirectiveConflictError

__all__ = [
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
    'Directive',
    'DirectiveSet',
    'RECOGNIZED',
    'normalize_directives',
    'merge_directives',
]


class ClauseKind(Enum):
    """Kinds of SQL fragment the engine produces."""
    FIELDS = 'fields'
    SELECT = 'select'
    VALUES = 'values'
    WHERE = 'where'
    SET = 'set'

    @classmethod
    def coerce(cls, kind: 'ClauseKind | str') -> 'ClauseKind':
        """Accept a ClauseKind or its name ('where', 'set', ...)."""
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind).lower())
        except ValueError:
            available = [k.value for k in cls]
            raise ConfigError(f'Unknown clause kind: {kind}. Available: {available}') from None


@dataclass(frozen=True, slots=True)
class Ignore:
    """Leave the field out of the clause."""


@dataclass(frozen=True, slots=True)
class Rename:
    """Use `name` instead of the field name (may be any SQL expression)."""
    name: str


@dataclass(frozen=True, slots=True)
class Condition:
    """Comparison operator substituted for `{condition}`."""
    op: str


@dataclass(frozen=True, slots=True)
class ConditionAll:
    """Full fragment template replacing the default one."""
    template: str


@dataclass(frozen=True, slots=True)
class Value:
    """Literal SQL text used instead of a placeholder, inserted verbatim."""
    literal: str


@dataclass(frozen=True, slots=True)
class Index:
    """Fixed parameter numeral; does not advance the shared counter."""
    fixed: int

    def __post_init__(self):
        if isinstance(self.fixed, bool) or not isinstance(self.fixed, int) or self.fixed < 1:
            raise ConfigError(f'Index must be an integer >= 1 (not {self.fixed!r})')


@dataclass(frozen=True, slots=True)
class IgnoreNone:
    """Per-field override of the schema-wide `ignore_none` option."""
    flag: bool = True


@dataclass(frozen=True, slots=True)
class AsWhere:
    """Move a Set field into the WHERE part of the combined Set+Where call.

    Without a template the field leaves SET and renders with the default
    predicate `{name} {condition} {index}`. With a template the field stays
    in SET as well, unless the `ignore_set_and_where_conflict` option is set.
    """
    template: str | None = None


@dataclass(frozen=True, slots=True)
class IgnoreSet:
    """Leave the field out of SET only (an `AsWhere` still applies)."""


Directive = Ignore | Rename | Condition | ConditionAll | Value | Index | IgnoreNone | AsWhere | IgnoreSet

_DIRECTIVE_TYPES = (Ignore, Rename, Condition, ConditionAll, Value, Index, IgnoreNone, AsWhere, IgnoreSet)

# Directives constructible without arguments, accepted as bare classes
_BARE_DIRECTIVES = (Ignore, IgnoreSet, IgnoreNone, AsWhere)

RECOGNIZED: dict[ClauseKind, frozenset[type]] = {
    ClauseKind.FIELDS: frozenset({Ignore, Rename}),
    ClauseKind.SELECT: frozenset({Ignore, Rename}),
    ClauseKind.VALUES: frozenset({Ignore, Index, Value}),
    ClauseKind.WHERE: frozenset({Ignore, IgnoreNone, ConditionAll, Rename, Condition, Value, Index}),
    ClauseKind.SET: frozenset({Ignore, IgnoreNone, AsWhere, IgnoreSet, Rename, Condition, Value, Index}),
}


@dataclass(frozen=True, slots=True)
class DirectiveSet:
    """Merged directive attributes of one field for one clause kind.

    Unset attributes are None (or False for the flag-only directives).
    """
    ignore: bool = False
    rename: str | None = None
    condition: str | None = None
    condition_all: str | None = None
    value: str | None = None
    index: int | None = None
    ignore_none: bool | None = None
    as_where: AsWhere | None = None
    ignore_set: bool = False


def _instantiate(cls: type) -> Directive:
    if cls not in _BARE_DIRECTIVES:
        raise ConfigError(f'{cls.__name__} needs an argument')
    return cls()


def normalize_directives(directives: Any) -> tuple[Directive, ...]:
    """Turn a single directive or an iterable of directives into a tuple.

    Directive classes are accepted for the attribute-less variants, so
    `Ignore` and `Ignore()` are equivalent.
    """
    if directives is None:
        return ()
    if isinstance(directives, type) and directives in _DIRECTIVE_TYPES:
        directives = _instantiate(directives)
    if isinstance(directives, _DIRECTIVE_TYPES):
        return (directives,)
    if isinstance(directives, (str, bytes)) or not isinstance(directives, Iterable):
        raise ConfigError(f'Expected a directive or iterable of directives (not {directives!r})')
    items = []
    for directive in directives:
        if isinstance(directive, type) and directive in _DIRECTIVE_TYPES:
            directive = _instantiate(directive)
        if not isinstance(directive, _DIRECTIVE_TYPES):
            raise ConfigError(f'Not a directive: {directive!r}')
        items.append(directive)
    return tuple(items)


def merge_directives(field: str, kind: ClauseKind, directives: Iterable[Directive]) -> DirectiveSet:
    """Merge the directive attributes of one field for one clause kind.

    Repeating an attribute with the same value is harmless. Repeating it with
    a different value leaves two same-priority choices and raises
    DirectiveConflictError rather than guessing.
    """
    recognized = RECOGNIZED[kind]
    seen: dict[type, Directive] = {}
    for directive in directives:
        dtype = type(directive)
        if dtype not in recognized:
            raise ConfigError(
                f'{dtype.__name__} is not recognized for {kind.value} clauses '
                f'(field {field!r})')
        if dtype in seen and seen[dtype] != directive:
            raise DirectiveConflictError(field, kind.value, f'{seen[dtype]!r} conflicts with {directive!r}')
        seen[dtype] = directive

    return DirectiveSet(
        ignore=Ignore in seen,
        rename=seen[Rename].name if Rename in seen else None,
        condition=seen[Condition].op if Condition in seen else None,
        condition_all=seen[ConditionAll].template if ConditionAll in seen else None,
        value=seen[Value].literal if Value in seen else None,
        index=seen[Index].fixed if Index in seen else None,
        ignore_none=seen[IgnoreNone].flag if IgnoreNone in seen else None,
        as_where=seen.get(AsWhere),
        ignore_set=IgnoreSet in seen,
        )
