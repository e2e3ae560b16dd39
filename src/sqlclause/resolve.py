"""
Directive priority resolution.

Each clause kind resolves a field's directive set through an ordered chain of
rules, highest priority first:

    fields, select  ignore > rename > field name
    values          ignore > index > value > next counter value
    where           ignore > ignore_none > condition_all
                    > rename, condition, value > index
    set             ignore > ignore_none > as_where, ignore_set
                    > rename, condition, value > index

A rule either ends the chain (the field is suppressed) or refines the draft
instruction and passes it on. Where two rules compete for the same slot
(`index` and `value` both decide what fills `{index}`), the earlier rule wins
and the later one is logged as shadowed.

Resolution only reads the schema and the options; deciding whether an absent
optional value suppresses a fragment is left to generation time.
"""
import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlclause.directives import ClauseKind, DirectiveSet, merge_directives
from sqlclause.exceptions import ConfigError
from sqlclause.options import ClauseOptions
from sqlclause.schema import FieldDescriptor, SchemaDescriptor
from sqlclause.template import DEFAULT_SET_TEMPLATE, DEFAULT_WHERE_TEMPLATE
from sqlclause.template import INDEX, NAME, has_token

logger = logging.getLogger(__name__)

__all__ = [
    'DEFAULT_CONDITION',
    'Instruction',
    'SetPlan',
    'resolve_field',
    'resolve_set_field',
    'resolve_schema',
    'resolve_set_schema',
]

DEFAULT_CONDITION = '='


@dataclass(frozen=True, slots=True)
class Instruction:
    """Effective instruction for one field in one clause.

    `template` still holds its tokens; `literal` or `fixed_index`, when set,
    decide what fills `{index}` instead of the shared counter.
    """
    field: str
    template: str
    name: str
    condition: str | None = DEFAULT_CONDITION
    literal: str | None = None
    fixed_index: int | None = None
    optional: bool = False
    ignore_none: bool = False

    @property
    def consumes(self) -> bool:
        """Whether rendering draws the next value from the shared counter."""
        return self.literal is None and self.fixed_index is None and has_token(self.template, INDEX)

    @property
    def checks_presence(self) -> bool:
        """Whether an absent value suppresses this fragment at generation time."""
        return self.optional and self.ignore_none


@dataclass(frozen=True, slots=True)
class SetPlan:
    """Resolved Set fields and the fields redirected into WHERE."""
    set_part: tuple[Instruction, ...]
    where_part: tuple[Instruction, ...]


@dataclass(slots=True)
class _Draft:
    field: FieldDescriptor
    kind: ClauseKind
    directives: DirectiveSet
    options: ClauseOptions | None
    template: str
    name: str
    condition: str | None = DEFAULT_CONDITION
    literal: str | None = None
    fixed_index: int | None = None
    ignore_none: bool = False
    in_set: bool = True
    where_template: str | None = None

    def instruction(self, template: str | None = None) -> Instruction:
        return Instruction(
            field=self.field.name,
            template=template or self.template,
            name=self.name,
            condition=self.condition,
            literal=self.literal,
            fixed_index=self.fixed_index,
            optional=self.field.optional,
            ignore_none=self.ignore_none,
            )


Rule = Callable[[_Draft], bool]


def _set_attributes(directives: DirectiveSet) -> list[str]:
    defaults = DirectiveSet()
    return [f.name for f in dataclasses.fields(directives)
            if getattr(directives, f.name) != getattr(defaults, f.name)]


def _shadowed(draft: _Draft, winner: str, loser: str) -> None:
    logger.debug(f'{draft.kind.value}: {winner} shadows {loser} on field {draft.field.name!r}')


def _ignore(draft: _Draft) -> bool:
    if not draft.directives.ignore:
        return False
    for attribute in _set_attributes(draft.directives):
        if attribute != 'ignore':
            _shadowed(draft, 'ignore', attribute)
    return True


def _ignore_none(draft: _Draft) -> bool:
    if draft.directives.ignore_none is not None:
        draft.ignore_none = draft.directives.ignore_none
    else:
        draft.ignore_none = draft.options.ignore_none
    return False


def _condition_all(draft: _Draft) -> bool:
    if draft.directives.condition_all is not None:
        draft.template = draft.directives.condition_all
    return False


def _as_where(draft: _Draft) -> bool:
    as_where = draft.directives.as_where
    if as_where is None:
        return False
    draft.where_template = as_where.template or DEFAULT_WHERE_TEMPLATE
    if as_where.template is None or draft.options.ignore_set_and_where_conflict:
        draft.in_set = False
    return False


def _ignore_set(draft: _Draft) -> bool:
    if draft.directives.ignore_set:
        draft.in_set = False
    return False


def _rename(draft: _Draft) -> bool:
    if draft.directives.rename is not None:
        draft.name = draft.directives.rename
    return False


def _condition(draft: _Draft) -> bool:
    if draft.directives.condition is not None:
        draft.condition = draft.directives.condition
    return False


def _value(draft: _Draft) -> bool:
    if draft.directives.value is None:
        return False
    if draft.fixed_index is not None:
        _shadowed(draft, 'index', 'value')
    else:
        draft.literal = draft.directives.value
    return False


def _index(draft: _Draft) -> bool:
    if draft.directives.index is None:
        return False
    if draft.literal is not None:
        _shadowed(draft, 'value', 'index')
    else:
        draft.fixed_index = draft.directives.index
    return False


_CHAINS: dict[ClauseKind, tuple[Rule, ...]] = {
    ClauseKind.FIELDS: (_ignore, _rename),
    ClauseKind.SELECT: (_ignore, _rename),
    ClauseKind.VALUES: (_ignore, _index, _value),
    ClauseKind.WHERE: (_ignore, _ignore_none, _condition_all, _rename, _condition, _value, _index),
    ClauseKind.SET: (_ignore, _ignore_none, _as_where, _ignore_set, _rename, _condition, _value, _index),
}

_DEFAULT_TEMPLATES: dict[ClauseKind, str] = {
    ClauseKind.FIELDS: NAME,
    ClauseKind.SELECT: NAME,
    ClauseKind.VALUES: INDEX,
    ClauseKind.WHERE: DEFAULT_WHERE_TEMPLATE,
    ClauseKind.SET: DEFAULT_SET_TEMPLATE,
}


def _draft(field: FieldDescriptor, kind: ClauseKind, options: ClauseOptions | None) -> _Draft | None:
    """Run the rule chain of a clause kind; None means suppressed."""
    if kind in {ClauseKind.WHERE, ClauseKind.SET} and options is None:
        raise ConfigError(f'{kind.value} clauses require options')

    declared = field.directives_for(kind)
    if declared is None:
        if options is not None and options.ignores_fields_without_directive(kind):
            logger.debug(f'{kind.value}: skipping field {field.name!r} without directives')
            return None
        declared = ()

    draft = _Draft(
        field=field,
        kind=kind,
        directives=merge_directives(field.name, kind, declared),
        options=options,
        template=_DEFAULT_TEMPLATES[kind],
        name=field.name,
        )
    for rule in _CHAINS[kind]:
        if rule(draft):
            logger.debug(f'{kind.value}: field {field.name!r} suppressed by {rule.__name__.lstrip("_")}')
            return None
    return draft


def resolve_field(field: FieldDescriptor, kind: ClauseKind | str,
                  options: ClauseOptions | None = None) -> Instruction | None:
    """Resolve one field for a Fields, Select, Values or Where clause.

    Returns None when the field is suppressed at schema level.
    """
    kind = ClauseKind.coerce(kind)
    if kind == ClauseKind.SET:
        raise ConfigError('Set clauses resolve through resolve_set_field()')
    draft = _draft(field, kind, options)
    return None if draft is None else draft.instruction()


def resolve_set_field(field: FieldDescriptor,
                      options: ClauseOptions) -> tuple[Instruction | None, Instruction | None]:
    """Resolve one field for the Set clause.

    Returns
        (set instruction or None, redirected where instruction or None)
    """
    draft = _draft(field, ClauseKind.SET, options)
    if draft is None:
        return None, None
    set_part = draft.instruction() if draft.in_set else None
    where_part = draft.instruction(draft.where_template) if draft.where_template else None
    return set_part, where_part


def resolve_schema(schema: SchemaDescriptor, kind: ClauseKind | str,
                   options: ClauseOptions | None = None) -> tuple[Instruction, ...]:
    """Resolve every field of a schema for one clause kind, in order.
    """
    kind = ClauseKind.coerce(kind)
    instructions = (resolve_field(field, kind, options) for field in schema)
    return tuple(i for i in instructions if i is not None)


def resolve_set_schema(schema: SchemaDescriptor, options: ClauseOptions) -> SetPlan:
    """Resolve every field of a schema for the Set clause, in order.
    """
    set_part, where_part = [], []
    for field in schema:
        set_instruction, where_instruction = resolve_set_field(field, options)
        if set_instruction is not None:
            set_part.append(set_instruction)
        if where_instruction is not None:
            where_part.append(where_instruction)
    return SetPlan(set_part=tuple(set_part), where_part=tuple(where_part))
