"""
Schema descriptors and their construction from dataclasses.

A SchemaDescriptor is the ordered, immutable list of fields of one record
type, each carrying its directive sets per clause kind. Descriptors can be
built by hand:

    schema = SchemaDescriptor.build(
        FieldDescriptor.of('id', where=Rename('user_id')),
        FieldDescriptor.of('email', optional=True, where=()),
        )

or described from a dataclass whose fields use `column()`:

    @dataclass
    class User:
        id: int = column(where=Rename('user_id'))
        email: str | None = column(None, where=())

    schema = describe(User)
"""
import dataclasses
import logging
import types
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin, get_type_hints

from sqlclause.cache import cacheable_schema
from sqlclause.directives import ClauseKind, Directive, normalize_directives
from sqlclause.exceptions import ConfigError

logger = logging.getLogger(__name__)

__all__ = [
    'METADATA_KEY',
    'FieldDescriptor',
    'SchemaDescriptor',
    'column',
    'describe',
    'as_schema',
    'is_optional_annotation',
]

METADATA_KEY = 'sqlclause'


def _normalize_directive_map(field_name: str,
                             directives: Mapping[Any, Any]) -> Mapping[ClauseKind, tuple[Directive, ...]]:
    """Key directive sets by ClauseKind and normalize each set to a tuple."""
    normalized = {}
    for kind, value in directives.items():
        kind = ClauseKind.coerce(kind)
        if kind in normalized:
            raise ConfigError(f'Field {field_name!r} declares {kind.value} directives twice')
        normalized[kind] = normalize_directives(value)
    return types.MappingProxyType(normalized)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One field of a record type.

    `directives` maps a clause kind to the directive set declared for it;
    a kind missing from the mapping means no directive set at all.
    """
    name: str
    directives: Mapping[ClauseKind, tuple[Directive, ...]] = dataclasses.field(default_factory=dict)
    optional: bool = False

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ConfigError(f'Field name must be a non-empty string (not {self.name!r})')
        object.__setattr__(self, 'directives', _normalize_directive_map(self.name, self.directives))

    @classmethod
    def of(cls, name: str, *, optional: bool = False, **directives: Any) -> 'FieldDescriptor':
        """Build a field with directive sets given by clause kind name.
        """
        return cls(name=name, directives=directives, optional=optional)

    def directives_for(self, kind: ClauseKind | str) -> tuple[Directive, ...] | None:
        """Directive set declared for a clause kind, or None when absent."""
        return self.directives.get(ClauseKind.coerce(kind))

    def has_directives(self, kind: ClauseKind | str) -> bool:
        return ClauseKind.coerce(kind) in self.directives


@dataclass(frozen=True, slots=True)
class SchemaDescriptor:
    """Ordered fields of one record type. Order is emission and numbering order.
    """
    fields: tuple[FieldDescriptor, ...]
    name: str | None = None

    def __post_init__(self):
        fields = tuple(self.fields)
        seen = set()
        for field in fields:
            if not isinstance(field, FieldDescriptor):
                raise ConfigError(f'Not a FieldDescriptor: {field!r}')
            if field.name in seen:
                raise ConfigError(f'Duplicate field name {field.name!r} in schema {self.name!r}')
            seen.add(field.name)
        object.__setattr__(self, 'fields', fields)

    @classmethod
    def build(cls, *fields: FieldDescriptor, name: str | None = None) -> 'SchemaDescriptor':
        return cls(fields=fields, name=name)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def names(self) -> list[str]:
        return [field.name for field in self.fields]


@dataclass(frozen=True, slots=True)
class _ColumnSpec:
    directives: Mapping[str, Any]
    optional: bool | None = None


def column(default: Any = dataclasses.MISSING, *, default_factory: Any = dataclasses.MISSING,
           optional: bool | None = None, **directives: Any) -> Any:
    """Declare a dataclass field together with its clause directives.

    Keyword arguments named after a clause kind (`fields`, `select`,
    `values`, `where`, `set`) give that kind's directive set: a directive, a
    directive class, or an iterable of them. An empty tuple marks the field as
    directed with all defaults.

    `optional` overrides the detection of `X | None` annotations.
    """
    for kind in directives:
        ClauseKind.coerce(kind)
    spec = _ColumnSpec(directives=types.MappingProxyType(dict(directives)), optional=optional)
    return dataclasses.field(default=default, default_factory=default_factory,
                             metadata={METADATA_KEY: spec})


def is_optional_annotation(annotation: Any) -> bool:
    """Check whether a type annotation admits None (`X | None`, `Optional[X]`).
    """
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(annotation)
    return annotation is type(None)


def _resolve_annotations(record_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(record_type)
    except (NameError, TypeError) as err:
        logger.debug(f'Falling back to raw annotations for {record_type.__qualname__}: {err}')
        return {f.name: f.type for f in dataclasses.fields(record_type)}


@cacheable_schema('described_schemas')
def describe(record_type: type) -> SchemaDescriptor:
    """Build the SchemaDescriptor of a dataclass type.

    Fields keep declaration order. Directive sets come from `column()`
    metadata; plain dataclass fields carry no directive sets. Results are
    cached per type; pass bypass_cache=True to rebuild.
    """
    if not isinstance(record_type, type) or not dataclasses.is_dataclass(record_type):
        raise ConfigError(f'describe() expects a dataclass type (not {record_type!r})')

    annotations = _resolve_annotations(record_type)
    fields = []
    for f in dataclasses.fields(record_type):
        spec = f.metadata.get(METADATA_KEY)
        directives = spec.directives if spec is not None else {}
        optional = spec.optional if spec is not None and spec.optional is not None else None
        if optional is None:
            optional = is_optional_annotation(annotations.get(f.name, f.type))
        fields.append(FieldDescriptor(name=f.name, directives=directives, optional=optional))

    schema = SchemaDescriptor(fields=tuple(fields), name=record_type.__qualname__)
    logger.debug(f'Described {schema.name} with {len(schema)} fields')
    return schema


def as_schema(target: SchemaDescriptor | type) -> SchemaDescriptor:
    """Accept a SchemaDescriptor or a dataclass type to describe.
    """
    if isinstance(target, SchemaDescriptor):
        return target
    return describe(target)
