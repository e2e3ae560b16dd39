"""
Behavioral guarantees of clause generation: determinism, ordering, dense
numbering, and isolation of fixed indices and literals.
"""
import re
from dataclasses import dataclass

import pytest
from sqlclause.directives import AsWhere, Condition, Ignore, Index, Rename
from sqlclause.directives import Value
from sqlclause.generators import generate_set_where, generate_values
from sqlclause.generators import generate_where
from sqlclause.options import ClauseOptions
from sqlclause.schema import FieldDescriptor, SchemaDescriptor, column

PLACEHOLDER = re.compile(r'\$(\d+)')


@dataclass
class Row:
    a: int = column(0, where=())
    b: int | None = column(None, where=Condition('>'))
    c: int = column(0, where=Value('now()'), values=Value('now()'))
    d: int = column(0, where=Index(9), values=Index(9))
    e: int | None = column(None, where=Rename('ee'))
    f: int = column(0, where=(), values=Ignore)
    g: int = column(0, where=Ignore)


def _numbers(fragments):
    return [int(n) for fragment in fragments for n in PLACEHOLDER.findall(fragment)]


@pytest.mark.parametrize('record', [
    Row(),
    Row(b=1),
    Row(e=2),
    Row(b=1, e=2),
], ids=['none', 'b', 'e', 'b-e'])
@pytest.mark.parametrize('start', [1, 4])
class TestWhereProperties:

    def test_deterministic(self, pg_options, record, start):
        first = generate_where(Row, pg_options, record, start=start)
        assert generate_where(Row, pg_options, record, start=start) == first

    def test_dense_numbering(self, pg_options, record, start):
        fragments = generate_where(Row, pg_options, record, start=start)
        consuming = [f for f in fragments if not f.startswith(('c ', 'd '))]
        numbers = _numbers(consuming)
        assert numbers == list(range(start, start + len(numbers)))

    def test_declaration_order(self, pg_options, record, start):
        fragments = generate_where(Row, pg_options, record, start=start)
        names = [fragment.split(' ')[0] for fragment in fragments]
        order = ['a', 'b', 'c', 'd', 'ee', 'f']
        assert names == sorted(names, key=order.index)

    def test_fixed_and_literal_untouched(self, pg_options, record, start):
        fragments = generate_where(Row, pg_options, record, start=start)
        assert 'c = now()' in fragments
        assert 'd = $9' in fragments


def test_fixed_index_does_not_perturb_counter(pg_options):
    with_fixed = SchemaDescriptor.build(
        FieldDescriptor('a'), FieldDescriptor.of('x', values=Index(2)), FieldDescriptor('b'))
    without = SchemaDescriptor.build(FieldDescriptor('a'), FieldDescriptor('b'))
    assert generate_values(with_fixed, pg_options) == ['$1', '$2', '$2']
    assert generate_values(without, pg_options) == ['$1', '$2']


def test_literal_does_not_perturb_counter(pg_options):
    schema = SchemaDescriptor.build(
        FieldDescriptor('a'), FieldDescriptor.of('ts', values=Value('now()')), FieldDescriptor('b'))
    assert generate_values(schema, pg_options) == ['$1', 'now()', '$2']


def test_set_numbers_precede_where():
    schema = SchemaDescriptor.build(
        FieldDescriptor.of('id', set=AsWhere()),
        FieldDescriptor.of('a', set=()),
        FieldDescriptor.of('b', set=()),
        )
    options = ClauseOptions(database='postgres', index=3)
    set_part, where_part = generate_set_where(schema, options, {'id': 1, 'a': 1, 'b': 2})
    assert _numbers(set_part) == [3, 4]
    assert _numbers(where_part) == [5]


def test_unnumbered_dialect_counts_like_numbered(mysql_options, pg_options):
    record = Row(b=1, e=2)
    assert len(generate_where(Row, mysql_options, record)) == len(generate_where(Row, pg_options, record))
