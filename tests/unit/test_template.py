"""
Unit tests for fragment template substitution.
"""
import pytest
from sqlclause.exceptions import MissingConditionError, TemplateError
from sqlclause.template import CONDITION, DEFAULT_SET_TEMPLATE
from sqlclause.template import DEFAULT_WHERE_TEMPLATE, INDEX, check_condition
from sqlclause.template import has_token, render


def test_default_templates():
    assert DEFAULT_WHERE_TEMPLATE == '{name} {condition} {index}'
    assert DEFAULT_SET_TEMPLATE == '{name} = {index}'


class TestRender:

    def test_all_tokens(self):
        result = render(DEFAULT_WHERE_TEMPLATE, field='age', name='age',
                        condition='>=', index='$3')
        assert result == 'age >= $3'

    def test_repeated_tokens(self):
        result = render('{name} between {index} and {index}', field='n', name='n', index='?')
        assert result == 'n between ? and ?'

    def test_custom_template(self):
        result = render('{name} = ANY({index}::int[])', field='ids', name='ids', index='$2')
        assert result == 'ids = ANY($2::int[])'

    def test_template_without_tokens(self):
        assert render('deleted_at is null', field='deleted_at', name='deleted_at') == 'deleted_at is null'

    def test_unknown_braces_pass_through(self):
        result = render("{name} = '{other}'", field='f', name='f')
        assert result == "f = '{other}'"

    def test_none_leaves_token(self):
        assert render('{name} = {index}', field='f', name='f') == 'f = {index}'


class TestNonRecursion:
    """Text brought in by a substitution is never scanned for tokens."""

    def test_literal_containing_index(self):
        result = render('{name} = {index}', field='f', name='f', index="'{index}'")
        assert result == "f = '{index}'"

    def test_name_containing_tokens(self):
        result = render(DEFAULT_WHERE_TEMPLATE, field='f', name='{condition}{index}',
                        condition='=', index='$1')
        assert result == '{condition}{index} = $1'

    def test_condition_containing_name(self):
        result = render(DEFAULT_WHERE_TEMPLATE, field='f', name='col',
                        condition='{name}', index='$1')
        assert result == 'col {name} $1'


class TestCondition:

    def test_has_token(self):
        assert has_token('{name} {condition} {index}', CONDITION)
        assert not has_token('{name} = 1', INDEX)

    @pytest.mark.parametrize('condition', [None, ''], ids=['none', 'empty'])
    def test_missing_condition(self, condition):
        with pytest.raises(MissingConditionError) as exc_info:
            render(DEFAULT_WHERE_TEMPLATE, field='price', name='price',
                   condition=condition, index='$1')
        assert exc_info.value.field == 'price'
        assert exc_info.value.template == DEFAULT_WHERE_TEMPLATE
        assert isinstance(exc_info.value, TemplateError)

    def test_condition_not_needed(self):
        check_condition('{name} = {index}', 'f', None)
