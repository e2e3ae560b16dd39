import pytest
from sqlclause.directives import ClauseKind
from sqlclause.dialect import PostgresDialect
from sqlclause.exceptions import ConfigError, UnsupportedDialectError
from sqlclause.options import ClauseOptions, load_clause_options


def test_init_defaults():
    """Test default initialization"""
    options = ClauseOptions(database='postgres')

    assert options.index == 1
    assert options.ignore_none is True
    assert options.ignore_fields_without_directive is True
    assert options.ignore_fields_without_where is None
    assert options.ignore_fields_without_set is None
    assert options.ignore_set_and_where_conflict is False
    assert isinstance(options.dialect, PostgresDialect)


def test_validation():
    """Test validation rules"""
    with pytest.raises(ConfigError):
        ClauseOptions()

    with pytest.raises(UnsupportedDialectError):
        ClauseOptions(database='oracle')

    with pytest.raises(ValueError):
        ClauseOptions(database='oracle')


@pytest.mark.parametrize('index', [0, -1, True, '1'])
def test_index_validation(index):
    """Test the start index must be a positive integer"""
    with pytest.raises(ConfigError):
        ClauseOptions(database='mssql', index=index)


def test_options_from_config(pg_options, mssql_options):
    """Test options built from the test configuration"""
    assert pg_options.database == 'postgres'
    assert mssql_options.dialect.render_placeholder(2) == '@p2'


class TestFieldsWithoutDirective:

    @pytest.mark.parametrize('kind', [ClauseKind.FIELDS, ClauseKind.SELECT, ClauseKind.VALUES])
    def test_never_ignored_outside_where_and_set(self, kind):
        options = ClauseOptions(database='postgres', ignore_fields_without_directive=True)
        assert options.ignores_fields_without_directive(kind) is False

    @pytest.mark.parametrize('kind', ['where', 'set'])
    def test_inherits_global_flag(self, kind):
        assert ClauseOptions(database='postgres').ignores_fields_without_directive(kind) is True
        options = ClauseOptions(database='postgres', ignore_fields_without_directive=False)
        assert options.ignores_fields_without_directive(kind) is False

    def test_per_clause_override(self):
        options = ClauseOptions(database='postgres', ignore_fields_without_set=False)
        assert options.ignores_fields_without_directive(ClauseKind.SET) is False
        assert options.ignores_fields_without_directive(ClauseKind.WHERE) is True

        options = ClauseOptions(database='postgres', ignore_fields_without_directive=False,
                                ignore_fields_without_where=True)
        assert options.ignores_fields_without_directive(ClauseKind.WHERE) is True
        assert options.ignores_fields_without_directive(ClauseKind.SET) is False


def test_load_from_dict():
    """Test loading options from a dictionary"""
    options = load_clause_options({'database': 'sqlite', 'index': 4})
    assert isinstance(options, ClauseOptions)
    assert options.database == 'sqlite'
    assert options.index == 4


def test_load_from_options_object():
    """Test loading from an existing options object"""
    original = ClauseOptions(database='mysql')
    assert load_clause_options(original).database == 'mysql'
