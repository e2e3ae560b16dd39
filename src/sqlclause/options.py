from dataclasses import dataclass
from typing import Any

from sqlclause.dialect import Dialect, get_available_dialects, get_dialect
from sqlclause.dialect import is_supported_dialect
from sqlclause.directives import ClauseKind
from sqlclause.exceptions import ConfigError, UnsupportedDialectError

from libb import ConfigOptions, load_options

__all__ = [
    'ClauseOptions',
    'load_clause_options',
]


@dataclass
class ClauseOptions(ConfigOptions):
    """Options

    supported database names: `postgres`, `mysql`, `mariadb`, `sqlite`, `mssql`

    Generation options:
    - index: First positional parameter number (default: 1)
    - ignore_none: Suppress Where/Set fragments of optional fields whose
      value is None (default: True)
    - ignore_fields_without_directive: Suppress Where/Set fragments of fields
      carrying no directive set for that clause (default: True)
    - ignore_fields_without_where / ignore_fields_without_set: Per-clause
      override of the above (default: None, inherit)
    - ignore_set_and_where_conflict: Drop a field from SET when its `AsWhere`
      directive carries an explicit template; by default such a field stays
      in SET and also gets the WHERE predicate (default: False)
    """
    database: str = None
    index: int = 1
    ignore_none: bool = True
    ignore_fields_without_directive: bool = True
    ignore_fields_without_where: bool | None = None
    ignore_fields_without_set: bool | None = None
    ignore_set_and_where_conflict: bool = False

    def __post_init__(self):
        if not self.database:
            raise ConfigError('database must be set to one of: '
                              f'{get_available_dialects()}')
        if not is_supported_dialect(self.database):
            available = get_available_dialects()
            raise UnsupportedDialectError(f'database must be one of: {available}')
        if isinstance(self.index, bool) or not isinstance(self.index, int) or self.index < 1:
            raise ConfigError(f'index must be an integer >= 1 (not {self.index!r})')

    @property
    def dialect(self) -> Dialect:
        """Dialect resolved from the database name."""
        return get_dialect(self.database)

    def ignores_fields_without_directive(self, kind: ClauseKind | str) -> bool:
        """Whether fields lacking a directive set are suppressed for a clause.

        Only Where and Set honour this; the other clauses always include
        undirected fields.
        """
        kind = ClauseKind.coerce(kind)
        if kind == ClauseKind.WHERE and self.ignore_fields_without_where is not None:
            return self.ignore_fields_without_where
        if kind == ClauseKind.SET and self.ignore_fields_without_set is not None:
            return self.ignore_fields_without_set
        if kind in {ClauseKind.WHERE, ClauseKind.SET}:
            return self.ignore_fields_without_directive
        return False


@load_options(cls=ClauseOptions)
def load_clause_options(options: ClauseOptions | dict[str, Any] | str,
                        config: Any | None = None, **kw: Any) -> ClauseOptions:
    """Build ClauseOptions from an options object, dict, or config section.

    Args:
        options: Can be:
                - ClauseOptions object
                - String name of a config section
                - Dictionary of options
        config: Configuration object (for loading from config files)
        **kw: Additional keyword arguments to override options
    """
    return options
