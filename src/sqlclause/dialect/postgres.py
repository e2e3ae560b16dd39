"""
PostgreSQL placeholder convention.

PostgreSQL numbers its bind parameters: `$1`, `$2`, ... A parameter may be
referenced more than once by repeating its numeral.
"""
from sqlclause.dialect.base import Dialect, register_dialect


@register_dialect('postgres')
class PostgresDialect(Dialect):
    """PostgreSQL `$N` placeholders.
    """

    @property
    def placeholder_template(self) -> str:
        return '${index}'
