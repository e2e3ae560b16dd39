"""
SQLite placeholder convention.

SQLite also accepts `?NNN`, but plain `?` is what the drivers bind
positionally, so parameters are never numbered here.
"""
from sqlclause.dialect.base import Dialect, register_dialect


@register_dialect('sqlite')
class SQLiteDialect(Dialect):
    """Unnumbered `?` placeholders.
    """

    @property
    def placeholder_template(self) -> str:
        return '?'
