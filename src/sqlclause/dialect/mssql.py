"""
SQL Server placeholder convention (`@p1`, `@p2`, ...).
"""
from sqlclause.dialect.base import Dialect, register_dialect


@register_dialect('mssql')
class SQLServerDialect(Dialect):
    """SQL Server `@pN` placeholders.
    """

    @property
    def placeholder_template(self) -> str:
        return '@p{index}'
