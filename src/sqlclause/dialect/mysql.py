"""
MySQL and MariaDB placeholder convention.
"""
from sqlclause.dialect.base import Dialect, register_dialect


@register_dialect('mysql', 'mariadb')
class MySQLDialect(Dialect):
    """Unnumbered `?` placeholders shared by MySQL and MariaDB.
    """

    @property
    def placeholder_template(self) -> str:
        return '?'
