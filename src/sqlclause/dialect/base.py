"""
Base dialect interface for placeholder rendering.

Each SQL dialect declares how a positional bind parameter is spelled. Numbered
dialects embed the `{index}` token in their placeholder template and render
one numeral per parameter; unnumbered dialects use a fixed token and ignore
the index entirely.
"""
from abc import ABC, abstractmethod

INDEX_TOKEN = '{index}'

# Registry of dialect name -> dialect class
# Defined here to avoid circular imports (concrete dialects import from base)
_DIALECT_REGISTRY: dict[str, type['Dialect']] = {}


def register_dialect(*names: str):
    """Decorator to register a dialect class under one or more names.

    Usage:
        @register_dialect('mysql', 'mariadb')
        class MySQLDialect(Dialect):
            ...
    """
    def decorator(cls: type['Dialect']) -> type['Dialect']:
        for name in names:
            _DIALECT_REGISTRY[name] = cls
        return cls
    return decorator


class Dialect(ABC):
    """Base class for dialect placeholder conventions.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    @property
    @abstractmethod
    def placeholder_template(self) -> str:
        """Placeholder template, containing `{index}` when numbered.
        """

    @property
    def numbered(self) -> bool:
        """Whether placeholders carry a positional numeral."""
        return INDEX_TOKEN in self.placeholder_template

    def render_placeholder(self, index: int) -> str:
        """Render the placeholder for a parameter position.

        Unnumbered dialects return their fixed token whatever the index.
        """
        return self.placeholder_template.replace(INDEX_TOKEN, str(index))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.name!r})'
