"""
Clause generation exception classes.
"""


class ClauseError(Exception):
    """Base class for all sqlclause errors.
    """


class ConfigError(ClauseError, ValueError):
    """Invalid options or schema, raised before any clause is generated.
    """


class UnsupportedDialectError(ConfigError):
    """Dialect name is not registered.
    """


class DirectiveConflictError(ConfigError):
    """Two mutually exclusive directives of the same priority on one field.
    """

    def __init__(self, field: str, kind: str, message: str) -> None:
        self.field = field
        self.kind = kind
        super().__init__(f'{kind} directives on field {field!r}: {message}')


class TemplateError(ClauseError):
    """Error rendering a fragment template.
    """


class MissingConditionError(TemplateError):
    """Template uses `{condition}` but the field resolves no condition.
    """

    def __init__(self, field: str, template: str) -> None:
        self.field = field
        self.template = template
        super().__init__(
            f'Template {template!r} references {{condition}} but field '
            f'{field!r} has no condition set')
