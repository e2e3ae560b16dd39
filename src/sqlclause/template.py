"""
Fragment template substitution.

Templates are plain SQL text containing up to three tokens:

    {name}       field name, or its rename
    {condition}  comparison operator (default `=`)
    {index}      rendered placeholder (`$3`, `@p3`, `?`) or a literal value

Substitution happens in a single left-to-right scan over the template, so text
brought in by a substituted value is never scanned again: a rename or literal
that itself contains `{index}` is emitted unchanged. Any other brace text is
passed through.
"""
import re

from sqlclause.exceptions import MissingConditionError

__all__ = [
    'NAME',
    'CONDITION',
    'INDEX',
    'DEFAULT_WHERE_TEMPLATE',
    'DEFAULT_SET_TEMPLATE',
    'has_token',
    'check_condition',
    'render',
]

NAME = '{name}'
CONDITION = '{condition}'
INDEX = '{index}'

DEFAULT_WHERE_TEMPLATE = f'{NAME} {CONDITION} {INDEX}'
DEFAULT_SET_TEMPLATE = f'{NAME} = {INDEX}'

# Literal alternation of the three tokens; order of alternatives mirrors the
# documented substitution order
_TOKEN = re.compile('|'.join(re.escape(token) for token in (NAME, CONDITION, INDEX)))


def has_token(template: str, token: str) -> bool:
    """Check whether a template uses a token (e.g. `INDEX`)."""
    return token in template


def check_condition(template: str, field: str, condition: str | None) -> None:
    """Raise MissingConditionError if `{condition}` cannot be filled."""
    if has_token(template, CONDITION) and not condition:
        raise MissingConditionError(field, template)


def render(template: str, *, field: str, name: str | None = None,
           condition: str | None = None, index: str | None = None) -> str:
    """Render one fragment template.

    Parameters
        template: Fragment template
        field: Field name, reported when rendering fails
        name: Value for `{name}`
        condition: Value for `{condition}`
        index: Value for `{index}`, already dialect-shaped

    A token whose value is None is left in place, except `{condition}`,
    which must resolve to a non-empty operator.

    Returns
        Rendered fragment text
    """
    check_condition(template, field, condition)

    values = {NAME: name, CONDITION: condition, INDEX: index}

    def substitute(match: re.Match) -> str:
        value = values[match.group(0)]
        return match.group(0) if value is None else value

    return _TOKEN.sub(substitute, template)
