r"""
declargs token matcher.

Classifies one raw command-line token against the declared arguments.

Forms
- LONG              --name
- LONG_ASSIGNMENT   --name=VALUE   (VALUE may be empty)
- SHORT             -short
- SHORT_ASSIGNMENT  -short=VALUE

Rules
- A token starting with "--" is only ever compared with long names, any other
  token starting with "-" only with short names.
- The name must be followed by the end of the token or by "=": "--foobar"
  never matches "foo", and "-abc" only matches the short name "abc" (no
  bundling of single-letter switches).
- Everything after the first "=" is the inline value, verbatim.
- When several arguments could answer, the first declared one wins.
"""
import enum
from typing import NamedTuple


class Form(enum.Enum):
    LONG = "long"
    LONG_ASSIGNMENT = "long-assignment"
    SHORT = "short"
    SHORT_ASSIGNMENT = "short-assignment"

    @property
    def assignment(self):
        return self in (Form.LONG_ASSIGNMENT, Form.SHORT_ASSIGNMENT)


class Match(NamedTuple):
    argument: object
    form: Form
    value: str | None
    offset: int | None

    @property
    def flag(self):
        """the flag as spelled by the user, without any inline value."""
        if self.form in (Form.LONG, Form.LONG_ASSIGNMENT):
            return "--" + self.argument.name
        return "-" + self.argument.short


def flagshaped(token, /):
    """whether token looks like a flag at all ("-" alone does not)."""
    return len(token) > 1 and token.startswith("-")


def match(token, arguments, /):
    """
    Match token against arguments (an iterable in declaration order).

    Returns a Match, or None when no declared argument answers to the token.

    >>> match("--repeat=5", registry)
    Match(argument=argument(name='repeat', ...), form=<Form.LONG_ASSIGNMENT: ...>, value='5', offset=9)
    """
    if not isinstance(token, str):
        raise TypeError("match() first argument must be a string")

    if token.startswith("--"):
        body, start, long = token[2:], 2, True
    elif token.startswith("-"):
        body, start, long = token[1:], 1, False
    else:
        return None

    if not body:
        return None

    name, assigned, value = body.partition("=")
    if not name:
        return None

    for argument in arguments:
        if (argument.name if long else argument.short) != name:
            continue
        if assigned:
            form = Form.LONG_ASSIGNMENT if long else Form.SHORT_ASSIGNMENT
            return Match(argument, form, value, start + len(name) + 1)
        return Match(argument, Form.LONG if long else Form.SHORT, None, None)
    return None


__all__ = (
    "Form",
    "Match",
    "flagshaped",
    "match",
)
