r"""
declargs value grammar (strict literal parsing for typed arguments).

Every parser takes the raw token text exactly as the user typed it and either
returns the converted value or raises ValueError. Nothing is trimmed: a
leading or trailing blank, an underscore separator or any other trailing
character makes the literal invalid.

Integers (parse_int)
- optional sign, then one of
  • hexadecimal: 0x / 0X followed by at least one hex digit
  • octal: a leading 0 followed by octal digits ("0" alone is zero)
  • decimal: a non-zero digit followed by digits
- the value must fit a signed 64-bit integer.

Numbers (parse_double)
- optional sign, then one of
  • decimal: digits with an optional fraction and exponent ("1.", ".5", "1e-3")
  • hexadecimal: 0x digits with an optional fraction and binary exponent ("0x1.8p3")
  • infinity: "inf" / "infinity", any case
  • not-a-number: "nan" or "nan(chars)", any case
- finite literals too large for a float64 are rejected as out of range.

Booleans (parse_bool)
- exactly "1", "true", "True", "TRUE" or "0", "false", "False", "FALSE".
"""
import re

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

TRUTHY = frozenset({"1", "true", "True", "TRUE"})
FALSY = frozenset({"0", "false", "False", "FALSE"})

_INTEGER = re.compile(r"""
    (?P<sign>[+-]?)
    (?:
        0[xX](?P<hexadecimal>[0-9a-fA-F]+)
      | (?P<octal>0[0-7]*)
      | (?P<decimal>[1-9][0-9]*)
    )
""", re.VERBOSE)

_NUMBER = re.compile(r"""
    (?P<sign>[+-]?)
    (?:
        (?P<hexadecimal>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?)
      | (?P<decimal>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)
      | (?P<infinity>inf(?:inity)?)
      | (?P<nan>nan(?:\([0-9a-z_]*\))?)
    )
""", re.VERBOSE | re.IGNORECASE)


def parse_int(token, /):
    """
    Parse a C-style integer literal with base detection into an int.

    >>> parse_int("0x0000DEAD"), parse_int("0157255"), parse_int("+57005")
    (57005, 57005, 57005)
    """
    if not isinstance(token, str):
        raise TypeError("parse_int() argument must be a string")

    if not (match := _INTEGER.fullmatch(token)):
        raise ValueError("invalid integer literal: %r" % token)

    if match["hexadecimal"] is not None:
        value = int(match["hexadecimal"], 16)
    elif match["octal"] is not None:
        value = int(match["octal"], 8)
    else:
        value = int(match["decimal"], 10)

    if match["sign"] == "-":
        value = -value

    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError("integer literal out of range: %r" % token)
    return value


def parse_double(token, /):
    """
    Parse a C-style floating point literal into a float.

    >>> parse_double("3.14"), parse_double("-inf"), parse_double("0x1.8p1")
    (3.14, -inf, 3.0)
    """
    if not isinstance(token, str):
        raise TypeError("parse_double() argument must be a string")

    if not (match := _NUMBER.fullmatch(token)):
        raise ValueError("invalid number literal: %r" % token)

    sign = match["sign"]
    if match["infinity"] is not None:
        return float(sign + "inf")
    if match["nan"] is not None:
        return float(sign + "nan")

    try:
        if match["hexadecimal"] is not None:
            value = float.fromhex(sign + match["hexadecimal"])
        else:
            value = float(sign + match["decimal"])
    except OverflowError:
        raise ValueError("number literal out of range: %r" % token) from None

    # float() saturates to infinity instead of raising
    if value in (float("inf"), float("-inf")):
        raise ValueError("number literal out of range: %r" % token)
    return value


def parse_bool(token, /):
    """
    Parse one of the accepted boolean spellings.

    >>> parse_bool("TRUE"), parse_bool("0")
    (True, False)
    """
    if not isinstance(token, str):
        raise TypeError("parse_bool() argument must be a string")
    if token in TRUTHY:
        return True
    if token in FALSY:
        return False
    raise ValueError("invalid boolean literal: %r" % token)


__all__ = (
    "INT64_MIN",
    "INT64_MAX",
    "parse_int",
    "parse_double",
    "parse_bool",
)
