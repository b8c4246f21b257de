"""
Value coercion: infer the semantic type of an inline option value.

A raw value (the text after the first '=' of an option token) is checked against a
fixed priority ladder, first match wins:

1. boolean lexicon (case-insensitive): yes/y/true/1 → True, no/n/false/0 → False
2. finite number: int for integral literals, float otherwise
3. double-quoted text: the inner text, verbatim
4. bracketed text: a JSON array literal (malformed syntax raises ParseError)
5. anything else: the raw string unchanged

The lexicon is consulted before numbers, so "0" and "1" are always booleans.
"""
import json
import math
from collections.abc import Sequence
from enum import StrEnum

from .faults import FaultCode, ParseError
from .utils import Unset

TRUTHY = frozenset({"true", "1", "yes", "y"})
FALSY = frozenset({"false", "0", "no", "n"})
LEXICON = TRUTHY | FALSY


class OptionType(StrEnum):
    """declared (and inferred) value types of an option."""
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    ANY = "any"


def _number(value):
    # Python accepts digit separators that a shell user would not expect to be numeric.
    if "_" in value:
        return Unset
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return Unset
    return number if math.isfinite(number) else Unset


def _constant(name):
    # NaN / Infinity / -Infinity are not JSON
    raise ValueError("non-finite number %s" % name)


def coerce(value, /):
    """
    Coerce a raw value string into bool, int/float, str or list.

    Raises
    - TypeError: value is not a string.
    - ParseError: value looks like an array literal ("[...]") but is not valid JSON.
    """
    if not isinstance(value, str):
        raise TypeError("coerce() argument must be a string")

    if (lowered := value.lower()) in LEXICON:
        return lowered in TRUTHY

    if (number := _number(value)) is not Unset:
        return number

    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]

    if len(value) >= 2 and value[0] == "[" and value[-1] == "]":
        try:
            return json.loads(value, parse_constant=_constant)
        except ValueError as error:
            reason = error.msg if isinstance(error, json.JSONDecodeError) else str(error)
            raise ParseError(
                "malformed array literal %r (%s)" % (value, reason.lower()),
                title="malformed array",
                code=FaultCode.MALFORMED_ARRAY,
                value=value,
                hint='quote the whole value at the shell, e.g. --name="[1,2,\\"text\\"]"',
            ) from None

    return value


def typeof(value, /):
    """
    Map a coerced Python value to its OptionType.

    bool is checked before numbers since bool is an int subclass. Values outside the
    four concrete kinds (e.g. a JSON null nested elsewhere) report OptionType.ANY.
    """
    if isinstance(value, bool):
        return OptionType.BOOLEAN
    if isinstance(value, int | float):
        return OptionType.NUMBER
    if isinstance(value, str):
        return OptionType.STRING
    if isinstance(value, Sequence):
        return OptionType.ARRAY
    return OptionType.ANY


def accepts(type, value, /):
    """True when a value coerced from input satisfies a declared option type."""
    return OptionType(type) is OptionType.ANY or typeof(value) is OptionType(type)


__all__ = (
    "OptionType",
    "coerce",
    "typeof",
    "accepts",
)
