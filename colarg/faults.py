"""
colarg faults (errors raised while parsing) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- ParserException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- UnknownOptionError / TypeMismatchError / ParseError / MissingRequiredArgumentError:
  the concrete faults a parse can end with.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).

Integration
- The parser builds a fault and calls Parser.trigger(fault, **ctx), which merges the
  parser runtime flags and forwards here.
- Outside shell mode, faults are raised; in shell mode, they are rendered via rich
  on stderr and the process exits with status 1.
"""
import copy
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - options (1111x)
      • UNKNOWN_OPTION
    - values (1112x)
      • TYPE_MISMATCH, MALFORMED_ARRAY
    - validation (1113x)
      • MISSING_REQUIRED_ARGUMENT
    """
    # --- option errors (1111x) ---
    UNKNOWN_OPTION              = 11111

    # --- value errors (1112x) ---
    TYPE_MISMATCH               = 11121
    MALFORMED_ARRAY             = 11122

    # --- validation errors (1113x) ---
    MISSING_REQUIRED_ARGUMENT   = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParserException(Exception):
    """
    base type of every parse fault.

    the message is a short lowercased sentence; everything else (title, code, hint,
    and context such as the offending option name) lives in the read-only `options`
    mapping. copy.replace(fault, **overrides) returns a new fault with merged options.
    """

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError("fault message must be a string")
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", os.path.basename(sys.argv[0])), styler("prog-name"))

        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"
        header = Text.assemble(
            "[ ",
            prog,
            " | ",
            text(code, styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParserException, LookupError):
    """a dash-prefixed token names no declared option or alias."""

    @property
    def name(self):
        return self.options.get("name")


class TypeMismatchError(ParserException, TypeError):
    """a value's coerced runtime type disagrees with the option's declared type."""

    @property
    def expected(self):
        return self.options.get("expected")

    @property
    def actual(self):
        return self.options.get("actual")


class ParseError(ParserException, ValueError):
    """a bracketed array-literal value is not valid array syntax."""

    @property
    def value(self):
        return self.options.get("value")


class MissingRequiredArgumentError(ParserException):
    """a required option was absent (or falsy) after the scan."""

    @property
    def name(self):
        return self.options.get("name")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParserException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParserException",
    "UnknownOptionError",
    "TypeMismatchError",
    "ParseError",
    "MissingRequiredArgumentError",
    "trigger",
)
