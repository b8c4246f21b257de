r"""
colarg option and command specifications, plus decorators.

Overview
- Specs
  • Option: named value or flag, reachable as --name / -alias, with a declared type
    (boolean, number, string, array, any), a default shown in help, a required marker,
    and an optional staggered callback.
  • Command: named sub-parser mode owning its own options (and, optionally, its own
    sub-commands) and a callback receiving the nested parse result.

- Decorators
  • @option(...): build an Option bound to a handler function.
  • @command(...): build a Command bound to a handler function.

- Introspection & representation
  • SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the fields
    declared in __introspectable__ as read-only properties (see utils.mirror).

Metadata (sanitized on construction)
- name / alias: shell words without leading dashes, '=' or whitespace
  (r"[^\W_][\w-]*"); alias is optional and must differ from name; "default" is reserved.
- type: OptionType or its string value.
- descr: Unset | str | Text (short help), non-empty when provided; None when omitted.
- callback: Unset or callable (None when omitted).

Construction errors are programming errors and raise TypeError/ValueError; name
collisions between specs are not checked here (registries reject them silently).

Quick example:
    >>> from colarg.options import Option, option
    >>> count = Option("count", "c", type="number", default=1)
    >>> @option("help", "h")
    ... def on_help(result, options, commands): ...
"""
import functools
import operator
import re
from collections.abc import Iterable

from rich.text import Text

from .coercion import OptionType
from .results import DEFAULT
from .utils import *

NAME_PATTERN = re.compile(r"[^\W_][\w-]*")


class SpecType(type):
    """
    Metaclass wiring introspection for specs.

    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in diagnostics.
    - every name listed in __introspectable__ becomes a read-only property
      mirroring the private "_{name}" field.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(name='count', alias='c', type=<OptionType.NUMBER: 'number'>, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_word(cls, field, word, /):
    if not isinstance(word, str):
        raise TypeError(f"{cls.__typename__} '{field}' must be a string")
    elif not (word := word.strip()):
        raise ValueError(f"{cls.__typename__} '{field}' cannot be empty")
    elif not NAME_PATTERN.fullmatch(word):
        raise ValueError(f"{cls.__typename__} '{field}' must be a shell word without leading dashes, '=' or spaces")
    return word


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate shared spec metadata ('name' and 'descr').

    - name: required shell word.
    - descr: optional short description. If omitted (Unset), it becomes None.
      If provided, it must be a non-empty string (or rich Text) after trimming.
    """
    metadata["name"] = _sanitize_word(cls, "name", metadata["name"])

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if (callback := metadata["callback"]) is not Unset and not callable(callback):
        raise TypeError(f"{cls.__typename__} 'callback' must be callable")
    metadata["callback"] = coalesce(callback)


def _sanitize_option_metadata(cls, metadata, /):
    """
    Internal: validate option-only metadata.

    - alias: Unset or a shell word different from name (None when omitted).
    - type: OptionType member or its string value.
    - required: coerced to bool.
    - default: not validated; any value is shown as-is in help.
    """
    if (alias := metadata["alias"]) is not Unset:
        alias = _sanitize_word(cls, "alias", alias)
        if alias == metadata["name"]:
            raise ValueError(f"{cls.__typename__} 'alias' must differ from its name")
    metadata["alias"] = coalesce(alias)

    # "default" is the result key of positionals
    if DEFAULT in (metadata["name"], metadata["alias"]):
        raise ValueError(f"{cls.__typename__} cannot be named {DEFAULT!r}")

    if not isinstance(type := metadata["type"], str):
        raise TypeError(f"{cls.__typename__} 'type' must be a string")
    try:
        metadata["type"] = OptionType(type.strip().lower())
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'type' must be one of {', '.join(map(repr, OptionType))}") from None

    metadata["required"] = bool(metadata["required"])


def _sanitize_command_metadata(cls, metadata, /):
    """
    Internal: validate command-only metadata.

    - options: iterable of Option, normalized into a tuple (declaration order kept).
    - commands: iterable of Command (sub-commands), normalized into a tuple.
    """
    for field, kind in (("options", Option), ("commands", Command)):
        if not isinstance(items := metadata[field], Iterable) or isinstance(items, str):
            raise TypeError(f"{cls.__typename__} '{field}' must be an iterable of {kind.__typename__}s")
        items = tuple(items)
        if not all(isinstance(item, kind) for item in items):
            raise TypeError(f"{cls.__typename__} '{field}' must be an iterable of {kind.__typename__}s")
        metadata[field] = items


class Option(metaclass=SpecType):
    """
    Named option specification.

    An Option is reachable on the command line as --name or -alias, either bare
    (the result holds True) or with an inline value (--name=value) that is coerced
    and checked against the declared type.

    Calling the option forwards (result, options, commands) to its callback; this is
    what the parser does, once per occurrence, after the whole scan completed.
    """

    __introspectable__ = (
        "name",
        "alias",
        "type",
        "default",
        "descr",
        "required",
        "callback",
    )

    def __new__(
            cls,
            name,
            alias=Unset,
            /,
            type=OptionType.ANY,
            default=None,
            descr=Unset,
            *,
            required=False,
            callback=Unset
    ):
        """
        Construct an Option spec with the provided metadata.

        Parameters
        - name: str
          Canonical key, matched by --name (or -name).
        - alias: Unset | str
          Secondary key, matched by -alias (or --alias).
        - type: OptionType | str
          Declared type of inline values; "any" skips the type check.
        - default: Any
          Shown in help; the parser never writes it into the result.
        - descr: Unset | str | Text
          Short description for help.
        - required: bool
          Missing or falsy values fail validation after the scan.
        - callback: Unset | Callable[[Namespace, Sequence[Option], Sequence[Command]], Any]
          Staggered handler invoked after the scan, in encounter order.
        """
        metadata = {
            "name": name,
            "alias": alias,
            "type": type,
            "default": default,
            "descr": descr,
            "required": required,
            "callback": callback,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_option_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def keys(self):
        """Result keys written for this option: (name,) or (name, alias)."""
        return (self.name,) if self.alias is None else (self.name, self.alias)

    def __call__(self, result, options, commands, /):
        if self._callback is None:
            return
        return self._callback(result, options, commands)


class Command(metaclass=SpecType):
    """
    Command specification.

    When its name shows up as a bare token, the parser stops the current scan and
    re-parses the remaining tokens in a nested scope made of the parent's options
    plus this command's options, with this command's sub-commands as the nested
    command registry. The callback then receives the nested result.
    """

    __introspectable__ = (
        "name",
        "descr",
        "options",
        "commands",
        "callback",
    )

    def __new__(
            cls,
            name,
            /,
            descr=Unset,
            options=(),
            commands=(),
            *,
            callback=Unset
    ):
        metadata = {
            "name": name,
            "descr": descr,
            "options": options,
            "commands": commands,
            "callback": callback,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_command_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self, result, /):
        if self._callback is None:
            return
        return self._callback(result)


def option(name, alias=Unset, /, *args, **kwargs):
    """
    Build an Option bound to the decorated function.

    Usage
        @option("help", "h", descr="show help")
        def on_help(result, options, commands): ...
    """
    @rename("option")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@option() must be applied to a callable")
        return Option(name, alias, *args, callback=callback, **kwargs)

    return wrapper


def command(name, /, *args, **kwargs):
    """
    Build a Command bound to the decorated function.

    Usage
        @command("build", options=[Option("verbose", "v", type="boolean")])
        def build(result): ...
    """
    @rename("command")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@command() must be applied to a callable")
        return Command(name, *args, callback=callback, **kwargs)

    return wrapper


__all__ = (
    "Option",
    "Command",
    "option",
    "command",
)
