"""
Parse results.

A Namespace stores each value once, under the option's canonical name, and keeps a
separate alias → name table, so reading an option by name or by alias always yields the
same object. Bare tokens are collected, in input order, under the reserved key "default".

    >>> result["count"] == result["c"] == result.count == result.c
    True
    >>> result.default
    ['a', 'b', 'c']
"""
from collections.abc import Mapping

from .coercion import typeof

DEFAULT = "default"


class Namespace(Mapping):
    """
    Read-only mapping of every option key (names and aliases) to its value.

    Iteration yields, per assigned option, its name then its alias, followed by
    "default" once at least one positional was collected. Attribute access mirrors
    item access for keys that are valid identifiers.
    """

    def __init__(self):
        self._values = {}
        self._aliases = {}
        self._positionals = []

    def _assign(self, option, value, /):
        self._values[option.name] = value
        if option.alias is not None:
            self._aliases[option.alias] = option.name

    def _append(self, token, /):
        self._positionals.append(token)

    def __getitem__(self, key):
        if key == DEFAULT and self._positionals:
            return list(self._positionals)
        return self._values[self._aliases.get(key, key)]

    def __iter__(self):
        aliases = {}
        for alias, name in self._aliases.items():
            aliases[name] = alias
        for name in self._values:
            yield name
            if name in aliases:
                yield aliases[name]
        if self._positionals:
            yield DEFAULT

    def __len__(self):
        return len(self._values) + len(self._aliases) + bool(self._positionals)

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def kind(self, key, /):
        """OptionType of the value stored under key (KeyError when absent)."""
        return typeof(self[key])

    def __repr__(self):
        return f"{type(self).__name__}({dict(self)!r})"

    def __rich_repr__(self):
        yield from self.items()


__all__ = (
    "DEFAULT",
    "Namespace",
)
