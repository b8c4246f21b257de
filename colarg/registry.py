"""
Option and command registries.

Both registries keep declaration order (help lists them as declared) and index their
entries for single lookups. Insertion never raises on a collision: add() returns False
and leaves the registry untouched, so the first declaration of a key wins.

- OptionRegistry: unique names and unique aliases; resolve(key) looks a token name up
  by name first, then by alias, and yields at most one Option.
- CommandRegistry: unique command names.
"""
import logging
from collections.abc import Sequence

from .options import Option, Command

logger = logging.getLogger(__name__)


class Registry(Sequence):
    """ordered, index-backed collection of specs (read access is a plain sequence)."""

    __kind__ = object

    def __init__(self, items=(), /):
        self._items = []
        for item in items:
            self.add(item)

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"{type(self).__name__}({self._items!r})"

    def copy(self):
        """a new registry holding the same specs; later additions do not leak back."""
        return type(self)(self._items)

    def _check(self, item):
        if not isinstance(item, self.__kind__):
            raise TypeError(f"{type(self).__name__}.add() argument must be {self.__kind__.__typename__}")


class OptionRegistry(Registry):
    __kind__ = Option

    def __init__(self, items=(), /):
        self._names = {}
        self._aliases = {}
        super().__init__(items)

    def add(self, option, /):
        self._check(option)
        if option.name in self._names:
            logger.debug("option %r rejected: name already registered", option.name)
            return False
        if option.alias is not None and option.alias in self._aliases:
            logger.debug("option %r rejected: alias %r already registered", option.name, option.alias)
            return False
        self._items.append(option)
        self._names[option.name] = option
        if option.alias is not None:
            self._aliases[option.alias] = option
        return True

    def resolve(self, key, /):
        """the option whose name, or else whose alias, equals key (None when unknown)."""
        try:
            return self._names[key]
        except KeyError:
            return self._aliases.get(key)

    def keys(self):
        """every name and alias, in declaration order."""
        for option in self._items:
            yield from option.keys


class CommandRegistry(Registry):
    __kind__ = Command

    def __init__(self, items=(), /):
        self._names = {}
        super().__init__(items)

    def add(self, command, /):
        self._check(command)
        if command.name in self._names:
            logger.debug("command %r rejected: name already registered", command.name)
            return False
        self._items.append(command)
        self._names[command.name] = command
        return True

    def get(self, name, /):
        """the command registered under name (None when unknown)."""
        return self._names.get(name)


__all__ = (
    "OptionRegistry",
    "CommandRegistry",
)
