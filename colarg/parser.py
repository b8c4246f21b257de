"""
colarg parser: turn command-line tokens into a typed Namespace.

What this module provides
- Parser: holds the declared options and commands of one parse scope and runs parses.
- invoke(parser, prompt): convenience runner mirroring Parser.parse.

How a parse runs
- scan: every token is classified, left to right.
  • "-x" / "--x" / "--x=value": resolved against the option registry (name first,
    then alias). Bare references store True; inline values are coerced and checked
    against the declared type. Options with a callback are queued, in encounter order.
  • a bare token naming a registered command: the rest of the parse happens in a
    nested scope (see dispatch below) and this level returns an empty Namespace.
  • any other bare token: appended to the "default" positionals.
- staggered callbacks: once the scan completes, each queued option is called with
  (result, options, commands), in the order its token was seen.
- validation: every required option must hold a truthy value under its name.

Dispatch
- the nested scope gets a copy of this scope's options plus the command's options
  (first declaration wins on collisions), the command's sub-commands, and a help option.
- it parses every token except the command token itself, so options given before the
  command are seen by the command too; each level drops one token, so dispatch ends.
- the command's callback receives the nested result.

Faults
- UnknownOptionError, TypeMismatchError, ParseError and MissingRequiredArgumentError
  abort the parse. Callbacks that already ran are not undone.
- with shell=True faults are printed (rich, stderr) and the process exits with status 1.
"""
import difflib
import logging
import shlex
import sys
from collections.abc import Iterable

from rich.text import Text

from .coercion import OptionType, accepts, coerce, typeof
from .faults import *
from .helper import render
from .options import Option, Command, option, command
from .registry import OptionRegistry, CommandRegistry
from .results import Namespace
from .utils import *

logger = logging.getLogger(__name__)


def _tokenize(prompt):
    """
    Normalize a prompt into a tuple of tokens.

    - Unset: sys.argv[1:]
    - str: shell-style splitting (shlex.split)
    - Iterable[str]: taken as-is
    """
    if prompt is Unset:
        return tuple(sys.argv[1:])
    if isinstance(prompt, str):
        return tuple(shlex.split(prompt))
    if isinstance(prompt, Iterable):
        tokens = tuple(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


def _missing(value):
    # arrays count as supplied even when empty
    return not value and not isinstance(value, list)


class Parser:
    """
    A parse scope: usage text, option registry, command registry and runtime flags.

    Parameters
    - usage: Unset | str | Text
      First line of the help output.
    - options: Iterable[Option]
    - commands: Iterable[Command]
    - shell: bool (keyword-only)
      Print faults and exit(1) instead of raising them.
    - colorful / fancy: bool (keyword-only)
      Rendering flags for faults and help.

    Registries live as long as the parser; every parse starts from an empty result.
    """

    usage = mirror("usage")
    shell = mirror("shell")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(self, usage=Unset, /, options=(), commands=(), *, shell=False, colorful=False, fancy=False):
        self._usage = ""
        self._options = OptionRegistry()
        self._commands = CommandRegistry()
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

        self.define_usage(coalesce(usage, ""))
        for item in options:
            self.add_option(item)
        for item in commands:
            self.add_command(item)

    @property
    def options(self):
        """the live option registry (a read-only sequence with resolve())."""
        return self._options

    @property
    def commands(self):
        """the live command registry (a read-only sequence with get())."""
        return self._commands

    def define_usage(self, message, /):
        if not isinstance(message, str | Text):
            raise TypeError("define_usage() argument must be a string")
        self._usage = message

    def add_option(self, option, /, *args, **kwargs):
        """
        Register an option; returns False when its name or alias is already taken.

        Accepts an Option, or the arguments of Option(...) to build one in place.
        """
        if not isinstance(option, Option):
            option = Option(option, *args, **kwargs)
        elif args or kwargs:
            raise TypeError("add_option() takes no extra arguments when given an option")
        return self._options.add(option)

    def add_options(self, options, /):
        """Register options in order; stops at, and returns False on, the first rejection."""
        for option in options:
            if not self.add_option(option):
                return False
        return True

    def add_command(self, command, /, *args, **kwargs):
        """
        Register a command; returns False when its name is already taken.

        Accepts a Command, or the arguments of Command(...) to build one in place.
        """
        if not isinstance(command, Command):
            command = Command(command, *args, **kwargs)
        elif args or kwargs:
            raise TypeError("add_command() takes no extra arguments when given a command")
        return self._commands.add(command)

    def command(self, name, /, *args, **kwargs):
        """
        Decorator: build a Command around the function, register it, and return it.

            @parser.command("build", options=[Option("verbose", "v", type="boolean")])
            def build(result): ...
        """
        @rename("command")
        def wrapper(callback, /):
            self.add_command(built := command(name, *args, **kwargs)(callback))
            return built

        return wrapper

    def enable_help(self):
        """Register the help/h option, whose callback renders help and exits(0)."""
        @option("help", "h", type=OptionType.ANY, descr="show this help message and exit")
        def helper(result, options, commands):
            render(self.usage, options, commands, colorful=self.colorful, fancy=self.fancy)

        return self.add_option(helper)

    def trigger(self, fault, /, **options):
        """surface a fault with this parser's runtime flags (raises, or exits in shell mode)."""
        trigger(fault, **options, shell=self.shell, colorful=self.colorful, fancy=self.fancy)

    def parse(self, prompt=Unset, /):
        """
        Parse a prompt into a Namespace.

        - prompt: Unset (sys.argv[1:]) | str (shlex-split) | Iterable[str]

        Returns an empty Namespace when a command took over the parse.
        """
        return self._parse(_tokenize(prompt))

    __invoke__ = parse

    def _hint(self):
        if self._options.resolve("help") is not None:
            return "run '--help' to see all available options"
        return "check the declared options"

    def _resolve(self, name):
        if (option := self._options.resolve(name)) is not None:
            return option

        suggestions = difflib.get_close_matches(name, list(self._options.keys()), 5)
        try:
            hint = "did you mean %r? %s" % (suggestions[0], self._hint())
        except IndexError:
            hint = self._hint()
        self.trigger(UnknownOptionError(
            "unknown option %r" % name,
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            name=name,
            suggestions=suggestions,
            hint=hint,
        ))

    def _value(self, option, raw):
        try:
            value = coerce(raw)
        except ParseError as fault:
            self.trigger(fault, name=option.name)

        if not accepts(option.type, value):
            actual = typeof(value)
            self.trigger(TypeMismatchError(
                "option %r expects a %s value but got %s %r" % (option.name, option.type, actual, raw),
                title="type mismatch",
                code=FaultCode.TYPE_MISMATCH,
                name=option.name,
                expected=option.type,
                actual=actual,
                value=value,
                hint="pass a %s after '=' (for example: --%s=<%s>)" % (option.type, option.name, option.type),
            ))
        return value

    def _dispatch(self, command, tokens):
        logger.debug("dispatching command %r with %d remaining tokens", command.name, len(tokens))

        scope = type(self)(self.usage, (), command.commands, shell=self.shell, colorful=self.colorful, fancy=self.fancy)
        scope._options = self._options.copy()
        for option in command.options:
            scope.add_option(option)
        scope.enable_help()

        command(scope._parse(tokens))
        return Namespace()

    def _parse(self, tokens):
        result = Namespace()
        staggered = []

        for index, token in enumerate(tokens):
            if token.startswith("-"):
                name, separator, raw = token.removeprefix("-").removeprefix("-").partition("=")
                option = self._resolve(name)
                if option.callback:
                    staggered.append(option)
                result._assign(option, self._value(option, raw) if separator else True)
            elif (command := self._commands.get(token)) is not None:
                return self._dispatch(command, tokens[:index] + tokens[index + 1:])
            else:
                result._append(token)

        for option in staggered:
            logger.debug("running staggered callback of option %r", option.name)
            option(result, self._options, self._commands)

        for option in self._options:
            if option.required and _missing(result.get(option.name)):
                self.trigger(MissingRequiredArgumentError(
                    "required option %r is missing" % option.name,
                    title="missing required option",
                    code=FaultCode.MISSING_REQUIRED_ARGUMENT,
                    name=option.name,
                    hint="pass --%s%s" % (option.name, "" if option.type is OptionType.BOOLEAN else "=<%s>" % option.type),
                ))

        return result

    def __repr__(self):
        return f"{type(self).__name__}(usage={self.usage!r}, options={list(self._options)!r}, commands={list(self._commands)!r})"


def invoke(object, prompt=Unset, /):
    """
    Convenience runner: parse prompt with anything implementing __invoke__.

    Raises
    - TypeError: when 'object' does not implement __invoke__.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)
    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method")


__all__ = (
    "Parser",
    "invoke",
)
