"""
Options module and registries behavioral tests.

Scope
- Validate Option/Command construction, normalization and rejection of bad metadata.
- Validate decorator helpers (option/command) and callback forwarding.
- Validate registry uniqueness (silent rejection) and single-lookup resolution.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from colarg import Option, Command, OptionType, option, command
from colarg.registry import OptionRegistry, CommandRegistry


class TestOption(TestCase):
    """Behavioral tests for Option specifications."""

    def testFieldsAreMirrored(self):
        spec = Option("count", "c", type="number", default=1, descr="how many")
        self.assertEqual(spec.name, "count")
        self.assertEqual(spec.alias, "c")
        self.assertIs(spec.type, OptionType.NUMBER)
        self.assertEqual(spec.default, 1)
        self.assertEqual(spec.descr, "how many")
        self.assertFalse(spec.required)
        self.assertIsNone(spec.callback)

    def testDefaultsWhenOmitted(self):
        spec = Option("count")
        self.assertIsNone(spec.alias)
        self.assertIs(spec.type, OptionType.ANY)
        self.assertIsNone(spec.default)
        self.assertIsNone(spec.descr)
        self.assertEqual(spec.keys, ("count",))

    def testKeysIncludeAlias(self):
        self.assertEqual(Option("count", "c").keys, ("count", "c"))

    def testTypeIsCaseInsensitive(self):
        self.assertIs(Option("count", type="NUMBER").type, OptionType.NUMBER)

    def testFieldsAreReadOnly(self):
        spec = Option("count")
        with self.assertRaises(AttributeError):
            spec.name = "other"

    def testDescrIsTrimmed(self):
        self.assertEqual(Option("count", descr="  how many  ").descr, "how many")

    def testDashedNameRejected(self):
        with self.assertRaises(ValueError):
            Option("--count")

    def testEmptyNameRejected(self):
        with self.assertRaises(ValueError):
            Option("   ")

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Option(3)

    def testNameWithSpacesOrEqualsRejected(self):
        for name in ("a b", "x=y"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    Option(name)

    def testAliasEqualToNameRejected(self):
        with self.assertRaises(ValueError):
            Option("count", "count")

    def testReservedDefaultNameRejected(self):
        with self.assertRaises(ValueError):
            Option("default")
        with self.assertRaises(ValueError):
            Option("positionals", "default")

    def testUnknownTypeRejected(self):
        with self.assertRaises(ValueError):
            Option("count", type="integer")

    def testNonStringTypeRejected(self):
        with self.assertRaises(TypeError):
            Option("count", type=int)

    def testEmptyDescrRejected(self):
        with self.assertRaises(ValueError):
            Option("count", descr="  ")

    def testNonCallableCallbackRejected(self):
        with self.assertRaises(TypeError):
            Option("count", callback=3)

    def testCallWithoutCallbackIsNoop(self):
        self.assertIsNone(Option("count")(None, (), ()))

    def testReprListsFields(self):
        self.assertTrue(repr(Option("count", "c")).startswith("option(name='count', alias='c'"))


class TestOptionDecorator(TestCase):
    """Behavioral tests for the @option factory."""

    def testDecoratorBindsCallback(self):
        calls = []

        @option("trace", "t", descr="trace calls")
        def trace(result, options, commands):
            calls.append((result, options, commands))
            return "traced"

        self.assertIsInstance(trace, Option)
        self.assertEqual(trace.name, "trace")
        self.assertEqual(trace.descr, "trace calls")
        self.assertEqual(trace("result", "options", "commands"), "traced")
        self.assertEqual(calls, [("result", "options", "commands")])

    def testDecoratorRequiresCallable(self):
        with self.assertRaises(TypeError):
            option("trace")(42)


class TestCommand(TestCase):
    """Behavioral tests for Command specifications."""

    def testFieldsAreMirrored(self):
        verbose = Option("verbose", "v", type="boolean")
        spec = Command("build", descr="build it", options=[verbose])
        self.assertEqual(spec.name, "build")
        self.assertEqual(spec.descr, "build it")
        self.assertEqual(spec.options, (verbose,))
        self.assertEqual(spec.commands, ())
        self.assertIsNone(spec.callback)

    def testSubCommands(self):
        child = Command("add")
        self.assertEqual(Command("remote", commands=[child]).commands, (child,))

    def testStringOptionsRejected(self):
        with self.assertRaises(TypeError):
            Command("build", options="verbose")

    def testNonOptionItemsRejected(self):
        with self.assertRaises(TypeError):
            Command("build", options=[1])

    def testNonCommandChildrenRejected(self):
        with self.assertRaises(TypeError):
            Command("build", commands=[Option("verbose")])

    def testDashedNameRejected(self):
        with self.assertRaises(ValueError):
            Command("-build")

    def testDecoratorBindsCallback(self):
        @command("build", descr="build it")
        def build(result):
            return result

        self.assertIsInstance(build, Command)
        self.assertEqual(build("result"), "result")


class TestOptionRegistry(TestCase):
    """Uniqueness and lookup of options."""

    def setUp(self):
        self.registry = OptionRegistry()
        self.verbose = Option("verbose", "v", type="boolean")

    def testAddAccepts(self):
        self.assertTrue(self.registry.add(self.verbose))
        self.assertEqual(list(self.registry), [self.verbose])

    def testDuplicateNameRejected(self):
        self.registry.add(self.verbose)
        self.assertFalse(self.registry.add(Option("verbose", "x")))
        self.assertEqual(len(self.registry), 1)

    def testDuplicateAliasRejected(self):
        self.registry.add(self.verbose)
        self.assertFalse(self.registry.add(Option("version", "v")))
        self.assertEqual(len(self.registry), 1)

    def testOptionsWithoutAliasDoNotCollide(self):
        self.assertTrue(self.registry.add(Option("one")))
        self.assertTrue(self.registry.add(Option("two")))

    def testResolveByNameAndAlias(self):
        self.registry.add(self.verbose)
        self.assertIs(self.registry.resolve("verbose"), self.verbose)
        self.assertIs(self.registry.resolve("v"), self.verbose)
        self.assertIsNone(self.registry.resolve("x"))

    def testNameWinsOverAlias(self):
        named = Option("v", "x")
        self.registry.add(self.verbose)
        self.registry.add(named)
        self.assertIs(self.registry.resolve("v"), named)

    def testKeysInDeclarationOrder(self):
        self.registry.add(self.verbose)
        self.registry.add(Option("count"))
        self.assertEqual(list(self.registry.keys()), ["verbose", "v", "count"])

    def testCopyIsIndependent(self):
        self.registry.add(self.verbose)
        clone = self.registry.copy()
        clone.add(Option("count"))
        self.assertEqual(len(self.registry), 1)
        self.assertEqual(len(clone), 2)

    def testNonOptionRejected(self):
        with self.assertRaises(TypeError):
            self.registry.add("verbose")


class TestCommandRegistry(TestCase):
    """Uniqueness and lookup of commands."""

    def testDuplicateNameRejected(self):
        registry = CommandRegistry([Command("build")])
        self.assertFalse(registry.add(Command("build", descr="again")))
        self.assertEqual(len(registry), 1)

    def testGet(self):
        build = Command("build")
        registry = CommandRegistry([build])
        self.assertIs(registry.get("build"), build)
        self.assertIsNone(registry.get("test"))


if __name__ == "__main__":
    unittest.main()
