"""
Faults behavioral tests (trigger, replace, escalation, rendering).

Scope
- Validate trigger() for errors, warnings and invalid arguments.
- Validate option merging through copy.replace().
- Validate the rich rendering of headers, hints and host documentation.

Conventions
- Test method names follow CamelCase per project convention.
- Host hooks (__prog__, __docs__, __codes__) are patched on __main__ and removed afterwards.
"""
import copy
import io
import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console
from rich.panel import Panel

from argot import (
    FaultCode,
    Warner,
    trigger,
    getdoc,
    CommandException,
    ProtectionError,
    UnknownCommandError,
    EmptyNameError,
    CommandWarning,
    InvalidArgumentWarning,
    UnknownEventWarning,
)


def _render(fault):
    console = Console(file=io.StringIO(), color_system=None, width=200)
    console.print(fault)
    return console.file.getvalue()


class TestTrigger(TestCase):

    def testErrorsRaise(self):
        with self.assertRaises(EmptyNameError) as context:
            trigger(EmptyNameError("command name must not be empty"), source="CLI")
        self.assertEqual(context.exception.options["source"], "CLI")

    def testWarningsGoToTheWarner(self):
        warner = Warner("silent", console=Console(file=io.StringIO()))
        trigger(UnknownEventWarning("bad event"), warner=warner)
        self.assertEqual(warner.count(), 1)
        self.assertIsInstance(warner.warnings[0], UnknownEventWarning)

    def testWarningsWithoutWarnerUseWarningsModule(self):
        with self.assertWarns(InvalidArgumentWarning):
            trigger(InvalidArgumentWarning("bad name"))

    def testInvalidFaultRaises(self):
        with self.assertRaises(TypeError):
            trigger(object())
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestFaultObjects(TestCase):

    def testReplaceMergesOptions(self):
        fault = UnknownCommandError("unknown", hint="try build", source="CLI")
        replaced = copy.replace(fault, source="tool", fancy=True)
        self.assertIsInstance(replaced, UnknownCommandError)
        self.assertEqual(replaced.message, "unknown")
        self.assertEqual(dict(replaced.options), {"hint": "try build", "source": "tool", "fancy": True})
        self.assertEqual(dict(fault.options), {"hint": "try build", "source": "CLI"})

    def testOptionsAreReadOnly(self):
        fault = InvalidArgumentWarning("bad", hint="x")
        with self.assertRaises(TypeError):
            fault.options["hint"] = "y"  # type: ignore[index]

    def testCodeAndTitleOverrides(self):
        fault = CommandException("custom", code=FaultCode.EMPTY_NAME, title="custom title")
        self.assertEqual(fault.code, FaultCode.EMPTY_NAME)
        self.assertEqual(fault.title, "custom title")
        self.assertEqual(CommandException("plain").title, "error")

    def testEscalateBuildsProtectionError(self):
        warner = Warner("silent", console=Console(file=io.StringIO()))
        warning = InvalidArgumentWarning("bad name", hint="stringified", warner=warner, instantly=True)
        error = warning.__escalate__()
        self.assertIsInstance(error, ProtectionError)
        self.assertEqual(error.message, "bad name")
        self.assertEqual(error.code, FaultCode.PROTECTION_VIOLATION)
        self.assertIs(error.options["warning"], warning)
        self.assertNotIn("warner", error.options)
        self.assertNotIn("instantly", error.options)

    def testHierarchy(self):
        self.assertTrue(issubclass(ProtectionError, CommandException))
        self.assertTrue(issubclass(CommandException, Exception))
        self.assertTrue(issubclass(UnknownEventWarning, CommandWarning))
        self.assertTrue(issubclass(CommandWarning, Warning))


class TestRendering(TestCase):

    def testHeaderMessageAndHint(self):
        output = _render(UnknownCommandError("unknown command 'biuld'", hint="did you mean 'build'?", source="CLI"))
        self.assertIn("[ CLI — 11101 | Unknown Command ]", output)
        self.assertIn("unknown command 'biuld'", output)
        self.assertIn("→ did you mean 'build'?", output)

    def testDefaultSource(self):
        self.assertIn("[ argot — 12203 | Unknown Event ]", _render(UnknownEventWarning("bad event")))

    def testFancyUsesPanel(self):
        fault = EmptyNameError("empty", fancy=True)
        self.assertIsInstance(fault.__rich__(), Panel)
        self.assertIn("empty", _render(fault))

    def testColorlessRendering(self):
        output = _render(EmptyNameError("empty", colorful=False))
        self.assertIn("Empty Name", output)

    def testHostHooks(self):
        main = sys.modules["__main__"]
        with (
            patch.object(main, "__prog__", "deploy-tool", create=True),
            patch.object(main, "__docs__", {FaultCode.EMPTY_NAME: "names cannot be blank"}, create=True),
            patch.object(main, "__codes__", {FaultCode.EMPTY_NAME: "E-EMPTY"}, create=True),
        ):
            output = _render(EmptyNameError("empty", source="CLI"))
            self.assertIn("[ deploy-tool — E-EMPTY | Empty Name ]", output)
            self.assertIn("names cannot be blank", output)
            self.assertEqual(getdoc(FaultCode.EMPTY_NAME), "names cannot be blank")
        self.assertEqual(FaultCode.EMPTY_NAME.normalize(), "11203")


class TestGetdoc(TestCase):

    def testMissingDocIsNone(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_COMMAND))

    def testNonCodeRaises(self):
        with self.assertRaises(TypeError):
            getdoc(11101)


if __name__ == "__main__":
    unittest.main()
