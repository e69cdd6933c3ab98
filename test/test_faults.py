"""
Fault hierarchy, codes and rendering tests.
"""
import io
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console
from rich.panel import Panel

from greedyflag import *


def capture(renderable):
    console = Console(file=io.StringIO(), width=160, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestFaultHierarchy(TestCase):

    def testFamilies(self):
        self.assertTrue(issubclass(DuplicateFlagError, ConfigError))
        self.assertTrue(issubclass(PolicyLockedError, ConfigError))
        self.assertTrue(issubclass(UnknownFlagError, ParseError))
        self.assertTrue(issubclass(CountMismatchError, ParseError))
        self.assertFalse(issubclass(HelpRequested, ParseError))
        self.assertTrue(issubclass(HelpRequested, GreedyFlagException))

    def testStatuses(self):
        self.assertEqual(UnexpectedArgumentError(("a",)).status, 2)
        self.assertEqual(HelpRequested().status, 0)

    def testCodesAreUnique(self):
        values = [code.value for code in FaultCode]
        self.assertEqual(len(values), len(set(values)))

    def testCodeNormalizationDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_FLAG.normalize(), "14101")

    def testCodeNormalizationHostOverride(self):
        main = __import__("__main__")
        with patch.object(main, "__codes__", {FaultCode.UNKNOWN_FLAG: "E-UNKNOWN"}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_FLAG.normalize(), "E-UNKNOWN")
            self.assertEqual(FaultCode.COUNT_MISMATCH.normalize(), "15104")


class TestFaultData(TestCase):

    def testCountMismatchMessage(self):
        fault = CountMismatchError(2, 1, ["a"])
        self.assertEqual((fault.expected, fault.found, fault.tokens), (2, 1, ("a",)))
        self.assertIn("expected exactly 2 positional arguments, found 1", fault.message)

    def testCountMismatchSingular(self):
        self.assertIn("exactly 1 positional argument,", CountMismatchError(1, 0).message)

    def testUnexpectedArgumentMessage(self):
        fault = UnexpectedArgumentError(["a", "b"], index=4)
        self.assertEqual(fault.tokens, ("a", "b"))
        self.assertIn("unexpected arguments at fourth position", fault.message)

    def testUnknownFlagHint(self):
        fault = UnknownFlagError("--nmae", "--nmae", index=1, suggestions=["--name"])
        self.assertIn("first position", fault.message)
        self.assertIn("--name", fault.hint)

    def testSplitPositionals(self):
        fault = SplitPositionalsError(["a"], ["b", "c"])
        self.assertEqual(fault.leading, ("a",))
        self.assertEqual(fault.trailing, ("b", "c"))

    def testMissingArgumentIsPositionFirst(self):
        flag = Flag("name", "n", StringValue())
        fault = MissingArgumentError(flag, "-n", index=3)
        self.assertEqual(str(fault), "flag '-n' at third position needs an argument")


class TestFaultRendering(TestCase):

    def testPlainHeaderAndHint(self):
        fault = UnknownFlagError("-z", "-z", index=2)
        output = capture(fault.render(prog="tool", colorful=False))
        self.assertIn("[ tool — 14101 | Unknown Flag ]", output)
        self.assertIn("unknown flag '-z' at second position", output)
        self.assertIn("→ try '--help'", output)

    def testFancyPanel(self):
        fault = AlreadyParsedError()
        self.assertIsInstance(fault.render(prog="tool", fancy=True), Panel)

    def testRichProtocol(self):
        self.assertIn("Already Parsed", capture(AlreadyParsedError()))


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        with self.assertRaises(NegativeCountError):
            trigger(NegativeCountError(-2))

    def testExitsInShell(self):
        with patch("greedyflag.faults.console", Console(file=io.StringIO())):
            with self.assertRaises(SystemExit) as context:
                trigger(NegativeCountError(-2), shell=True, prog="tool")
        self.assertEqual(context.exception.code, 2)

    def testHelpExitsWithZero(self):
        with patch("greedyflag.faults.console", Console(file=io.StringIO())):
            with self.assertRaises(SystemExit) as context:
                trigger(HelpRequested(), shell=True, usage="usage: tool")
        self.assertEqual(context.exception.code, 0)

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("boom"))


if __name__ == "__main__":
    unittest.main()
