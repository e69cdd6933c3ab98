"""
Runner tests: prompt tokenization and invoke() in library and shell mode.
"""
import io
import logging
import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console
from rich.logging import RichHandler

from greedyflag import *


class TestTokenize(TestCase):

    def testShellString(self):
        self.assertEqual(tokenize("-e 'a b' c"), ["-e", "a b", "c"])

    def testIterableKeepsEmptyStrings(self):
        self.assertEqual(tokenize(("--name", "")), ["--name", ""])

    def testDefaultsToArgv(self):
        with patch.object(sys, "argv", ["tool", "-v", "x"]):
            self.assertEqual(tokenize(), ["-v", "x"])

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            tokenize(["-v", 3])
        with self.assertRaises(TypeError):
            tokenize(42)


class TestInvoke(TestCase):

    def build(self, **options):
        flags = FlagSet("tool", **options)
        flags.arbitrary_leading()
        flags.string_list("ext", "e")
        flags.boolean("verbose", "v")
        return flags

    def testReturnsResult(self):
        result = invoke(self.build(), "src -v -e go mod")
        self.assertEqual(result.args, ("src",))
        self.assertEqual(result["ext"], ("go", "mod"))

    def testFaultsPropagateOutsideShell(self):
        with self.assertRaises(UnknownFlagError):
            invoke(self.build(), "--bogus")

    def testHelpPropagatesOutsideShell(self):
        with self.assertRaises(HelpRequested):
            invoke(self.build(), "-h")

    def testShellModeExitsWithErrorStatus(self):
        with patch("greedyflag.faults.console", Console(file=io.StringIO())) as console:
            with self.assertRaises(SystemExit) as context:
                invoke(self.build(shell=True, colorful=False), "src -v extra")
        self.assertEqual(context.exception.code, 2)
        self.assertIn("unexpected argument", console.file.getvalue())

    def testShellModeHelpPrintsUsage(self):
        with patch("greedyflag.faults.console", Console(file=io.StringIO(), width=120)) as console:
            with self.assertRaises(SystemExit) as context:
                invoke(self.build(shell=True, colorful=False), "--help")
        self.assertEqual(context.exception.code, 0)
        self.assertIn("usage: tool [ARGS...] [flags]", console.file.getvalue())

    def testDebugAttachesRichHandler(self):
        logger = logging.getLogger("greedyflag")
        self.addCleanup(logger.setLevel, logger.level)
        self.addCleanup(setattr, logger, "handlers", list(logger.handlers))
        invoke(self.build(), "-v", debug=True)
        invoke(self.build(), "-v", debug=True)
        handlers = [handler for handler in logger.handlers if isinstance(handler, RichHandler)]
        self.assertEqual(len(handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
