"""
Flag registry tests.

Scope
- Flag identity validation (long names, shorthands) and metadata exposure.
- FlagSet definition helpers, duplicate detection and lookups.
- Positional policy configuration through the FlagSet shortcuts.
- The reserved help flag and parse() argument checks.
"""
import unittest
from unittest import TestCase

from greedyflag import *


class TestFlag(TestCase):

    def testMetadata(self):
        flag = Flag("ext", "e", StringListValue(["go"]), "  extensions  ")
        self.assertEqual(flag.name, "ext")
        self.assertEqual(flag.shorthand, "e")
        self.assertEqual(flag.usage, "extensions")
        self.assertEqual(flag.default, "[go]")
        self.assertTrue(flag.greedy)
        self.assertFalse(flag.boolean)
        self.assertFalse(flag.changed)

    def testDefaultIsInitialRendering(self):
        value = StringValue("x")
        flag = Flag("name", "", value)
        value.set("y")
        self.assertEqual(flag.default, "x")
        self.assertEqual(flag.get(), "y")

    def testIdentityIsReadOnly(self):
        flag = Flag("name", "n", StringValue())
        with self.assertRaises(AttributeError):
            flag.name = "other"

    def testInvalidNames(self):
        for name in ("", "-name", "--name", "a=b", "a b"):
            with self.subTest(name=name):
                with self.assertRaises(InvalidFlagError):
                    Flag(name, "", StringValue())

    def testInvalidShorthands(self):
        for shorthand in ("ab", "-", "=", " ", "5"):
            with self.subTest(shorthand=shorthand):
                with self.assertRaises(InvalidFlagError):
                    Flag("name", shorthand, StringValue())

    def testNonStringIdentityRejected(self):
        with self.assertRaises(TypeError):
            Flag(1, "", StringValue())
        with self.assertRaises(TypeError):
            Flag("name", None, StringValue())

    def testValueMustImplementContract(self):
        with self.assertRaises(TypeError):
            Flag("name", "", "value")

    def testRepr(self):
        self.assertIn("name='verbose'", repr(Flag("verbose", "v", BooleanValue())))


class TestFlagSet(TestCase):

    def testDefiners(self):
        flags = FlagSet("tool")
        verbose = flags.boolean("verbose", "v", usage="chatty")
        name = flags.string("name", default="anon")
        ext = flags.string_list("ext", "e")
        self.assertIs(flags.lookup("verbose"), verbose)
        self.assertIs(flags.lookup_short("e"), ext)
        self.assertIsNone(flags.lookup_short("n"))
        self.assertEqual(name.get(), "anon")
        self.assertEqual(len(flags), 3)
        self.assertIn("ext", flags)

    def testIterationSortedByName(self):
        flags = FlagSet("tool")
        flags.boolean("zeta")
        flags.boolean("alpha")
        flags.boolean("mid")
        self.assertEqual([flag.name for flag in flags], ["alpha", "mid", "zeta"])

    def testDuplicateName(self):
        flags = FlagSet("tool")
        flags.boolean("verbose", "v")
        with self.assertRaises(DuplicateFlagError) as context:
            flags.string("verbose")
        self.assertEqual(context.exception.name, "verbose")

    def testDuplicateShorthand(self):
        flags = FlagSet("tool")
        flags.boolean("verbose", "v")
        with self.assertRaises(DuplicateShorthandError) as context:
            flags.boolean("version", "v")
        self.assertEqual(context.exception.owner, "verbose")
        self.assertNotIn("version", flags)

    def testDefineRequiresFlag(self):
        with self.assertRaises(TypeError):
            FlagSet("tool").define("verbose")

    def testNameFallsBackToProgramName(self):
        self.assertTrue(FlagSet().name)
        self.assertEqual(FlagSet(" tool ").name, "tool")

    def testEmptyNameRejected(self):
        with self.assertRaises(ValueError):
            FlagSet("  ")

    def testVisitOnlyChangedFlags(self):
        flags = FlagSet("tool")
        flags.boolean("verbose", "v")
        flags.boolean("quiet", "q")
        flags.parse(["-q"])
        seen, every = [], []
        flags.visit(lambda flag: seen.append(flag.name))
        flags.visit_all(lambda flag: every.append(flag.name))
        self.assertEqual(seen, ["quiet"])
        self.assertEqual(every, ["help", "quiet", "verbose"])

    def testParseRejectsString(self):
        with self.assertRaises(TypeError):
            FlagSet("tool").parse("-v")

    def testParseRejectsNonStringTokens(self):
        flags = FlagSet("tool")
        with self.assertRaises(TypeError):
            flags.parse(["-v", 1])
        self.assertFalse(flags.parsed)

    def testResultBeforeAndAfterParse(self):
        flags = FlagSet("tool")
        self.assertIsNone(flags.result)
        result = flags.parse([])
        self.assertIs(flags.result, result)
        self.assertTrue(flags.parsed)


class TestHelpFlag(TestCase):

    def testHelpInstalledAtParse(self):
        flags = FlagSet("tool")
        self.assertNotIn("help", flags)
        flags.parse([])
        self.assertIn("help", flags)
        self.assertEqual(flags.lookup("help").shorthand, "h")

    def testHelpShorthandLeftToUser(self):
        flags = FlagSet("tool")
        host = flags.string("host", "h")
        result = flags.parse(["-h", "localhost"])
        self.assertEqual(result["host"], "localhost")
        self.assertEqual(flags.lookup("help").shorthand, "")
        self.assertIs(flags.lookup_short("h"), host)

    def testUserDefinedHelpStillSignals(self):
        flags = FlagSet("tool")
        flags.boolean("help", "?")
        with self.assertRaises(HelpRequested):
            flags.parse(["-?"])

    def testNoHelperNoHelpFlag(self):
        flags = FlagSet("tool", helper=False)
        flags.parse([])
        self.assertNotIn("help", flags)


class TestPositionalPolicy(TestCase):

    def testDefaultIsNone(self):
        self.assertIs(FlagSet("tool").positionals.mode, Mode.NONE)

    def testArbitraryLeading(self):
        flags = FlagSet("tool")
        flags.arbitrary_leading()
        self.assertIs(flags.positionals.mode, Mode.ARBITRARY_LEADING)
        self.assertIsNone(flags.positionals.count)

    def testMandatory(self):
        flags = FlagSet("tool")
        flags.mandatory(3)
        self.assertIs(flags.positionals.mode, Mode.MANDATORY_N)
        self.assertEqual(flags.positionals.count, 3)

    def testReselectingSamePolicyUpdatesCount(self):
        flags = FlagSet("tool")
        flags.mandatory(3)
        flags.mandatory(1)
        self.assertEqual(flags.positionals.count, 1)

    def testConflictingPolicies(self):
        flags = FlagSet("tool")
        flags.arbitrary_leading()
        with self.assertRaises(PolicyConflictError) as context:
            flags.mandatory(2)
        self.assertIs(context.exception.current, Mode.ARBITRARY_LEADING)
        self.assertIs(context.exception.requested, Mode.MANDATORY_N)

    def testPolicyLockedAfterFirstFlag(self):
        flags = FlagSet("tool")
        flags.boolean("verbose")
        self.assertTrue(flags.positionals.locked)
        with self.assertRaises(PolicyLockedError):
            flags.arbitrary_leading()
        with self.assertRaises(PolicyLockedError):
            flags.positionals.none()

    def testNegativeCount(self):
        with self.assertRaises(NegativeCountError) as context:
            FlagSet("tool").mandatory(-1)
        self.assertEqual(context.exception.count, -1)

    def testCountMustBeInteger(self):
        for count in ("2", 2.0, True):
            with self.subTest(count=count):
                with self.assertRaises(TypeError):
                    FlagSet("tool").mandatory(count)

    def testRepr(self):
        positionals = Positionals()
        positionals.mandatory(2)
        self.assertEqual(repr(positionals), "Positionals(mandatory_n, 2)")


if __name__ == "__main__":
    unittest.main()
