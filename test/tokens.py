"""
Tokenizer tests (positional split, flag pairing, help skipping).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from declargs.faults import MissingFlagValueError, FaultCode
from declargs.tokens import tokenize, FlagToken, RawInput


class TestTokenize(TestCase):
    """Splitting raw argument vectors."""

    def testPositionalsOnly(self):
        self.assertEqual(
            tokenize(["tool", "copy", "a", "b"]),
            RawInput("tool", "copy", ("a", "b"), ()),
        )

    def testFlagsPairWithTheirValue(self):
        raw = tokenize(["tool", "copy", "-force", "true", "a", "-level", "3", "b"])
        self.assertEqual(raw.arguments, ("a", "b"))
        self.assertEqual(raw.flags, (FlagToken("force", "true"), FlagToken("level", "3")))

    def testOnlyOneDashIsRemoved(self):
        raw = tokenize(["tool", "copy", "--force", "true"])
        self.assertEqual(raw.flags, (FlagToken("-force", "true"),))

    def testValueIsTakenUnconditionally(self):
        raw = tokenize(["tool", "copy", "-offset", "-3"])
        self.assertEqual(raw.flags, (FlagToken("offset", "-3"),))
        self.assertEqual(raw.arguments, ())

    def testRepeatedFlagsAreKeptInOrder(self):
        raw = tokenize(["tool", "copy", "-n", "1", "-n", "2"])
        self.assertEqual([flag.value for flag in raw.flags], ["1", "2"])

    def testHelpRequestsAreSkipped(self):
        raw = tokenize(["tool", "help", "copy", "-h", "a", "--help", "-help"])
        self.assertEqual(raw, RawInput("tool", "copy", ("a",), ()))

    def testEmptyVector(self):
        self.assertEqual(tokenize([]), RawInput(None, None, (), ()))

    def testBinaryOnly(self):
        self.assertEqual(tokenize(["tool"]), RawInput("tool", None, (), ()))

    def testTrailingFlagWithoutValue(self):
        with self.assertRaises(MissingFlagValueError) as context:
            tokenize(["tool", "copy", "a", "-force"])
        fault = context.exception
        self.assertEqual(fault.message, 'missing value for flag "force"')
        self.assertEqual(fault.options["code"], FaultCode.MISSING_FLAG_VALUE)
        self.assertEqual(fault.options["index"], 3)

    def testTrailingHelpIsNotAFlag(self):
        raw = tokenize(["tool", "copy", "a", "-h"])
        self.assertEqual(raw.arguments, ("a",))


if __name__ == "__main__":
    unittest.main()
