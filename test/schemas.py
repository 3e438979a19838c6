"""
Schema derivation tests (roles, names, defaults, template errors).

Scope
- Validate that header, option and argument roles are decided per field.
- Validate option naming (kebab-case, Name overrides) and argument order.
- Validate that malformed templates raise TemplateError with a useful label.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from datetime import timedelta
from typing import Annotated, ClassVar
from unittest import TestCase

from declargs import derive, Name, TemplateError, OptionDef, ArgumentDef


class Fetch:
    __command__: Annotated[str, "fetch|Download a remote resource"]
    retries: Annotated[int | None, "3|How many times to retry"]
    timeout: Annotated[timedelta | None, "Give up after this long"]
    url: Annotated[str, "Where to download from"]
    output: Annotated[str, "Where to write it"]


class TestDerive(TestCase):
    """Roles, names and ordering of derived schemas."""

    def testHeader(self):
        schema, = derive([Fetch])
        self.assertIs(schema.template, Fetch)
        self.assertEqual(schema.name, "fetch")
        self.assertEqual(schema.usage, "Download a remote resource")

    def testArgumentsKeepDeclarationOrder(self):
        schema, = derive([Fetch])
        self.assertEqual([argument.field for argument in schema.arguments], ["url", "output"])
        self.assertEqual(schema.arguments[0], ArgumentDef("url", "url", "Where to download from", str))

    def testOptions(self):
        schema, = derive([Fetch])
        self.assertEqual(list(schema.options), ["retries", "timeout"])
        self.assertEqual(schema.options["retries"], OptionDef("retries", "How many times to retry", int | None, "3"))
        self.assertIsNone(schema.options["timeout"].default)

    def testOptionsAreReadOnly(self):
        schema, = derive([Fetch])
        with self.assertRaises(TypeError):
            schema.options["extra"] = None  # type: ignore[index]

    def testOptionNamesAreKebabCase(self):
        class Mixed:
            __command__: Annotated[str, "mixed|Mixed naming"]
            FlagInt: Annotated[int | None, "A flag"]
            dry_run: Annotated[bool | None, "A flag"]
            maxDepth: Annotated[int | None, "A flag"]

        schema, = derive([Mixed])
        self.assertEqual(list(schema.options), ["flag-int", "dry-run", "max-depth"])

    def testNameOverrides(self):
        class Renamed:
            __command__: Annotated[str, "renamed|Renamed fields"]
            verbose: Annotated[bool | None, "false|Talk more", Name("v")]
            source: Annotated[str, "Input file", Name("SRC")]

        schema, = derive([Renamed])
        self.assertEqual(list(schema.options), ["v"])
        self.assertEqual(schema.options["v"].field, "verbose")
        self.assertEqual(schema.arguments[0].name, "SRC")

    def testClassVarsAreIgnored(self):
        class WithConstant:
            __command__: Annotated[str, "const|Has a constant"]
            LIMIT: ClassVar[int] = 3
            path: Annotated[str, "A path"]

        schema, = derive([WithConstant])
        self.assertEqual(len(schema.arguments), 1)
        self.assertEqual(len(schema.options), 0)

    def testInstancesUseTheirClass(self):
        schema, = derive([Fetch()])
        self.assertIs(schema.template, Fetch)

    def testOrderIsPreserved(self):
        class Other:
            __command__: Annotated[str, "other|Something else"]

        names = [schema.name for schema in derive([Other, Fetch])]
        self.assertEqual(names, ["other", "fetch"])

    def testEmptyCommandSet(self):
        self.assertEqual(derive([]), ())


class TestTemplateErrors(TestCase):
    """Malformed declarations raise TemplateError."""

    def assertTemplateError(self, template, fragment):
        with self.assertRaises(TemplateError) as context:
            derive([template])
        self.assertIn(fragment, str(context.exception))

    def testMissingHeader(self):
        class Headless:
            path: Annotated[str, "A path"]

        self.assertTemplateError(Headless, "command missing name/usage")

    def testHeaderWithoutUsage(self):
        class Nameless:
            __command__: Annotated[str, "nameless"]

        self.assertTemplateError(Nameless, "command missing usage")

    def testHeaderWithTooManySegments(self):
        class Overfull:
            __command__: Annotated[str, "a|b|c"]

        self.assertTemplateError(Overfull, "command missing usage")

    def testOptionWithTooManySegments(self):
        class Overfull:
            __command__: Annotated[str, "over|Overfull option"]
            count: Annotated[int | None, "1|2|three"]

        self.assertTemplateError(Overfull, "flag missing usage")

    def testArgumentWithTwoSegments(self):
        class Defaulted:
            __command__: Annotated[str, "defaulted|Defaulted argument"]
            path: Annotated[str, "x|A path"]

        self.assertTemplateError(Defaulted, "argument lacks exactly one field")

    def testReservedOptionName(self):
        class Helpful:
            __command__: Annotated[str, "helpful|Shadows help"]
            help: Annotated[bool | None, "Show help"]

        self.assertTemplateError(Helpful, "reserved")

    def testClashingOptionNames(self):
        class Clash:
            __command__: Annotated[str, "clash|Clashing options"]
            dry_run: Annotated[bool | None, "A flag"]
            dryRun: Annotated[bool | None, "Another flag"]

        self.assertTemplateError(Clash, "already in use")

    def testInvalidOverride(self):
        class Spaced:
            __command__: Annotated[str, "spaced|Bad override"]
            level: Annotated[int | None, "A level", Name("lev el")]

        self.assertTemplateError(Spaced, "not a valid option name")

    def testErrorNamesTheTemplate(self):
        class Headless:
            path: Annotated[str, "A path"]

        self.assertTemplateError(Headless, "Headless")

    def testStringIsNotACommandSet(self):
        with self.assertRaises(TemplateError):
            derive("fetch")

    def testTemplateErrorIsATypeError(self):
        self.assertTrue(issubclass(TemplateError, TypeError))


if __name__ == "__main__":
    unittest.main()
