"""
Option declaration behavioral tests (Descriptor, factories, OptionTable validation).

Scope
- Validate that a well-formed declaration is accepted and read-only.
- Validate one violation per test: missing identifier, non-alphanumeric identifier,
  boolean with hint, non-boolean without hint, empty description, and duplicate
  short/long/keyword values.
- Validate that faults name the offending position and field.
- Validate lookups (by_short/by_long/by_keyword/find).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argscribe import (
    MAX_NAME_LENGTH,
    BooleanHintError,
    ConfigurationError,
    Descriptor,
    DuplicateIdentifierError,
    EmptyDescriptionError,
    EmptyTableError,
    IdentifierTooLongError,
    InvalidDescriptorError,
    MalformedIdentifierError,
    MissingHintError,
    MissingIdentifierError,
    OptionTable,
    flag,
    option,
)


def sample():
    return [
        flag("v", "verbose", descr="Prints verbose messages"),
        option("a", "add", hint="<money>", descr="Adds a record", group="records"),
        option(keyword="sort", hint="<order>", descr="Sorts records"),
    ]


class TestDescriptor(TestCase):
    """Behavioral tests for Descriptor and its factories."""

    def testFlagIsBoolean(self):
        d = flag("v", "verbose", descr="Prints verbose messages")
        self.assertTrue(d.boolean)
        self.assertIsNone(d.hint)

    def testOptionIsNonBoolean(self):
        d = option("a", "add", hint="<money>", descr="Adds a record")
        self.assertFalse(d.boolean)
        self.assertEqual(d.hint, "<money>")

    def testEmptyStringsAreAbsent(self):
        d = Descriptor(True, "", "verbose", "", "", "Prints", "")
        self.assertIsNone(d.short)
        self.assertIsNone(d.keyword)
        self.assertIsNone(d.hint)
        self.assertIsNone(d.group)
        self.assertEqual(d.identifiers, (("long", "verbose"),))

    def testFieldsAreReadOnly(self):
        d = flag("v", descr="Prints")
        with self.assertRaises(AttributeError):
            d.short = "x"

    def testNonStringIdentifierRejected(self):
        with self.assertRaises(TypeError):
            Descriptor(True, 1, descr="Prints")

    def testReprMentionsProvidedFields(self):
        self.assertIn("long='verbose'", repr(flag(long="verbose", descr="Prints")))


class TestOptionTableValidation(TestCase):
    """Behavioral tests for OptionTable validation."""

    def testValidTableAccepted(self):
        table = OptionTable(sample())
        self.assertEqual(len(table), 3)
        self.assertEqual(table[1].long, "add")

    def testMissingIdentifier(self):
        with self.assertRaises(MissingIdentifierError) as context:
            OptionTable(sample() + [flag(descr="Nameless")])
        self.assertEqual(context.exception.index, 3)
        self.assertEqual(context.exception.field, "identifier")

    def testNonAlphanumericIdentifier(self):
        with self.assertRaises(MalformedIdentifierError) as context:
            OptionTable([flag(long="dry-run", descr="Pretends")])
        self.assertEqual(context.exception.index, 0)
        self.assertEqual(context.exception.field, "long")

    def testNonAlphanumericKeyword(self):
        with self.assertRaises(MalformedIdentifierError) as context:
            OptionTable([flag(keyword="a b", descr="Spaced")])
        self.assertEqual(context.exception.field, "keyword")

    def testMultiCharacterShortRejected(self):
        with self.assertRaises(MalformedIdentifierError) as context:
            OptionTable([flag("vv", descr="Very verbose")])
        self.assertEqual(context.exception.field, "short")

    def testOverlongLongNameRejected(self):
        with self.assertRaises(IdentifierTooLongError):
            OptionTable([flag(long="x" * (MAX_NAME_LENGTH + 1), descr="Long")])

    def testLongNameAtLimitAccepted(self):
        OptionTable([flag(long="x" * MAX_NAME_LENGTH, descr="Long")])

    def testBooleanWithHint(self):
        with self.assertRaises(BooleanHintError) as context:
            OptionTable([Descriptor(True, "v", hint="<level>", descr="Verbose")])
        self.assertEqual(context.exception.field, "hint")

    def testNonBooleanWithoutHint(self):
        with self.assertRaises(MissingHintError) as context:
            OptionTable([Descriptor(False, "a", descr="Adds")])
        self.assertEqual(context.exception.field, "hint")

    def testNonBooleanWithBlankHint(self):
        with self.assertRaises(MissingHintError):
            OptionTable([option("a", hint="   ", descr="Adds")])

    def testEmptyDescription(self):
        with self.assertRaises(EmptyDescriptionError) as context:
            OptionTable([flag("v", descr="   ")])
        self.assertEqual(context.exception.field, "descr")

    def testDuplicateShort(self):
        with self.assertRaises(DuplicateIdentifierError) as context:
            OptionTable(sample() + [flag("v", "version", descr="Prints version")])
        self.assertEqual(context.exception.field, "short")
        self.assertEqual(context.exception.index, 3)
        self.assertEqual(context.exception.other, 0)

    def testDuplicateLong(self):
        with self.assertRaises(DuplicateIdentifierError) as context:
            OptionTable(sample() + [flag(long="add", descr="Again")])
        self.assertEqual(context.exception.field, "long")
        self.assertEqual(context.exception.other, 1)

    def testDuplicateKeyword(self):
        with self.assertRaises(DuplicateIdentifierError) as context:
            OptionTable(sample() + [flag(keyword="sort", descr="Again")])
        self.assertEqual(context.exception.field, "keyword")

    def testSameNameAcrossFieldsIsNotDuplicate(self):
        # uniqueness is per field: a long name may equal another option's keyword
        OptionTable([flag(long="sort", descr="Long"), flag(keyword="sort", descr="Keyword")])

    def testShapeCheckedBeforeUniqueness(self):
        with self.assertRaises(EmptyDescriptionError):
            OptionTable([flag("v", descr="One"), flag("v", descr="")])

    def testEmptyTable(self):
        with self.assertRaises(EmptyTableError):
            OptionTable([])

    def testMissingTable(self):
        with self.assertRaises(EmptyTableError):
            OptionTable(None)

    def testNonSequenceTable(self):
        with self.assertRaises(InvalidDescriptorError):
            OptionTable(42)
        with self.assertRaises(InvalidDescriptorError):
            OptionTable("-v")

    def testNonDescriptorEntry(self):
        with self.assertRaises(InvalidDescriptorError):
            OptionTable([flag("v", descr="One"), "--verbose"])

    def testFaultsAreConfigurationErrors(self):
        with self.assertRaises(ConfigurationError):
            OptionTable([flag(descr="Nameless")])

    def testFaultMessageNamesPosition(self):
        with self.assertRaises(MissingIdentifierError) as context:
            OptionTable([flag("v", descr="One"), flag(descr="Nameless")])
        self.assertIn("second position", str(context.exception))


class TestOptionTableLookup(TestCase):
    """Behavioral tests for OptionTable lookups."""

    def setUp(self) -> None:
        self.table = OptionTable(sample())

    def testLookupsByField(self):
        self.assertEqual(self.table.by_short("v"), 0)
        self.assertEqual(self.table.by_long("add"), 1)
        self.assertEqual(self.table.by_keyword("sort"), 2)
        self.assertIsNone(self.table.by_long("sort"))

    def testFindAnyIdentifier(self):
        self.assertEqual(self.table.find("v"), 0)
        self.assertEqual(self.table.find("verbose"), 0)
        self.assertEqual(self.table.find("sort"), 2)

    def testFindAcceptsDashes(self):
        self.assertEqual(self.table.find("-a"), 1)
        self.assertEqual(self.table.find("--add"), 1)

    def testFindMiss(self):
        self.assertIsNone(self.table.find("bogus"))
        self.assertIsNone(self.table.find(""))


if __name__ == "__main__":
    unittest.main()
