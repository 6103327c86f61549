"""
Help renderer behavioral tests.

Scope
- Validate the label column width (longest label plus padding, capped at half the width).
- Validate the two-column layout of the full help and of a single entry.
- Validate wrapping on narrow terminals and width provider fallbacks.

Conventions
- Test method names follow CamelCase per project convention.
- Widths are always injected so results do not depend on the running terminal.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argscribe import (
    DEFAULT_WIDTH,
    LABEL_PADDING,
    MIN_WIDTH,
    HelpRenderer,
    OptionTable,
    flag,
    group_options,
    option,
    resolve_width,
)


def groups():
    return group_options(OptionTable([
        flag("v", "verbose", descr="Prints verbose messages", group="general"),
        option("a", "add", hint="<money>", descr="Adds an expense or income record", group="records"),
        option(keyword="sort", hint="<order>", descr="Sorts records", group="records"),
    ]))


class TestHelpRenderer(TestCase):
    """Behavioral tests for HelpRenderer."""

    def testIndentFromLongestLabel(self):
        renderer = HelpRenderer(groups(), 80)
        # "-a, --add <money>" is the longest label (17 characters)
        self.assertEqual(renderer.indent(80), 17 + LABEL_PADDING)

    def testIndentCappedAtHalfWidth(self):
        self.assertEqual(HelpRenderer(groups(), 30).indent(30), 15)

    def testFullHelpLayout(self):
        text = HelpRenderer(groups(), 80).render()
        self.assertEqual(
            text.splitlines(),
            [
                "  general:",
                "    -v, --verbose".ljust(25) + "Prints verbose messages",
                "",
                "  records:",
                "    -a, --add <money>".ljust(25) + "Adds an expense or income record",
                "    sort <order>".ljust(25) + "Sorts records",
            ],
        )
        self.assertTrue(text.endswith("\n"))

    def testUsageLine(self):
        text = HelpRenderer(groups(), 80, "prog [options]").render()
        self.assertTrue(text.startswith("usage: prog [options]\n\n  general:\n"))

    def testNarrowTerminalWraps(self):
        lines = HelpRenderer(groups(), 40).render().splitlines()
        self.assertTrue(all(len(line) <= 40 for line in lines))
        row = lines.index("  records:") + 1
        self.assertEqual(lines[row], "    -a, --add".ljust(20) + "Adds an expense or ")
        self.assertEqual(lines[row + 1], "    <money>".ljust(20) + "income record")

    def testRenderEntry(self):
        self.assertEqual(
            HelpRenderer(groups(), 80).render_entry(1),
            "  records:\n" + "    -a, --add <money>".ljust(25) + "Adds an expense or income record\n",
        )

    def testRenderEntryMiss(self):
        self.assertIsNone(HelpRenderer(groups(), 80).render_entry(42))

    def testFailingProviderFallsBack(self):
        def provider():
            raise OSError("not a terminal")

        self.assertEqual(HelpRenderer(groups(), provider).render(), HelpRenderer(groups(), DEFAULT_WIDTH).render())


class TestResolveWidth(TestCase):
    """Behavioral tests for resolve_width()."""

    def testCallableProvider(self):
        self.assertEqual(resolve_width(lambda: 120), 120)

    def testNonPositiveFallsBack(self):
        self.assertEqual(resolve_width(lambda: 0), DEFAULT_WIDTH)

    def testValueErrorFallsBack(self):
        def provider():
            raise ValueError("bad COLUMNS")

        self.assertEqual(resolve_width(provider), DEFAULT_WIDTH)

    def testTinyWidthRaisedToMinimum(self):
        self.assertEqual(resolve_width(5), MIN_WIDTH)


if __name__ == "__main__":
    unittest.main()
