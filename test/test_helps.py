"""
Help and version rendering tests.

Scope
- Banner, usage line and documentation block.
- Section emission and column alignment.
- Flag summaries (short/long, short equal to name, no short, switches).
- Colorful mode keeps the same characters.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from declargs import Type, create
from declargs.helps import render_help, render_version

from support import RecordingPrinter


class TestRenderHelp(TestCase):
    """Behavioral tests for render_help()."""

    def setUp(self):
        self.printer = RecordingPrinter()

    def testFullLayout(self):
        context = create(["prog"], "prog", "1.2.0", "Prints a message a few times.", printer=self.printer)
        context.declare("message", "m", "MSG", "the message to print", required=True)
        context.declare("repeat", "r", descr="how many times to print it", type=Type.INT)
        self.assertEqual(render_help(context).plain, "\n".join((
            "prog version 1.2.0",
            "Usage: prog --message MSG [OPTION]...",
            "DOCUMENTATION",
            "Prints a message a few times.",
            "",
            "REQUIRED ARGUMENTS:",
            "  -m, --message MSG       the message to print",
            "OPTIONAL ARGUMENTS:",
            "  -h, --help              show this help message and exit",
            "  -v, --version           show version information and exit",
            "  -r, --repeat <integer>  how many times to print it",
        )))

    def testNoRequiredSection(self):
        context = create(["tool"], printer=self.printer)
        context.declare("verbose", "V", type=Type.SWITCH)
        self.assertEqual(render_help(context).plain, "\n".join((
            "tool",
            "Usage: tool [OPTION]...",
            "",
            "OPTIONAL ARGUMENTS:",
            "  -h, --help     show this help message and exit",
            "  -V, --verbose",
        )))

    def testShortEqualToNameAndMissingShort(self):
        context = create(["tool"], printer=self.printer)
        context.declare("x", "x", descr="ex", type=Type.DOUBLE)
        context.declare("long-only", descr="lo", type=Type.STRING_ARRAY)
        lines = render_help(context).plain.splitlines()
        self.assertIn("  -x <number>         ex", lines)
        self.assertIn("  --long-only [text]  lo", lines)

    def testDescriptionsShareOneColumn(self):
        context = create(["tool"], printer=self.printer)
        context.declare("a", descr="first", required=True)
        context.declare("much-longer-name", "l", descr="second")
        lines = render_help(context).plain.splitlines()
        first = next(line for line in lines if line.endswith("first"))
        second = next(line for line in lines if line.endswith("second"))
        self.assertEqual(first.index("first"), second.index("second"))

    def testUsageListsEveryRequiredArgument(self):
        context = create(["tool"], printer=self.printer)
        context.declare("in", type=Type.INT, required=True)
        context.declare("out", metavar="FILE", required=True)
        self.assertIn("Usage: tool --in <integer> --out FILE [OPTION]...", render_help(context).plain)

    def testColorfulModeKeepsText(self):
        plain = create(["tool"], "tool", "1", printer=self.printer)
        fancy = create(["tool"], "tool", "1", printer=self.printer, colorful=True)
        for context in (plain, fancy):
            context.declare("foo", "f", descr="foo", type=Type.INT, required=True)
        self.assertEqual(render_help(plain).plain, render_help(fancy).plain)
        self.assertEqual(render_help(plain).spans, [])
        self.assertNotEqual(render_help(fancy).spans, [])


class TestRenderVersion(TestCase):
    def testWithVersion(self):
        context = create(["tool"], version="0.1", printer=RecordingPrinter())
        self.assertEqual(render_version(context).plain, "tool version 0.1")

    def testWithoutVersion(self):
        context = create(["tool"], printer=RecordingPrinter())
        self.assertEqual(render_version(context).plain, "tool")


if __name__ == "__main__":
    unittest.main()
