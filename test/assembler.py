"""
Options assembler behavioral tests (defaults pass, overlay, unknown options).

Scope
- Validate the end-to-end resolved map shape.
- Validate positional copying and the single recording of wrapped scalars.
- Validate unknown-option messages: targeted suggestion, full listing, subcommand
  suppression and first-unknown-only reporting.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is requested without colors so messages compare as plain text.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.text import Text

from quiver import assemble, DefinitionTree, OptionDeclaration
from quiver.assembler import THRESHOLD, best_match, similarity


class TestAssemble(TestCase):
    """Behavioral tests for the defaults pass and the raw overlay."""

    def setUp(self):
        self.tree = DefinitionTree(options=[
            OptionDeclaration(["o", "output"], "where to write", default="out.txt"),
            OptionDeclaration(["I", "include"], "include paths", default=[]),
            OptionDeclaration(["t", "tag"], "free-form tag"),
        ])

    def testEndToEnd(self):
        tree = DefinitionTree(options=[OptionDeclaration(["o", "output"], default="out.txt")])
        raw = {"_": [], "output": "result.txt"}
        self.assertEqual(assemble(raw, tree), {"_": [], "o": "result.txt", "output": "result.txt"})

    def testDefaultsAlwaysPresent(self):
        options = assemble({"_": []}, self.tree)
        self.assertEqual(options["output"], "out.txt")
        self.assertEqual(options["I"], [])
        self.assertNotIn("tag", options)
        self.assertNotIn("unknownOptionMessage", options)

    def testOptionWithoutDefaultOnlyWhenUsed(self):
        options = assemble({"_": [], "tag": "nightly"}, self.tree)
        self.assertEqual(options["t"], "nightly")
        self.assertEqual(options["tag"], "nightly")

    def testPositionalsAreCopied(self):
        raw = {"_": ["a", "b"]}
        options = assemble(raw, self.tree)
        self.assertEqual(options["_"], ["a", "b"])
        self.assertIsNot(options["_"], raw["_"])

    def testWrappedScalarRecordedOnce(self):
        options = assemble({"_": ["a"], "include": "src"}, self.tree)
        self.assertEqual(options["include"], ["src"])
        self.assertEqual(options["_"], ["a", "src"])

    def testTreeRequired(self):
        with self.assertRaises(TypeError):
            assemble({"_": []}, [])


class TestUnknownOptions(TestCase):
    """Behavioral tests for unknown-option reporting."""

    def setUp(self):
        self.tree = DefinitionTree(options=[
            OptionDeclaration(["f", "foo"], "the foo", default="a"),
            OptionDeclaration(["b", "bar"], "the bar", default="b"),
            OptionDeclaration(["t", "tag"], "free-form tag"),
        ])

    def testSuggestionForCloseAlias(self):
        options = assemble({"_": [], "foox": 1}, self.tree, colorful=False)
        message = options["unknownOptionMessage"]
        self.assertIsInstance(message, Text)
        self.assertIn('the option "foox" is unknown.', str(message))
        self.assertIn("did you mean the following one?", str(message))
        self.assertIn("-f, --foo [value]  the foo", str(message))
        self.assertNotIn("--bar", str(message))

    def testFullListingWithoutCloseAlias(self):
        message = str(assemble({"_": [], "zzzz": 1}, self.tree, colorful=False)["unknownOptionMessage"])
        self.assertIn("here's a list of all available options", message)
        self.assertIn("--foo", message)
        self.assertIn("--bar", message)
        self.assertIn("--tag", message)

    def testShortInputsStillSuggest(self):
        message = str(assemble({"_": [], "g": 1}, self.tree, colorful=False)["unknownOptionMessage"])
        self.assertIn("did you mean the following one?", message)
        self.assertIn("-t, --tag", message)
        self.assertNotIn("--foo", message)

        tree = DefinitionTree(options=[
            OptionDeclaration(["i", "input"], "where to read", default="in.txt"),
            OptionDeclaration(["V", "verbose"], "say more", default=False),
        ])
        message = str(assemble({"_": [], "output": "x"}, tree, colorful=False)["unknownOptionMessage"])
        self.assertIn("did you mean the following one?", message)
        self.assertIn("-i, --input [value]  where to read", message)
        self.assertNotIn("--verbose", message)

    def testSuppressedInsideSubcommand(self):
        options = assemble({"_": ["build"], "foox": 1}, self.tree, True)
        self.assertNotIn("unknownOptionMessage", options)
        self.assertEqual(options["foo"], "a")

    def testOnlyFirstUnknownReported(self):
        options = assemble({"_": [], "qqq": 1, "foox": 1, "tag": "x"}, self.tree, colorful=False)
        message = str(options["unknownOptionMessage"])
        self.assertIn('"qqq"', message)
        self.assertNotIn('"foox"', message)
        self.assertNotIn("tag", options)

    def testKnownOptionsBeforeUnknownStillResolved(self):
        options = assemble({"_": [], "tag": "x", "qqq": 1}, self.tree, colorful=False)
        self.assertEqual(options["tag"], "x")
        self.assertIn("unknownOptionMessage", options)


class TestMatching(TestCase):
    def testSimilarityScale(self):
        self.assertEqual(similarity("foo", "foo"), 1.0)
        self.assertEqual(similarity("abc", "xyz"), 0.0)
        self.assertGreaterEqual(similarity("foox", "foo"), THRESHOLD)

    def testBestMatchKeepsEarliestTie(self):
        self.assertEqual(best_match("ab", ["ax", "xb", "ab"])[0], "ab")
        self.assertEqual(best_match("a", ["ab", "ac"])[0], "ab")

    def testBestMatchEmpty(self):
        self.assertEqual(best_match("x", []), (None, 0.0))


if __name__ == "__main__":
    unittest.main()
