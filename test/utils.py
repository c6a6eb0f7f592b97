"""
Utilities module behavioral tests (sentinel, coalesce, rename, mirror, camelize).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import pickle
import unittest
from unittest import TestCase

from quiver.utils import UnsetType, Unset, coalesce, rename, mirror, camelize


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testCopiesKeepIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("Subset", (UnsetType,), {})


class TestCoalesce(TestCase):
    def testReplacesUnsetOnly(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertEqual(coalesce("", "x"), "")


class TestRename(TestCase):
    def testFunctionForm(self):
        def f():
            pass

        rename(f, "work")
        self.assertEqual(f.__name__, "work")
        self.assertEqual(f.__qualname__, "work")

    def testDecoratorForm(self):
        @rename("work")
        def f():
            pass

        self.assertEqual(f.__name__, "work")

    def testRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):
    def testContainersAreFrozen(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._tags = {"x"}

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.tags, frozenset)
        with self.assertRaises(TypeError):
            holder.table["b"] = 2  # type: ignore[index]
        with self.assertRaises(AttributeError):
            holder.items = ()  # type: ignore[misc]

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            mirror(1)


class TestCamelize(TestCase):
    def testDashedAndSnakeAliases(self):
        self.assertEqual(camelize("dry-run"), "dryRun")
        self.assertEqual(camelize("out_dir"), "outDir")
        self.assertEqual(camelize("--no-color-output"), "noColorOutput")

    def testCaseBoundaries(self):
        self.assertEqual(camelize("HTTPServer"), "httpServer")
        self.assertEqual(camelize("fooBAR"), "fooBar")
        self.assertEqual(camelize("level2-cache"), "level2Cache")

    def testSingleWord(self):
        self.assertEqual(camelize("output"), "output")
        self.assertEqual(camelize("Output"), "output")

    def testNonAsciiLetters(self):
        self.assertEqual(camelize("über-flag"), "überFlag")
        self.assertEqual(camelize("çà"), "çà")
        self.assertEqual(camelize("ÉtatCivil"), "étatCivil")
        self.assertEqual(camelize("taille-größe"), "tailleGröße")

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            camelize(3)


if __name__ == "__main__":
    unittest.main()
