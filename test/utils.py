"""
Tests for the internal helpers.

This module verifies:
- Unset: singleton identity, falsy semantics, repr, copy/pickle stability, finality.
- coalesce: only Unset is replaced; other falsy values pass through.
- rename / mirror: metadata and read-only exposure.
- printable: control characters escaped, everything else untouched.
- package metadata: license and copyright credits.
"""
import copy
import os
import pickle
import unittest
from unittest import TestCase

import pennant
from pennant.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def setUp(self) -> None:
        self.unset: UnsetType = UnsetType()

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(self.unset, UnsetType())
        self.assertIs(self.unset, Unset)

    def testFalsely(self) -> None:
        self.assertFalse(bool(self.unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertNotEqual(self.unset, None)
        self.assertNotEqual(self.unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(self.unset), "Unset")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(self.unset), self.unset)
        self.assertIs(copy.deepcopy(self.unset), self.unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(self.unset)), self.unset)

    def testUnionWithTypes(self) -> None:
        """
        `str | Unset` is usable with isinstance().
        """
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(42, str | Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesArePreserved(self) -> None:
        for value in (None, False, 0, "", ()):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testDecoratorForm(self) -> None:
        @rename("renamed")
        def function(): ...
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRejectsNonStringName(self) -> None:
        with self.assertRaises(TypeError):
            rename(42)


class MirrorTest(TestCase):

    def testReadOnlyCopy(self) -> None:
        class Holder:
            items = mirror("items")
            size = mirror("size")

            def __init__(self):
                self._items = ["a", "b"]
                self._size = 2

        holder = Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertEqual(holder.size, 2)
        with self.assertRaises(AttributeError):
            holder.items = ()
        self.assertEqual(holder._items, ["a", "b"])


class PrintableTest(TestCase):

    def testControlCharactersAreEscaped(self) -> None:
        self.assertEqual(printable("a\tb"), "a\\tb")
        self.assertEqual(printable("\r\n"), "\\r\\n")
        self.assertEqual(printable("\x00\x1b"), "\\x00\\x1b")

    def testPrintableTextIsUntouched(self) -> None:
        for text in ("", "plain text", "ünïcode", "quote's \"both\"", "back\\slash"):
            with self.subTest(text=text):
                self.assertEqual(printable(text), text)


class MetadataTest(TestCase):

    def testLicenseCreditsBothCopyrights(self) -> None:
        with open(os.path.join(os.path.dirname(__file__), os.pardir, "LICENSE"), encoding="utf-8") as file:
            text = file.read()
        self.assertTrue(text.startswith("MIT License\n"))
        self.assertIn("Copyright (c) 2026 " + pennant.__author__, text)
        self.assertIn("Copyright 2021 Alexey Kutepov", text)
        self.assertEqual(pennant.__license__, "MIT")


if __name__ == '__main__':
    unittest.main()
