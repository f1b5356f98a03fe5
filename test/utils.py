"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel: singleton identity, falsiness, representation, copy and
  pickle identity, finality.
- coalesce(): only Unset is replaced.
- rename(): both call forms and their argument validation.
- mirror(): read-only properties returning frozen views.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from dotarguments.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyAndPickleKeepIdentity(self) -> None:
        # Identity must survive every round-trip.
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnion(self) -> None:
        self.assertIsInstance("x", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class CoalesceTest(TestCase):
    """
    Test suite for `coalesce`.
    """

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testKeepsFalsyValues(self) -> None:
        for value in (None, 0, "", [], False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):
    """
    Test suite for `rename`.
    """

    def testDirectForm(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testDecoratorForm(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testValidation(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename("name")(1)
        with self.assertRaises(TypeError):
            rename(len, "length")


class MirrorTest(TestCase):
    """
    Test suite for `mirror`.
    """

    class Holder:
        items = mirror("items")
        table = mirror("table")
        label = mirror("label")

        def __init__(self):
            self._items = ["a", "b"]
            self._table = {"a": 1}
            self._label = "text"

    def testFrozenViews(self) -> None:
        holder = self.Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.label, "text")

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.Holder().items = ()

    def testPropertyName(self) -> None:
        self.assertEqual(self.Holder.items.fget.__name__, "items")

    def testValidation(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
