"""
Slot model behavioral tests (construction, validation, descriptors).

Scope
- Validate the markers (Switch, NamedValue, PositionalValue, Remaining):
  name splitting, forced optionality, typenames and labels.
- Validate construction errors for names, indices, kinds and setters.
- Validate descriptor behavior (resting values) and copy.replace support.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from dotarguments import NamedValue, PositionalValue, Remaining, Slot, SlotKind, Switch


class TestMarkers(TestCase):
    """Behavioral tests for the declarative markers."""

    def testSwitchSplitsNames(self):
        switch = Switch("--verbose", "-v")
        self.assertEqual(switch.long, "verbose")
        self.assertEqual(switch.short, "v")
        self.assertIs(switch.kind, SlotKind.SWITCH)

    def testSwitchNameOrderIsFree(self):
        switch = Switch("-v", "--verbose")
        self.assertEqual((switch.long, switch.short), ("verbose", "v"))

    def testSwitchIsAlwaysOptionalBool(self):
        switch = Switch("--force")
        self.assertTrue(switch.optional)
        self.assertIs(switch.type, bool)
        self.assertIs(switch.default, False)

    def testNamedValueDefaultsMandatory(self):
        self.assertFalse(NamedValue("--name").optional)
        self.assertTrue(NamedValue("--name", optional=True).optional)

    def testNamedValueRequiresName(self):
        with self.assertRaises(TypeError):
            NamedValue()

    def testNamesNeedDashPrefix(self):
        with self.assertRaises(ValueError):
            Switch("verbose")

    def testOnlyOneLongName(self):
        with self.assertRaises(ValueError):
            Switch("--verbose", "--loud")

    def testOnlyOneShortName(self):
        with self.assertRaises(ValueError):
            Switch("-v", "-l")

    def testShortNameMustBeOneCharacter(self):
        with self.assertRaises(ValueError):
            Switch("-vv")

    def testLongNameShape(self):
        for name in ("--bad name", "--=x", "--x=y", "---x", "--"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Switch(name)

    def testLongNameAllowsDashesAndUnicode(self):
        self.assertEqual(Switch("--dry-run").long, "dry-run")
        self.assertEqual(Switch("--名前").long, "名前")

    def testNamesMustBeStrings(self):
        with self.assertRaises(TypeError):
            Switch(1)

    def testPositionalIndex(self):
        self.assertEqual(PositionalValue(2).index, 2)
        self.assertIsNone(PositionalValue(2).long)

    def testPositionalIndexValidation(self):
        with self.assertRaises(ValueError):
            PositionalValue(-1)
        with self.assertRaises(TypeError):
            PositionalValue("0")
        with self.assertRaises(TypeError):
            PositionalValue(True)

    def testRemainingIsOptional(self):
        self.assertTrue(Remaining().optional)
        self.assertIs(Remaining().kind, SlotKind.REMAINING)

    def testTypenames(self):
        self.assertEqual(type(Switch("-v")).__typename__, "switch")
        self.assertEqual(type(NamedValue("-v")).__typename__, "named-value")
        self.assertEqual(type(PositionalValue(0)).__typename__, "positional-value")

    def testLabels(self):
        self.assertEqual(Switch("--verbose", "-v").label, "--verbose")
        self.assertEqual(Switch("-v").label, "-v")
        self.assertEqual(PositionalValue(3).label, "#3")


class TestSlot(TestCase):
    """Behavioral tests for the generic Slot."""

    def testKindMustBeSlotKind(self):
        with self.assertRaises(TypeError):
            Slot("switch", "x")

    def testPositionalCannotHaveNames(self):
        with self.assertRaises(TypeError):
            Slot(SlotKind.POSITIONAL_VALUE, "x", index=0)

    def testNamedCannotHaveIndex(self):
        with self.assertRaises(TypeError):
            Slot(SlotKind.NAMED_VALUE, "x", index=0)

    def testSwitchTypeMustBeBool(self):
        with self.assertRaises(TypeError):
            Slot(SlotKind.SWITCH, "x", type=int)

    def testSwitchCannotBeMandatory(self):
        self.assertTrue(Slot(SlotKind.SWITCH, "x", optional=False).optional)

    def testSetterMustBeCallable(self):
        with self.assertRaises(TypeError):
            Slot(SlotKind.SWITCH, "x", setter="x")

    def testNameMustBeIdentifier(self):
        with self.assertRaises(TypeError):
            Slot(SlotKind.SWITCH, "x", name="not an identifier")

    def testBindUsesSetter(self):
        received = []
        slot = Slot(SlotKind.SWITCH, "x", setter=lambda container, value: received.append((container, value)))
        slot.bind("container", True)
        self.assertEqual(received, [("container", True)])

    def testBindWithoutTargetFails(self):
        with self.assertRaises(TypeError):
            Slot(SlotKind.SWITCH, "x").bind(object(), True)

    def testRepr(self):
        self.assertIn("long='verbose'", repr(Switch("--verbose")))
        self.assertTrue(repr(Switch("--verbose")).startswith("switch("))

    def testPropertiesAreReadOnly(self):
        with self.assertRaises(AttributeError):
            Switch("--x").long = "y"


class Container:
    verbose = Switch("--verbose")
    name: str = NamedValue("--name", optional=True, default="anonymous")
    rest: list[str] = Remaining()
    numbers: tuple[int, ...] = Remaining(type=tuple[int, ...])


class TestDescriptor(TestCase):
    """Slots attached to container classes."""

    def testClassAccessReturnsSlot(self):
        self.assertIsInstance(Container.verbose, Switch)

    def testAttributeNameRecorded(self):
        self.assertEqual(Container.verbose.name, "verbose")

    def testRestingValues(self):
        container = Container()
        self.assertIs(container.verbose, False)
        self.assertEqual(container.name, "anonymous")
        self.assertEqual(container.rest, [])
        self.assertEqual(container.numbers, ())

    def testBindWritesAttribute(self):
        container = Container()
        Container.verbose.bind(container, True)
        self.assertIs(container.verbose, True)
        self.assertIs(Container().verbose, False)

    def testSharedSlotRejected(self):
        switch = Switch("--x")
        with self.assertRaises(TypeError):
            type("Twice", (), {"first": switch, "second": switch})


class TestReplace(TestCase):
    """copy.replace support."""

    def testReplaceKeepsEverythingElse(self):
        original = Container.name
        replica = copy.replace(original, type=str)
        self.assertIsInstance(replica, NamedValue)
        self.assertIs(replica.type, str)
        self.assertEqual(replica.long, "name")
        self.assertEqual(replica.name, "name")
        self.assertEqual(replica.default, "anonymous")
        self.assertTrue(replica.optional)
        self.assertIsNone(original.type)

    def testReplaceRevalidates(self):
        with self.assertRaises(ValueError):
            copy.replace(PositionalValue(0), index=-1)


if __name__ == "__main__":
    unittest.main()
