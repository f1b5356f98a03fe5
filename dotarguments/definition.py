"""
dotarguments argument definitions.

An ArgumentDefinition is the validated, immutable schema of one container:
every slot indexed by long name, short name and position, plus the optional
remaining collector. It is built once and reused for any number of parse calls.

Two ways to build one
- Explicit (builder form): list the slots and give a container factory.

    definition = ArgumentDefinition(
        dict,
        Slot(SlotKind.NAMED_VALUE, "name", setter=operator.setitem ...),
        ...
    )

- Discovery form: declare slots on a class and let discover() read them.

    class Arguments:
        name: str = NamedValue("--name")
        verbose = Switch("--verbose", "-v")

    definition = ArgumentDefinition.discover(Arguments)

Invariants (checked here and nowhere else)
- long names are unique; short names are unique.
- positional indices form the contiguous range 0..n-1.
- at most one remaining collector.
- every slot type has a converter (see coercion.py).
- every slot can be written (explicit setter or attribute name).

Violations raise TypeError/ValueError at construction; they are never parse
failures.
"""
import copy
import functools
import typing

from . import coercion
from .slots import Slot, SlotKind
from .utils import *


class ArgumentDefinition:
    """
    Validated, read-only collection of slots for one container type.

    Properties
    - factory: zero-argument callable creating an empty container.
    - container_type: the discovered class (None for hand-built definitions).
    - slots: every slot in declaration order.
    - long_named / short_named: read-only name -> slot mappings (switches and
      named values).
    - positional: positional slots ordered by index.
    - remaining: the remaining collector or None.
    """

    factory = mirror("factory")
    container_type = mirror("container_type")
    slots = mirror("slots")
    long_named = mirror("long_named")
    short_named = mirror("short_named")
    positional = mirror("positional")
    remaining = mirror("remaining")

    def __init__(self, factory, /, *slots, container_type=None):
        if not callable(factory):
            raise TypeError("argument-definition factory must be callable")

        self._factory = factory
        self._container_type = container_type
        self._slots = []
        self._long_named = {}
        self._short_named = {}
        self._positional = []
        self._remaining = None

        positional = {}

        for slot in slots:
            if not isinstance(slot, Slot):
                raise TypeError("argument-definition slots must be slot instances")
            slot = _resolve(slot)

            if slot.setter is None and slot.name is None:
                raise TypeError(f"slot {slot.label} needs a setter or an attribute name")

            if slot.long is not None:
                if slot.long in self._long_named:
                    raise ValueError(f"long name '--{slot.long}' is declared more than once")
                self._long_named[slot.long] = slot

            if slot.short is not None:
                if slot.short in self._short_named:
                    raise ValueError(f"short name '-{slot.short}' is declared more than once")
                self._short_named[slot.short] = slot

            if slot.kind is SlotKind.POSITIONAL_VALUE:
                if slot.index in positional:
                    raise ValueError(f"positional index {slot.index} is declared more than once")
                positional[slot.index] = slot

            if slot.kind is SlotKind.REMAINING:
                if self._remaining is not None:
                    raise ValueError("only one remaining collector can be declared")
                self._remaining = slot

            self._slots.append(slot)

        if sorted(positional) != list(range(len(positional))):
            raise ValueError(
                "positional indices must be contiguous from 0 (got %s)" % ", ".join(map(str, sorted(positional)))
            )
        self._positional = [positional[index] for index in range(len(positional))]

    @classmethod
    def discover(cls, container_type, /):
        """
        Build (or fetch the cached) definition of a container class.

        Slots are collected from the class and its bases (bases first, then
        declaration order). A slot declared without an explicit type takes its
        type from the class annotation of the same attribute; without either,
        it converts to str.
        """
        if not isinstance(container_type, type):
            raise TypeError("discover() argument must be a class")
        return _discover(cls, container_type)

    def parse(self, tokens, /):
        """
        Parse a token sequence against this definition (see parser.parse).
        """
        from .parser import parse
        return parse(self, tokens)

    def __repr__(self):
        return "argument-definition(%s)" % ", ".join("%s=%r" % item for item in self.__rich_repr__())

    def __rich_repr__(self):
        yield "container_type", self._container_type
        yield "slots", tuple(self._slots)


def _resolve(slot, /):
    """
    Internal: give a slot its final type and check the coercion table.
    """
    match slot.kind:
        case SlotKind.SWITCH:
            return slot
        case SlotKind.REMAINING:
            _, element = coercion.collection(slot.type)
            if not coercion.supports(element):
                raise TypeError(f"remaining collector element type {element!r} has no converter")
            return slot
        case _:
            if slot.type is None:
                slot = copy.replace(slot, type=str)
            if not coercion.supports(slot.type):
                raise TypeError(f"slot {slot.label} type {slot.type!r} has no converter")
            return slot


@functools.cache
def _discover(cls, container_type, /):
    hints = typing.get_type_hints(container_type)
    declared = {}

    for owner in reversed(container_type.__mro__):
        for name, object in vars(owner).items():
            if isinstance(object, Slot):
                declared[name] = object
            elif name in declared:
                # shadowed by a plain attribute in a subclass
                del declared[name]

    slots = []
    for name, slot in declared.items():
        if slot.type is None and slot.kind is not SlotKind.SWITCH and name in hints:
            slot = copy.replace(slot, type=hints[name])
        slots.append(slot)

    return cls(container_type, *slots, container_type=container_type)


__all__ = (
    "ArgumentDefinition",
)
