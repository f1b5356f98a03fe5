r"""
dotarguments slot model.

Overview
- Slot: one bindable field of an argument container. A slot has a kind
  (SlotKind), optional long/short names (named kinds), an index (positional
  kind), an optionality bit, a target type and a way to write a value into a
  container (an explicit setter, or the attribute it is assigned to).

- Declarative markers (Slot subclasses)
  • Switch: presence-only named argument (e.g., -v/--verbose); binds True.
  • NamedValue: named argument whose value is the next token (--name VALUE).
  • PositionalValue: bare token bound by declared index.
  • Remaining: collector for every bare token beyond the declared positionals.

Container usage
    >>> class Arguments:
    ...     name: str = NamedValue("--name", "-n")
    ...     verbose = Switch("--verbose", "-v")
    ...     count: int = PositionalValue(0)
    ...     rest: list[str] = Remaining()

  Slots are descriptors: reading an attribute that the parser never bound
  yields the slot's resting value (False for switches, an empty list for the
  remaining collector, the declared default for value slots).

Validation (on construction)
- Long names match r"[^\W_][\w-]*" (no dash prefix, no '=' and no whitespace).
- Short names are exactly one character, neither '-' nor whitespace.
- Named kinds need at least one name; other kinds cannot have names.
- Positional kinds need a non-negative integer index; other kinds cannot.
- Switches are always optional and always bool; the remaining collector is
  always optional (an empty collection is a valid bind).
"""
import builtins
import functools
import operator
import re
import typing
from enum import Enum

from .utils import *


class SlotKind(Enum):
    """
    the four kinds of bindable fields.
    """
    SWITCH = "switch"
    NAMED_VALUE = "named-value"
    POSITIONAL_VALUE = "positional-value"
    REMAINING = "remaining"

    @property
    def named(self):
        return self is SlotKind.SWITCH or self is SlotKind.NAMED_VALUE


class SlotType(type):
    """
    Metaclass for slots.

    Responsibilities
    - derive __typename__ from the class name ("NamedValue" -> "named-value")
      for messages.
    - expose every name listed in __introspectable__ as a read-only property
      over its "_name" backing field.
    - provide stable __repr__/__rich_repr__ for diagnostics.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                if (object := getattr(self, name)) is not None:
                    yield name, object
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate long/short names against the slot kind.
    """
    long, short = metadata["long"], metadata["short"]

    if not metadata["kind"].named:
        if long is not Unset or short is not Unset:
            raise TypeError(f"{cls.__typename__} cannot have names")
        return

    if long is Unset and short is Unset:
        raise TypeError(f"{cls.__typename__} must specify a long or a short name")

    if long is not Unset:
        if not isinstance(long, str):
            raise TypeError(f"{cls.__typename__} long name must be a string")
        elif not re.fullmatch(r"[^\W_][\w-]*", long):
            raise ValueError(f"{cls.__typename__} long name {long!r} is not a valid option name")

    if short is not Unset:
        if not isinstance(short, str):
            raise TypeError(f"{cls.__typename__} short name must be a string")
        elif len(short) != 1 or short == "-" or short.isspace():
            raise ValueError(f"{cls.__typename__} short name {short!r} must be a single character")


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize slot metadata in place.

    Raises
    - TypeError: wrong type of a field, or a field that the kind does not accept.
    - ValueError: a field with the right type but a bad value.
    """
    if not isinstance(kind := metadata["kind"], SlotKind):
        raise TypeError(f"{cls.__typename__} kind must be a slot-kind")

    _sanitize_names(cls, metadata)

    index = metadata["index"]
    if kind is SlotKind.POSITIONAL_VALUE:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"{cls.__typename__} index must be an integer")
        if index < 0:
            raise ValueError(f"{cls.__typename__} index must be zero or positive")
    elif index is not Unset:
        raise TypeError(f"{cls.__typename__} cannot have an index")

    match kind:
        case SlotKind.SWITCH:
            if metadata["type"] not in (Unset, bool):
                raise TypeError(f"{cls.__typename__} type must be bool")
            metadata["type"] = bool
            metadata["optional"] = True
            metadata["default"] = False
        case SlotKind.REMAINING:
            metadata["optional"] = True
            metadata["default"] = Unset
        case _:
            metadata["optional"] = bool(metadata["optional"])

    if (setter := metadata["setter"]) is not Unset and not callable(setter):
        raise TypeError(f"{cls.__typename__} setter must be callable")

    if (name := metadata["name"]) is not Unset and not (isinstance(name, str) and name.isidentifier()):
        raise TypeError(f"{cls.__typename__} name must be an identifier")


class Slot(metaclass=SlotType):
    """
    One bindable field of an argument container.

    Most code builds slots through the Switch/NamedValue/PositionalValue/
    Remaining markers; Slot itself is the generic form used when a definition
    is assembled by hand with explicit setters.

    Properties
    - kind: SlotKind
    - long / short: names without their dash prefix (None when absent)
    - index: position of a positional slot (None otherwise)
    - optional: False only for mandatory value slots
    - type: target type (may be a `T | None` union); None means “resolve from
      the container annotation, else str”
    - default: resting value of an unbound value slot
    - name: attribute name on the container class, once attached
    """

    __introspectable__ = (
        "kind",
        "long",
        "short",
        "index",
        "optional",
        "type",
        "default",
        "name",
    )

    def __init__(
            self,
            kind,
            /,
            long=Unset,
            short=Unset,
            index=Unset,
            *,
            optional=False,
            type=Unset,
            default=None,
            setter=Unset,
            name=Unset
    ):
        metadata = {
            "kind": kind,
            "long": long,
            "short": short,
            "index": index,
            "optional": optional,
            "type": type,
            "default": default,
            "setter": setter,
            "name": name,
        }
        _sanitize_metadata(builtins.type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, coalesce(object))

    @property
    def setter(self):
        return self._setter

    @property
    def label(self):
        """
        human name of the slot as a user would type or count it.
        """
        if self._long is not None:
            return "--" + self._long
        if self._short is not None:
            return "-" + self._short
        if self._index is not None:
            return "#%d" % self._index
        return self._name or type(self).__typename__

    def resting(self):
        """
        value read from a container attribute that was never bound.
        """
        if self._kind is SlotKind.REMAINING:
            return () if _is_tuple(self._type) else []
        return self._default

    def bind(self, container, value, /):
        """
        write `value` into `container` through the setter or the attribute.
        """
        if self._setter is not None:
            self._setter(container, value)
        elif self._name is not None:
            setattr(container, self._name, value)
        else:
            raise TypeError(f"{type(self).__typename__} {self.label} has no setter and no attribute name")

    def __set_name__(self, owner, name):
        if self._name is not None and self._name != name:
            raise TypeError(f"{type(self).__typename__} is already attached as {self._name!r}")
        self._name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return self.resting()

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fields = {
            "long": self._long,
            "short": self._short,
            "index": self._index,
            "optional": self._optional,
            "type": self._type,
            "default": self._default,
            "setter": self._setter,
            "name": self._name,
        } | overrides
        replica = object.__new__(type(self))
        Slot.__init__(replica, self._kind, **{
            name: Unset if object is None and name != "default" else object
            for name, object in fields.items()
        })
        return replica


def _is_tuple(type):
    return type is tuple or typing.get_origin(type) is tuple


def _split_names(cls, names, /):
    """
    Internal: split dash-prefixed names into (long, short).

    "--verbose" -> long "verbose", "-v" -> short "v". At most one of each.
    """
    long = short = Unset
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        if name.startswith("--"):
            if long is not Unset:
                raise ValueError(f"{cls.__typename__} cannot have more than one long name")
            long = name[2:]
        elif name.startswith("-"):
            if short is not Unset:
                raise ValueError(f"{cls.__typename__} cannot have more than one short name")
            short = name[1:]
        else:
            raise ValueError(f"{cls.__typename__} name {name!r} must start with '-' or '--'")
    return long, short


class Switch(Slot):
    """
    Presence-only named argument; binds True when mentioned.

        verbose = Switch("--verbose", "-v")
    """

    def __init__(self, *names, setter=Unset):
        long, short = _split_names(type(self), names)
        super().__init__(SlotKind.SWITCH, long, short, setter=setter)


class NamedValue(Slot):
    """
    Named argument whose value is the following token.

        output: Path = NamedValue("--output", "-o")
        level: int | None = NamedValue("--level", optional=True)
    """

    def __init__(self, *names, optional=False, type=Unset, default=None, setter=Unset):
        long, short = _split_names(builtins.type(self), names)
        super().__init__(
            SlotKind.NAMED_VALUE, long, short, optional=optional, type=type, default=default, setter=setter
        )


class PositionalValue(Slot):
    """
    Bare token bound by declared index (zero-based, contiguous).

        source: Path = PositionalValue(0)
        target: Path = PositionalValue(1, optional=True)
    """

    def __init__(self, index, /, *, optional=False, type=Unset, default=None, setter=Unset):
        super().__init__(
            SlotKind.POSITIONAL_VALUE, index=index, optional=optional, type=type, default=default, setter=setter
        )


class Remaining(Slot):
    """
    Collector for every bare token beyond the declared positionals.

        rest: list[str] = Remaining()
    """

    def __init__(self, *, type=Unset, setter=Unset):
        super().__init__(SlotKind.REMAINING, type=type, setter=setter)


__all__ = (
    "SlotKind",
    "Slot",
    "Switch",
    "NamedValue",
    "PositionalValue",
    "Remaining",
)

del SlotType
