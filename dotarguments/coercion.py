"""
dotarguments value coercion.

A small, pluggable conversion table mapping a scalar type to a converter.
Every converter is called as converter(raw, type) and must either return the
converted value or raise ValueError/TypeError/ArithmeticError; the parser
turns those into a ConversionError carrying the slot label, the raw token and
the target type.

Built-in table (locale invariant, no thousands separators, no underscores)
- str               identity
- int               optional sign + ASCII digits, surrounding whitespace allowed
- float             Python float syntax (1.5, 1e-3, inf, nan)
- bool              "true"/"false", case-insensitive, surrounding whitespace allowed
- decimal.Decimal   Python decimal syntax
- pathlib.Path      any non-empty string
- enum.Enum         member name (exact), then member value
- datetime.date / datetime.datetime / datetime.time   ISO 8601

Nullable targets (`T | None`, `Optional[T]`) are converted as `T`.

Extending
    >>> @register(Fraction)
    ... def _(raw, type):
    ...     return type(raw)
"""
import builtins
import datetime
import decimal
import pathlib
import re
import types
import typing
from enum import Enum

from .faults import ConversionError
from .utils import *

_converters = {}


def register(type, /):
    """
    Decorator binding a converter to a scalar type (and its subclasses).

    Registering a type twice replaces the previous converter.
    """
    if not isinstance(type, builtins.type):
        raise TypeError("register() argument must be a type")

    @rename("register")
    def wrapper(converter, /):
        if not callable(converter):
            raise TypeError("@register() must be applied to a callable")
        _converters[type] = converter
        return converter

    return wrapper


def converter(type, /):
    """
    Return the converter for `type`, walking its MRO; None when unsupported.

    Enumerations never resolve through their mixin (IntEnum members are looked
    up as members, not converted as plain integers).
    """
    if not isinstance(type, builtins.type):
        return None
    enumeration = issubclass(type, Enum)
    for base in type.__mro__:
        if base in _converters and (issubclass(base, Enum) or not enumeration):
            return _converters[base]
    return None


def unwrap(type, /):
    """
    Split a target type into (scalar, nullable).

    - int            -> (int, False)
    - int | None     -> (int, True)
    - Optional[int]  -> (int, True)

    Raises TypeError for any other union.
    """
    if typing.get_origin(type) in (typing.Union, types.UnionType):
        members = typing.get_args(type)
        scalars = [member for member in members if member is not types.NoneType]
        if len(scalars) != 1 or len(members) != 2:
            raise TypeError(f"union {type!r} is not supported (only T | None)")
        return scalars[0], True
    return type, False


def collection(type, /):
    """
    Split the type of a remaining collector into (container, element).

    Accepted forms: None (list of str), list, tuple, list[T], tuple[T, ...].
    """
    if type is None:
        return list, str
    if type is list or type is tuple:
        return type, str
    origin = typing.get_origin(type)
    arguments = typing.get_args(type)
    if origin is list and len(arguments) == 1:
        return list, arguments[0]
    if origin is tuple and len(arguments) == 2 and arguments[1] is Ellipsis:
        return tuple, arguments[0]
    raise TypeError(f"remaining collector type {type!r} must be list[T] or tuple[T, ...]")


def supports(type, /):
    """
    True when `type` (possibly nullable) has a converter.
    """
    try:
        scalar, _ = unwrap(type)
    except TypeError:
        return False
    return converter(scalar) is not None


def convert(raw, type, /, *, label=Unset):
    """
    Convert one raw token to `type`.

    - raw is None (no token where one is structurally required) → ConversionError
    - converter failure                                        → ConversionError

    The ConversionError options carry name (the slot label), raw and type.
    """
    scalar, _ = unwrap(type)
    name = coalesce(label, "value")
    typename = getattr(scalar, "__name__", repr(scalar))

    if raw is None:
        raise ConversionError(
            "no value supplied for %s (expected %s)" % (name, typename),
            name=name,
            raw=raw,
            type=scalar,
        )

    if (function := converter(scalar)) is None:
        raise TypeError(f"no converter registered for {typename}")

    try:
        return function(raw, scalar)
    except (ValueError, TypeError, ArithmeticError) as exception:
        raise ConversionError(
            "cannot convert %r to %s for %s" % (raw, typename, name),
            name=name,
            raw=raw,
            type=scalar,
        ) from exception


@register(str)
def _(raw, type):
    return raw if type is str else type(raw)


@register(int)
def _(raw, type):
    if not re.fullmatch(r"\s*[+-]?[0-9]+\s*", raw, re.ASCII):
        raise ValueError(f"invalid integer literal {raw!r}")
    return type(raw.strip())


@register(float)
def _(raw, type):
    if "_" in raw:
        raise ValueError(f"invalid float literal {raw!r}")
    return type(raw)


@register(bool)
def _(raw, type):
    match raw.strip().lower():
        case "true":
            return True
        case "false":
            return False
    raise ValueError(f"invalid boolean literal {raw!r}")


@register(decimal.Decimal)
def _(raw, type):
    if "_" in raw:
        raise ValueError(f"invalid decimal literal {raw!r}")
    return type(raw.strip())


@register(pathlib.PurePath)
def _(raw, type):
    if not raw:
        raise ValueError("empty path")
    return type(raw)


@register(Enum)
def _(raw, type):
    try:
        return type[raw]
    except KeyError:
        pass
    for member in type:
        if str(member.value) == raw:
            return member
    raise ValueError(f"{raw!r} is not a member of {type.__name__}")


@register(datetime.date)
def _(raw, type):
    return type.fromisoformat(raw.strip())


@register(datetime.time)
def _(raw, type):
    return type.fromisoformat(raw.strip())


__all__ = (
    "register",
    "converter",
    "unwrap",
    "collection",
    "supports",
    "convert",
)
