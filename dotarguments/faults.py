"""
dotarguments faults (parse failures) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse failure.
  Codes are grouped by domain so logs and searches stay predictable.
- ParserError: base type carrying message + read-only options; knows how to
  render itself through rich in a lowercased, actionable way.
- One subclass per failure kind (unknown argument, malformed short option,
  missing value, too many positionals, missing mandatory named/positional,
  conversion failure) so callers can match on the type or on the code.
- report(): print a fault to stderr.
- getdoc(): optional description lookup for a code from the host application.

Integration
- The parser raises these internally and the public entry points hand them back
  inside a ParseResult; nothing outside parser.py needs to catch them.
- Schema problems are not faults: they are TypeError/ValueError raised while the
  ArgumentDefinition is built.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - named arguments (111xx)
      • UNKNOWN_ARGUMENT, MALFORMED_SHORT_OPTION, MISSING_VALUE,
        MISSING_NAMED_ARGUMENT
    - positional arguments (112xx)
      • TOO_MANY_POSITIONALS, MISSING_POSITIONAL_ARGUMENT
    - conversion (113xx)
      • CONVERSION_FAILURE
    - internal (119xx)
      • INTERNAL (a container factory or setter failed)
    """
    # --- named argument errors (111xx) ---
    UNKNOWN_ARGUMENT            = 11101
    MALFORMED_SHORT_OPTION      = 11102
    MISSING_VALUE               = 11103
    MISSING_NAMED_ARGUMENT      = 11104

    # --- positional argument errors (112xx) ---
    TOO_MANY_POSITIONALS        = 11201
    MISSING_POSITIONAL_ARGUMENT = 11202

    # --- conversion errors (113xx) ---
    CONVERSION_FAILURE          = 11301

    # --- internal errors (119xx) ---
    INTERNAL                    = 11901

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParserError(Exception):
    """
    base class of every parse failure.

    the message is the human sentence; everything else (code, title, hint and
    the kind-specific payload such as name/token/index) lives in `options` and
    is also reachable as attributes.
    """
    __defaults__ = {
        "code": FaultCode.INTERNAL,
        "title": "parse error",
        "hint": "check the arguments and try again",
    }

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(type(self).__defaults__ | options)

    def __getattr__(self, name):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    @property
    def code(self):
        return self.options["code"]

    def __str__(self):
        return str(self.message)

    def __eq__(self, other):
        if not isinstance(other, ParserError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message and self.options == other.options

    __hash__ = Exception.__hash__

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", "dotarguments"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " - ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownArgumentError(ParserError):
    __defaults__ = ParserError.__defaults__ | {
        "code": FaultCode.UNKNOWN_ARGUMENT,
        "title": "unknown argument",
        "hint": "remove it or check the spelling of the option name",
    }


class MalformedShortOptionError(ParserError):
    __defaults__ = ParserError.__defaults__ | {
        "code": FaultCode.MALFORMED_SHORT_OPTION,
        "title": "malformed short option",
        "hint": "short options are a single dash and one character (e.g., -v); use -- for long names",
    }


class MissingValueError(ParserError):
    __defaults__ = ParserError.__defaults__ | {
        "code": FaultCode.MISSING_VALUE,
        "title": "missing option value",
        "hint": "pass the value right after the option (e.g., --name value)",
    }


class TooManyPositionalArgumentsError(ParserError):
    __defaults__ = ParserError.__defaults__ | {
        "code": FaultCode.TOO_MANY_POSITIONALS,
        "title": "too many positional arguments",
        "hint": "remove the extra values",
    }


class MissingMandatoryNamedArgumentError(ParserError):
    __defaults__ = ParserError.__defaults__ | {
        "code": FaultCode.MISSING_NAMED_ARGUMENT,
        "title": "missing mandatory argument",
        "hint": "add the missing option and its value",
    }


class MissingMandatoryPositionalArgumentError(ParserError):
    __defaults__ = ParserError.__defaults__ | {
        "code": FaultCode.MISSING_POSITIONAL_ARGUMENT,
        "title": "missing mandatory argument",
        "hint": "add the missing positional value",
    }


class ConversionError(ParserError):
    __defaults__ = ParserError.__defaults__ | {
        "code": FaultCode.CONVERSION_FAILURE,
        "title": "invalid value",
        "hint": "pass a value of the expected type",
    }


def report(fault, /, *, fancy=False, colorful=True):
    """
    print a fault to stderr using its rich rendering.

    options are merged through copy.replace semantics so the original fault is
    left untouched.
    """
    if not isinstance(fault, ParserError):
        raise TypeError("report() argument must be a parser error")
    console.print(fault.__replace__(fancy=fancy, colorful=colorful))


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParserError",
    "UnknownArgumentError",
    "MalformedShortOptionError",
    "MissingValueError",
    "TooManyPositionalArgumentsError",
    "MissingMandatoryNamedArgumentError",
    "MissingMandatoryPositionalArgumentError",
    "ConversionError",
    "report",
    "getdoc",
)
