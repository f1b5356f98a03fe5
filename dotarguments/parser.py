"""
dotarguments parser: bind a flat token sequence to a container.

Entry points
- parse(definition, tokens) -> ParseResult
- parse_as(container_type, tokens) -> ParseResult  (discovery + parse)
- run(container_type, argv=Unset) -> container       (CLI helper)

Token grammar (purely lexical, decided by the first characters)
- "--name"  long named argument, looked up in definition.long_named
- "-c"      short named argument, exactly one character after the dash
- anything else is a bare token (positional, then remaining)

Not supported on purpose: "--name=value", grouped switches ("-ab") and the
"--" end-of-options marker. A token such as "-42" is a malformed short option
and "-5" looks up the short name "5"; pass negative numbers as the value of a
named argument ("--offset -42") where the next token is taken verbatim.

Scan (single pass, one token of lookahead for named values)
- idle
  • switch          -> bind True, stay idle
  • named value     -> await its value
  • bare token      -> next positional slot, else overflow
- awaiting value
  • any token       -> convert, bind, back to idle
- end of input while awaiting a value -> MissingValueError
- overflow -> remaining collector (also when empty), else
  TooManyPositionalArgumentsError
- completeness: first unbound mandatory named value (declaration order), then
  first unbound mandatory positional (index order)

Parsing is all-or-nothing: a failed parse never hands back the container.
"""
import logging
import sys
from collections.abc import Iterable
from typing import NamedTuple

from . import coercion
from .definition import ArgumentDefinition
from .faults import *
from .slots import SlotKind
from .utils import *

logger = logging.getLogger(__name__)


class ParseResult(NamedTuple):
    """
    Outcome of one parse call: either a populated container or a fault.
    """
    value: object = None
    fault: ParserError | None = None

    @property
    def ok(self):
        return self.fault is None

    def __bool__(self):
        return self.fault is None

    def unwrap(self):
        """
        Return the container, or raise the fault.
        """
        if self.fault is not None:
            raise self.fault
        return self.value


def _ordinal(number):
    """
    Human-friendly ordinal for a 1-based token position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _lookup(names, name, token, position, /):
    try:
        return names[name]
    except KeyError:
        raise UnknownArgumentError(
            "unknown argument %r at %s position" % (token, _ordinal(position)),
            name=name,
            token=token,
            index=position,
        ) from None


def _assign(slot, container, raw, /):
    slot.bind(container, coercion.convert(raw, slot.type, label=slot.label))


def _consume(definition, container, tokens, /):
    """
    Walk the tokens once and bind every slot the input mentions.
    """
    long_named = definition.long_named
    short_named = definition.short_named
    positional = definition.positional

    found = set()
    overflow = []
    cursor = 0
    pending = None  # named value awaiting its token
    start = 0

    for position, token in enumerate(tokens, start=1):
        if pending is not None:
            _assign(pending, container, token)
            found.add(pending)
            pending = None
            continue

        if token.startswith("--"):
            slot = _lookup(long_named, token[2:], token, position)
        elif token.startswith("-"):
            if len(token) != 2:
                raise MalformedShortOptionError(
                    "short option %r at %s position must be a dash and exactly one character" % (
                        token, _ordinal(position)
                    ),
                    token=token,
                    index=position,
                )
            slot = _lookup(short_named, token[1], token, position)
        else:
            if cursor < len(positional):
                _assign(slot := positional[cursor], container, token)
                found.add(slot)
                cursor += 1
            else:
                overflow.append(token)
            continue

        if slot.kind is SlotKind.SWITCH:
            slot.bind(container, True)
            found.add(slot)
        else:
            pending, start = slot, position

    if pending is not None:
        raise MissingValueError(
            "argument %r at %s position requires a value" % (pending.label, _ordinal(start)),
            name=pending.label,
            index=start,
        )

    if (remaining := definition.remaining) is not None:
        container_type, element = coercion.collection(remaining.type)
        remaining.bind(container, container_type(
            coercion.convert(token, element, label=remaining.label) for token in overflow
        ))
        found.add(remaining)
    elif overflow:
        raise TooManyPositionalArgumentsError(
            "too many positional arguments (%d expected, %d extra: %s)" % (
                len(positional), len(overflow), " ".join(map(repr, overflow))
            ),
            overflow=tuple(overflow),
        )

    logger.debug("bound %d slot(s), %d overflow token(s)", len(found), len(overflow))
    _complete(definition, found)


def _complete(definition, found, /):
    """
    Fail on the first mandatory slot the scan did not bind.
    """
    for slot in definition.slots:
        if slot.kind is SlotKind.NAMED_VALUE and not slot.optional and slot not in found:
            raise MissingMandatoryNamedArgumentError(
                "mandatory argument %r is missing" % slot.label,
                name=slot.long if slot.long is not None else slot.short,
            )

    for slot in definition.positional:
        if not slot.optional and slot not in found:
            raise MissingMandatoryPositionalArgumentError(
                "mandatory argument at position %d is missing" % slot.index,
                index=slot.index,
            )


def parse(definition, tokens, /):
    """
    Parse `tokens` against `definition`.

    Contract
    - definition: ArgumentDefinition
    - tokens: iterable of str (a single str is rejected)

    Returns
    - ParseResult(value=container) on success
    - ParseResult(fault=ParserError) on failure; faults that are not parser
      errors (a failing container factory or setter) are wrapped in a
      ParserError with code INTERNAL and chained as __cause__.

    Raises
    - TypeError: caller contract violations (wrong definition or token types).
    """
    if not isinstance(definition, ArgumentDefinition):
        raise TypeError("parse() first argument must be an argument-definition")
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("parse() second argument must be an iterable of strings")
    tokens = list(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("parse() second argument must be an iterable of strings")

    logger.debug("parsing %d token(s) for %r", len(tokens), definition.container_type or definition.factory)

    try:
        container = definition.factory()
        _consume(definition, container, tokens)
    except ParserError as fault:
        logger.debug("parse failed: %s", fault)
        return ParseResult(fault=fault)
    except Exception as exception:
        fault = ParserError("error while parsing: %s" % exception, exception=exception)
        fault.__cause__ = exception
        logger.debug("parse failed unexpectedly", exc_info=exception)
        return ParseResult(fault=fault)

    return ParseResult(value=container)


def parse_as(container_type, tokens, /):
    """
    Discover the definition of `container_type` and parse `tokens` with it.

    Discovery problems are not parse failures: they raise TypeError/ValueError.
    """
    return parse(ArgumentDefinition.discover(container_type), tokens)


def run(container_type, argv=Unset, /, *, fancy=False, colorful=True):
    """
    CLI helper: parse argv (default sys.argv[1:]) into a container.

    On failure the fault is printed to stderr and the process exits with 2.
    """
    result = parse_as(container_type, sys.argv[1:] if argv is Unset else argv)
    if not result:
        report(result.fault, fancy=fancy, colorful=colorful)
        sys.exit(2)
    return result.value


__all__ = (
    "ParseResult",
    "parse",
    "parse_as",
    "run",
)
