"""Chemical formula parser.

Turns a formula such as ``"Ca(OH)2"`` into element counts
(``{"Ca": 1, "O": 2, "H": 2}``). Supported notation:

- nested groups with ``()``, ``[]`` or ``{}`` and an optional multiplier,
- hydrates separated by a dot, e.g. ``"CuSO4.5H2O"``,
- ionic charge as ``"^2-"``/``"^3+"`` or a bare trailing ``"+"``/``"-"``,
- free electrons written ``"e"``, ``"e-"`` or ``"e^-"``,
- a trailing state annotation ``(s)``, ``(l)``, ``(g)`` or ``(aq)``.

Net charge is stored under :data:`chembalancer.constants.CHARGE_KEY` so the
solver can conserve it like any other element.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from chembalancer.constants import (
    CHARGE_KEY,
    ELECTRON_TOKENS,
    MAX_GROUP_DEPTH,
    MAX_NUMBER_DIGITS,
    STATE_ANNOTATIONS,
)
from chembalancer.elements import is_valid_element
from chembalancer.errors import ParseError
from chembalancer.messages import DEFAULT_MESSAGES, MessageFormatter
from chembalancer.models import ParsedFormula

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_STATE_PATTERN = re.compile(r"\((%s)\)$" % "|".join(STATE_ANNOTATIONS))
_HYDRATE_MULTIPLIER = re.compile(r"^(\d+)(.+)")
_LEADING_COEFFICIENT = re.compile(r"^\d+")
_CARET_CHARGE = re.compile(r"\^(\d*)([+-])$")
_UNIT_CHARGE = re.compile(r"([+-])$")

_TOKEN_PATTERN = re.compile(
    r"(?P<element>[A-Z][a-z]?)(?P<count>\d*)"
    r"|(?P<open>[(\[{])"
    r"|(?P<close>[)\]}])(?P<multiplier>\d*)"
    r"|(?P<invalid>.)"
)

_CLOSERS = {"(": ")", "[": "]", "{": "}"}


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    start: int
    end: int
    symbol: str = ""
    digits: str = ""


@dataclass(frozen=True)
class Atom:
    symbol: str
    count: int

    def counts(self) -> Dict[str, int]:
        return {self.symbol: self.count}


@dataclass(frozen=True)
class Group:
    children: Tuple[Union["Atom", "Group"], ...]
    multiplier: int = 1

    def counts(self) -> Dict[str, int]:
        totals: Dict[str, int] = {}
        for child in self.children:
            _merge_counts(totals, child.counts(), self.multiplier)
        return totals


def _merge_counts(target: Dict[str, int], counts: Mapping[str, int], multiplier: int = 1) -> None:
    for element, count in counts.items():
        target[element] = target.get(element, 0) + count * multiplier


def _tokenize(text: str) -> List[_Token]:
    tokens: List[_Token] = []
    for match in _TOKEN_PATTERN.finditer(text):
        kind = match.lastgroup
        if kind == "count":
            kind = "element"
        elif kind == "multiplier":
            kind = "close"

        if kind == "invalid" and tokens and tokens[-1].kind == "invalid":
            previous = tokens.pop()
            tokens.append(
                _Token("invalid", previous.text + match.group(0), previous.start, match.end())
            )
            continue

        if kind == "element":
            tokens.append(
                _Token(
                    kind,
                    match.group(0),
                    match.start(),
                    match.end(),
                    symbol=match.group("element"),
                    digits=match.group("count"),
                )
            )
        elif kind == "close":
            tokens.append(
                _Token(
                    kind,
                    match.group(0),
                    match.start(),
                    match.end(),
                    symbol=match.group("close"),
                    digits=match.group("multiplier"),
                )
            )
        else:
            tokens.append(_Token(kind, match.group(0), match.start(), match.end()))
    return tokens


def _to_number(digits: str, formula: str, messages: MessageFormatter) -> int:
    """Convert a digit run, rejecting runs longer than ``MAX_NUMBER_DIGITS``."""
    if not digits:
        return 1
    if len(digits) > MAX_NUMBER_DIGITS:
        raise ParseError(
            messages.format("error.number_too_long", formula=formula, limit=MAX_NUMBER_DIGITS),
            formula=formula,
        )
    return int(digits)


class _FormulaReader:
    """Recursive-descent reader building an :class:`Atom`/:class:`Group` tree.

    Nesting is limited to ``MAX_GROUP_DEPTH`` levels of brackets.
    """

    def __init__(self, text: str, formula: str, messages: MessageFormatter) -> None:
        self._text = text
        self._formula = formula
        self._messages = messages
        self._tokens = _tokenize(text)
        self._position = 0

    def read(self) -> Group:
        return self._sequence(closer=None, depth=0)

    def _sequence(self, closer: Optional[str], depth: int) -> Group:
        children: List[Union[Atom, Group]] = []
        while self._position < len(self._tokens):
            token = self._tokens[self._position]

            if token.kind == "element":
                if not is_valid_element(token.symbol):
                    raise ParseError(
                        self._messages.format(
                            "error.unknown_element", element=token.symbol, formula=self._formula
                        ),
                        formula=self._formula,
                    )
                children.append(Atom(token.symbol, self._number(token.digits)))
                self._position += 1

            elif token.kind == "open":
                if depth >= MAX_GROUP_DEPTH:
                    raise ParseError(
                        self._messages.format(
                            "error.nesting_too_deep", formula=self._formula, limit=MAX_GROUP_DEPTH
                        ),
                        formula=self._formula,
                    )
                self._position += 1
                children.append(self._sequence(closer=_CLOSERS[token.text], depth=depth + 1))

            elif token.kind == "close":
                if closer is None:
                    raise self._invalid_characters(token)
                if token.symbol != closer or not children:
                    raise self._syntax_error()
                self._position += 1
                return Group(tuple(children), self._number(token.digits))

            else:
                raise self._invalid_characters(token)

        if closer is not None:
            raise self._syntax_error()
        return Group(tuple(children))

    def _number(self, digits: str) -> int:
        return _to_number(digits, self._formula, self._messages)

    def _invalid_characters(self, token: _Token) -> ParseError:
        key = "error.invalid_characters_end" if token.end == len(self._text) else "error.invalid_characters"
        return ParseError(
            self._messages.format(key, formula=self._formula, chars=token.text),
            formula=self._formula,
        )

    def _syntax_error(self) -> ParseError:
        return ParseError(
            self._messages.format("error.invalid_formula_syntax", formula=self._formula),
            formula=self._formula,
        )


def _extract_charge(
    text: str, formula: str, messages: MessageFormatter
) -> Tuple[str, int]:
    caret = _CARET_CHARGE.search(text)
    if caret:
        magnitude = _to_number(caret.group(1), formula, messages)
        charge = magnitude if caret.group(2) == "+" else -magnitude
        return text[: caret.start()], charge

    unit = _UNIT_CHARGE.search(text)
    if unit:
        return text[: unit.start()], 1 if unit.group(1) == "+" else -1

    return text, 0


def _parse_standard(text: str, formula: str, messages: MessageFormatter) -> Dict[str, int]:
    text = _LEADING_COEFFICIENT.sub("", text, count=1)

    if text in ELECTRON_TOKENS:
        return {CHARGE_KEY: -1}

    text, charge = _extract_charge(text, formula, messages)

    counts: Dict[str, int] = {}
    if charge != 0:
        counts[CHARGE_KEY] = charge
    if not text:
        return counts

    tree = _FormulaReader(text, formula, messages).read()
    _merge_counts(counts, tree.counts())
    return counts


def parse_formula_with_state(
    formula: str, messages: MessageFormatter = DEFAULT_MESSAGES
) -> ParsedFormula:
    """Parse a formula and report its state annotation, if any.

    Args:
        formula: Formula text, e.g. ``"NaCl(aq)"`` or ``"CuSO4.5H2O"``.
        messages: Formatter used to render error messages.

    Returns:
        ``ParsedFormula`` with the element counts and the state (``"s"``,
        ``"l"``, ``"g"``, ``"aq"`` or ``None``).

    Raises:
        ParseError: On invalid characters, unbalanced or too deeply nested
            brackets, an over-long number or an unknown element symbol.
    """
    original = formula.strip()
    clean = _WHITESPACE.sub("", formula)

    state = None
    state_match = _STATE_PATTERN.search(clean)
    if state_match:
        state = state_match.group(1)
        clean = clean[: state_match.start()]

    if "." in clean:
        elements: Dict[str, int] = {}
        for index, part in enumerate(clean.split(".")):
            multiplier = 1
            if index > 0:
                hydrate = _HYDRATE_MULTIPLIER.match(part)
                if hydrate:
                    multiplier = _to_number(hydrate.group(1), original, messages)
                    part = hydrate.group(2)
            _merge_counts(elements, _parse_standard(part, original, messages), multiplier)
    else:
        elements = _parse_standard(clean, original, messages)

    logger.debug("Parsed %r -> %s (state=%s)", original, elements, state)
    return ParsedFormula(elements=MappingProxyType(elements), state=state)


def parse_formula(formula: str, messages: MessageFormatter = DEFAULT_MESSAGES) -> Dict[str, int]:
    """Parse a formula into element counts, discarding any state annotation."""
    return dict(parse_formula_with_state(formula, messages).elements)
