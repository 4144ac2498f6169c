"""
Molecular formula codec.

Parsing turns a formula such as ``"H2O"`` into an element-count mapping.
Formatting renders a mapping through a small printf-like template:

    ==========  ====================================================
    ``%s``      element symbol
    ``%D``      atom count, always emitted
    ``%d``      atom count, emitted only when greater than one
    ``%d{..}``  the braced text, emitted only when count is above one
    ``\\X``     literal ``X``
    ==========  ====================================================

    >>> format_formula({"C": 1, "H": 4, "O": 1}, "%s%d{<sub>%d</sub>}")
    'CH<sub>4</sub>O'

The basic grammar accepts only ``Symbol[count]`` tokens. The extended
grammar adds a leading coefficient, nested ``()``, ``[]`` and ``{}`` groups
with multipliers, and common organic abbreviations:

    >>> parse_formula("1[Ph(Me)3]2", extended=True)
    {'C': 18, 'H': 28}
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Final, Union

from molkit.exceptions import InvalidFormulaError

DEFAULT_FORMULA_FORMAT: Final[str] = "%s%d"

FormulaSort = Callable[[Mapping[str, int]], Sequence[str]]

_FORMULA_RE: Final = re.compile(r"(?:[A-Z][a-z]*[0-9]*)+")
_TOKEN_RE: Final = re.compile(r"([A-Z][a-z]*)([0-9]*)")
_ELEMENT_TOKEN_RE: Final = re.compile(r"[A-Z][a-z]*")
_DIGITS_RE: Final = re.compile(r"[0-9]*")

# Template control sequences; a backslash in front disables them
_SYMBOL_RE: Final = re.compile(r"(?<!\\)%s")
_COUNT_ALWAYS_RE: Final = re.compile(r"(?<!\\)%D")
_COUNT_GROUP_RE: Final = re.compile(r"(?<!\\)%d\{(.*)\}")
_COUNT_RE: Final = re.compile(r"(?<!\\)%d")
_ESCAPE_RE: Final = re.compile(r"\\(.)")

# Group abbreviations understood by the extended grammar. Symbols that
# are also element symbols (Pr, Ac, Ts) are left to the element.
ABBREVIATIONS: Final[dict[str, dict[str, int]]] = {
    "Me": {"C": 1, "H": 3},
    "Et": {"C": 2, "H": 5},
    "Bu": {"C": 4, "H": 9},
    "Ph": {"C": 6, "H": 5},
    "Bn": {"C": 7, "H": 7},
    "Bz": {"C": 7, "H": 5, "O": 1},
}

_CLOSING: Final[dict[str, str]] = {"(": ")", "[": "]", "{": "}"}


def _add_counts(total: dict[str, int], part: Mapping[str, int], times: int = 1) -> None:
    for symbol, count in part.items():
        total[symbol] = total.get(symbol, 0) + count * times


def parse_formula(text: str, extended: bool = False) -> dict[str, int]:
    """Parse a formula into an element -> count mapping.
    
    Repeated symbols accumulate (``"CH3CH3"`` gives ``{"C": 2, "H": 6}``);
    elements with a zero count are dropped.
    
    Args:
        text: Formula text.
        extended: Accept groups, multipliers and abbreviations.
    
    Returns:
        Mapping in order of first appearance.
    
    Raises:
        InvalidFormulaError: If the text does not follow the grammar.
    """
    counts: dict[str, int] = {}
    if extended:
        counts = _FormulaParser(text).parse()
    else:
        if not _FORMULA_RE.fullmatch(text):
            raise InvalidFormulaError("Invalid formula", text)
        for symbol, digits in _TOKEN_RE.findall(text):
            counts[symbol] = counts.get(symbol, 0) + (int(digits) if digits else 1)
    return {symbol: n for symbol, n in counts.items() if n > 0}


class _FormulaParser:
    """Recursive-descent parser for the extended formula grammar.
    
    Grammar::
    
        formula  := [coefficient] sequence
        sequence := item+
        item     := (symbol | group) [count]
        group    := "(" sequence ")" | "[" sequence "]" | "{" sequence "}"
    """
    
    __slots__ = ("_text", "_pos")
    
    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
    
    def _peek(self) -> str | None:
        if self._pos >= len(self._text):
            return None
        return self._text[self._pos]
    
    def _read(self, regex: re.Pattern) -> str | None:
        match = regex.match(self._text, self._pos)
        if match is None:
            return None
        self._pos = match.end()
        return match.group()
    
    def _read_count(self) -> int:
        digits = self._read(_DIGITS_RE)
        return int(digits) if digits else 1
    
    def _error(self, message: str) -> InvalidFormulaError:
        return InvalidFormulaError(message, self._text, self._pos)
    
    def parse(self) -> dict[str, int]:
        coefficient = self._read_count()
        counts = self._parse_sequence(closing=None)
        if self._peek() is not None:
            raise self._error(f"Unexpected '{self._peek()}'")
        return {symbol: n * coefficient for symbol, n in counts.items()}
    
    def _parse_sequence(self, closing: str | None) -> dict[str, int]:
        counts: dict[str, int] = {}
        items = 0
        while True:
            char = self._peek()
            if char is None or char == closing:
                break
            if char in _CLOSING:
                self._pos += 1
                inner = self._parse_sequence(closing=_CLOSING[char])
                if self._peek() != _CLOSING[char]:
                    raise self._error(f"Expected '{_CLOSING[char]}'")
                self._pos += 1
                _add_counts(counts, inner, self._read_count())
            else:
                symbol = self._read(_ELEMENT_TOKEN_RE)
                if symbol is None:
                    raise self._error(f"Unexpected '{char}'")
                times = self._read_count()
                if symbol in ABBREVIATIONS:
                    _add_counts(counts, ABBREVIATIONS[symbol], times)
                else:
                    _add_counts(counts, {symbol: 1}, times)
            items += 1
        if not items:
            raise self._error("Empty formula" if closing is None else "Empty group")
        return counts


def alphabetical_order(counts: Mapping[str, int]) -> list[str]:
    """Symbols in plain alphabetical order."""
    return sorted(counts)


def hill_order(counts: Mapping[str, int]) -> list[str]:
    """Symbols in Hill order: C, then H, then the rest alphabetically.
    
    Without carbon every symbol, hydrogen included, is alphabetical.
    """
    if "C" not in counts:
        return sorted(counts)
    rest = sorted(s for s in counts if s not in ("C", "H"))
    return ["C"] + (["H"] if "H" in counts else []) + rest


FORMULA_SORTS: Final[dict[str, FormulaSort]] = {
    "alphabetical": alphabetical_order,
    "hill": hill_order,
}


def resolve_formula_sort(sort: Union[str, FormulaSort, None]) -> FormulaSort:
    """Turn a preset name or callable into a sort function.
    
    Raises:
        ValueError: If ``sort`` names an unknown preset.
    """
    if sort is None:
        return alphabetical_order
    if isinstance(sort, str):
        try:
            return FORMULA_SORTS[sort]
        except KeyError:
            raise ValueError(
                f"Unknown formula sort '{sort}'; expected one of {sorted(FORMULA_SORTS)}"
            ) from None
    return sort


def _render(template: str, symbol: str, count: int) -> str:
    s = _SYMBOL_RE.sub(lambda m: symbol, template)
    s = _COUNT_ALWAYS_RE.sub(lambda m: str(count), s)
    s = _COUNT_GROUP_RE.sub(lambda m: m.group(1) if count > 1 else "", s)
    s = _COUNT_RE.sub(lambda m: str(count) if count > 1 else "", s)
    return _ESCAPE_RE.sub(lambda m: m.group(1), s)


def format_formula(
    counts: Mapping[str, int],
    fmt: str | None = None,
    sort: Union[str, FormulaSort, None] = None,
) -> str:
    """Render an element -> count mapping as text.
    
    Args:
        counts: Element counts, e.g. from ``Molecule.formula_hash()``.
        fmt: Template; defaults to ``"%s%d"``.
        sort: Ordering preset name (``"alphabetical"``, ``"hill"``) or a
            callable receiving ``counts`` and returning the symbols in the
            desired order. Defaults to alphabetical.
    
    Returns:
        The template rendered once per element, concatenated.
    
    Example:
        >>> format_formula({"H": 2, "O": 1})
        'H2O'
        >>> format_formula({"H": 2, "O": 1}, "%s%D")
        'H2O1'
    """
    template = fmt or DEFAULT_FORMULA_FORMAT
    order = resolve_formula_sort(sort)(counts)
    return "".join(_render(template, symbol, counts[symbol]) for symbol in order)
