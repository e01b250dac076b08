"""
Numeric literal scanner.

Given the remainder of an expression string, returns the longest prefix
that forms a valid number and its value. The tokenizer only calls it when
the text at the cursor is neither an operator nor a symbol.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

DECIMAL_DIGITS = "0123456789"

# Radix prefixes (after a leading "0") and the digits each radix accepts
RADIX_PREFIXES: Dict[str, int] = {"x": 16, "o": 8, "b": 2}
RADIX_DIGITS: Dict[int, str] = {
    16: "0123456789abcdefABCDEF",
    8: "01234567",
    2: "01",
}


@dataclass(frozen=True)
class NumberOptions:
    """Switches controlling which literal forms are recognized."""

    # Allow an exponent, e.g. "1e2"
    exponent: bool = True

    # Allow a fractional part, e.g. "0.3"
    decimal: bool = True

    # Digit separator, e.g. "1_000"; None disables separators
    separator: Optional[str] = "_"

    # Scan a leading +/- sign as part of the literal
    signed: bool = False

    def __post_init__(self) -> None:
        if self.separator is not None and len(self.separator) != 1:
            raise ValueError("separator must be a single character or None")


DEFAULT_NUMBER_OPTIONS = NumberOptions()


@dataclass(frozen=True)
class NumberMatch:
    """Result of scanning: the matched text (possibly empty) and its value."""

    text: str
    value: float

    @property
    def length(self) -> int:
        return len(self.text)


NO_MATCH = NumberMatch("", 0.0)

# Signature of a numeric literal scanner
NumberScanner = Callable[[str, Optional[NumberOptions]], NumberMatch]


def _scan_digits(text: str, start: int, digits: str, separator: Optional[str]) -> int:
    """Returns the end index of a digit run starting at ``start``."""
    i = start
    while i < len(text):
        ch = text[i]
        if ch in digits:
            i += 1
            continue
        # Separators are only valid between two digits
        if (
            separator
            and ch == separator
            and i > start
            and text[i - 1] in digits
            and i + 1 < len(text)
            and text[i + 1] in digits
        ):
            i += 1
            continue
        break
    return i


def _to_float(literal: str, radix: int) -> float:
    try:
        return float(int(literal, radix))
    except OverflowError:
        return math.inf


def scan_number(text: str, options: Optional[NumberOptions] = None) -> NumberMatch:
    """
    Scans the longest numeric literal at the start of ``text``.

    Args:
        text: Remaining source, starting at the cursor
        options: Literal forms to accept

    Returns:
        The match; ``NO_MATCH`` (zero length) when no number starts here
    """
    options = options or DEFAULT_NUMBER_OPTIONS
    separator = options.separator
    i = 0
    sign = 1.0

    if options.signed and text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        i = 1

    # Radix-prefixed integers: 0x1f, 0o17, 0b101
    if text[i : i + 1] == "0":
        radix = RADIX_PREFIXES.get(text[i + 1 : i + 2].lower())
        if radix is not None:
            end = _scan_digits(text, i + 2, RADIX_DIGITS[radix], separator)
            if end > i + 2:
                literal = text[i + 2 : end]
                if separator:
                    literal = literal.replace(separator, "")
                return NumberMatch(text[:end], sign * _to_float(literal, radix))

    end = _scan_digits(text, i, DECIMAL_DIGITS, separator)

    if options.decimal and text[end : end + 1] == ".":
        fraction_end = _scan_digits(text, end + 1, DECIMAL_DIGITS, separator)
        if fraction_end > end + 1:
            end = fraction_end

    if end == i:
        return NO_MATCH

    if options.exponent and text[end : end + 1] in ("e", "E"):
        j = end + 1
        if text[j : j + 1] in ("+", "-"):
            j += 1
        exponent_end = _scan_digits(text, j, DECIMAL_DIGITS, separator)
        if exponent_end > j:
            end = exponent_end

    literal = text[i:end]
    if separator:
        literal = literal.replace(separator, "")
    return NumberMatch(text[:end], sign * float(literal))
