"""Arbitrary-precision signed integers.

A :class:`BigInt` is a sign flag plus a tuple of base-10**7 digit groups,
least significant first (see :mod:`digits`).  Values are immutable:
every operation returns a new instance and never touches its inputs.

Construction goes through one of three tagged entry points,
:meth:`BigInt.from_int`, :meth:`BigInt.from_str` and
:meth:`BigInt.copy_of`; :func:`construct` picks one by argument type.
The module-level functions are the arithmetic; the operator methods on
:class:`BigInt` only forward to them.

Decision branches are annotated with the branch IDs listed in spec.py
(BranchSpec) so white-box tests can trace coverage to every decision
point.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Final, Union

from digits import (
    BASE,
    ONE,
    WIDTH,
    Magnitude,
    add_magnitude,
    compare_magnitude as _order,
    divide_magnitude,
    divide_magnitude_estimate,
    multiply_magnitude,
    strip,
    subtract_magnitude,
)

__all__ = [
    "BASE",
    "WIDTH",
    "MAX_EXACT_FLOAT",
    "BigInt",
    "BigIntError",
    "InvalidInput",
    "ParseError",
    "DivisionByZero",
    "DivisionStrategy",
    "construct",
    "compare",
    "compare_magnitude",
    "add",
    "subtract",
    "negate",
    "abs_",
    "multiply",
    "divide",
    "to_string",
    "to_number",
]

logger = logging.getLogger(__name__)

# Largest float magnitude below which every integer is exactly representable.
MAX_EXACT_FLOAT: Final[int] = 2 ** 53

_DECIMAL = re.compile(r"-?[0-9]+")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BigIntError(Exception):
    """Base class for every error raised by this module."""


class InvalidInput(BigIntError, ValueError):
    """Raised when a constructor receives an argument it cannot accept."""


class ParseError(BigIntError, ValueError):
    """Raised when a string is not an optionally signed decimal integer."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"cannot parse {text!r} as an integer")


class DivisionByZero(BigIntError, ZeroDivisionError):
    """Raised when the divisor is zero."""


class DivisionStrategy(str, Enum):
    """How the general division path finds each quotient digit."""

    SUBTRACTIVE = "subtractive"   # repeated subtraction
    ESTIMATE = "estimate"         # binary search per quotient digit


# ---------------------------------------------------------------------------
# Representation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class BigInt:
    """An immutable signed integer of unbounded size.

    ``digits`` holds the magnitude, least significant group first.
    Instances built directly are checked against the representation
    invariants; the arithmetic functions build them through
    :func:`_make`, which canonicalizes first.
    """

    negative: bool = False
    digits: Magnitude = ()

    def __post_init__(self) -> None:
        if not isinstance(self.digits, tuple):
            raise InvalidInput("digits must be a tuple of digit groups")
        for group in self.digits:
            if type(group) is not int or not 0 <= group < BASE:
                raise InvalidInput(f"digit group {group!r} outside [0, {BASE})")
        if self.digits and self.digits[-1] == 0:
            raise InvalidInput("digits must not carry high-order zero groups")
        if self.negative and not self.digits:
            raise InvalidInput("zero must not be negative")

    # -- tagged constructors ------------------------------------------------

    @classmethod
    def from_int(cls, value: int | float) -> BigInt:
        """Build from a native number.

        Any ``int`` is exact.  A ``float`` must be finite, integral and
        no larger in magnitude than ``MAX_EXACT_FLOAT``.

        Branches: NEW-INT, NEW-FLOAT, NEW-FLOAT-NONFINITE,
                  NEW-FLOAT-TOO-LARGE, NEW-FLOAT-FRACTION, NEW-BAD-TYPE
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInput(                                   # NEW-BAD-TYPE
                f"from_int expects an int or float, got {type(value).__name__}"
            )
        if isinstance(value, float):                              # NEW-FLOAT
            if not math.isfinite(value):                          # NEW-FLOAT-NONFINITE
                raise InvalidInput(f"non-finite number {value!r}")
            if abs(value) > MAX_EXACT_FLOAT:                      # NEW-FLOAT-TOO-LARGE
                raise InvalidInput(
                    f"{value!r} exceeds {MAX_EXACT_FLOAT}; supply a string instead"
                )
            if not value.is_integer():                            # NEW-FLOAT-FRACTION
                raise InvalidInput(f"non-integer number {value!r}")
            value = int(value)

        negative = value < 0                                      # NEW-INT
        remaining = -value if negative else value
        groups: list[int] = []
        while remaining:
            remaining, group = divmod(remaining, BASE)
            groups.append(group)
        return _make(negative, groups)

    @classmethod
    def from_str(cls, text: str) -> BigInt:
        """Parse ``-?[0-9]+``.

        Branches: PARSE-OK, PARSE-ERROR, PARSE-NEG-ZERO, NEW-BAD-TYPE
        """
        if not isinstance(text, str):
            raise InvalidInput(                                   # NEW-BAD-TYPE
                f"from_str expects a str, got {type(text).__name__}"
            )
        if not _DECIMAL.fullmatch(text):                          # PARSE-ERROR
            raise ParseError(text)

        negative = text.startswith("-")
        body = text[1:] if negative else text
        body = body.zfill(-(-len(body) // WIDTH) * WIDTH)
        # Groups appear most significant first in the text.
        groups = [
            int(body[i:i + WIDTH]) for i in range(len(body) - WIDTH, -1, -WIDTH)
        ]
        # "-000" lands here too; _make drops the sign.            # PARSE-NEG-ZERO
        return _make(negative, groups)                            # PARSE-OK

    @classmethod
    def copy_of(cls, other: BigInt) -> BigInt:
        """Return a new instance with the same sign and digit groups.

        Branches: NEW-COPY, NEW-BAD-TYPE
        """
        if not isinstance(other, BigInt):
            raise InvalidInput(                                   # NEW-BAD-TYPE
                f"copy_of expects a BigInt, got {type(other).__name__}"
            )
        return cls(other.negative, tuple(other.digits))           # NEW-COPY

    # -- queries ------------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        return not self.digits

    @property
    def sign(self) -> int:
        if not self.digits:
            return 0
        return -1 if self.negative else 1

    # -- operator forwarding ------------------------------------------------

    def __add__(self, other: object) -> BigInt:
        if not isinstance(other, BigInt):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: object) -> BigInt:
        if not isinstance(other, BigInt):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, other: object) -> BigInt:
        if not isinstance(other, BigInt):
            return NotImplemented
        return multiply(self, other)

    def __truediv__(self, other: object) -> BigInt:
        """Truncated division, same as :func:`divide`."""
        if not isinstance(other, BigInt):
            return NotImplemented
        return divide(self, other)

    def __neg__(self) -> BigInt:
        return negate(self)

    def __pos__(self) -> BigInt:
        return self

    def __abs__(self) -> BigInt:
        return abs_(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) >= 0

    def __hash__(self) -> int:
        return hash((self.negative, self.digits))

    def __bool__(self) -> bool:
        return bool(self.digits)

    def __str__(self) -> str:
        return to_string(self)

    def __repr__(self) -> str:
        return f"BigInt('{to_string(self)}')"

    def __float__(self) -> float:
        return to_number(self)


def _make(negative: bool, groups: Magnitude | list[int]) -> BigInt:
    """Freeze locally built groups into a canonical BigInt."""
    magnitude = strip(groups)
    return BigInt(negative and bool(magnitude), magnitude)


ZERO: Final[BigInt] = BigInt()

Constructible = Union[int, float, str, BigInt, None]


def construct(value: Constructible = None) -> BigInt:
    """Build a BigInt from an int, float, decimal string or BigInt.

    ``None`` gives zero.  Any other type raises :class:`InvalidInput`.

    Branches: NEW-NONE, NEW-BAD-TYPE
    """
    if value is None:                                             # NEW-NONE
        return BigInt()
    if isinstance(value, BigInt):
        return BigInt.copy_of(value)
    if isinstance(value, str):
        return BigInt.from_str(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return BigInt.from_int(value)
    raise InvalidInput(                                           # NEW-BAD-TYPE
        "construct expects None, an int, a float, a str or a BigInt, "
        f"got {type(value).__name__}"
    )


# ---------------------------------------------------------------------------
# Comparator
# ---------------------------------------------------------------------------

def compare(a: BigInt, b: BigInt) -> int:
    """Signed comparison: -1, 0 or 1.

    Branches: CMP-SIGN-POS-NEG, CMP-SIGN-NEG-POS, CMP-BOTH-NEG,
              CMP-BOTH-NONNEG
    """
    if b.negative and not a.negative:                             # CMP-SIGN-POS-NEG
        return 1
    if a.negative and not b.negative:                             # CMP-SIGN-NEG-POS
        return -1
    if a.negative:                                                # CMP-BOTH-NEG
        # Larger magnitude is the smaller negative number.
        return _order(b.digits, a.digits)
    return _order(a.digits, b.digits)                             # CMP-BOTH-NONNEG


def compare_magnitude(a: BigInt, b: BigInt) -> int:
    """Compare absolute values: -1, 0 or 1."""
    return _order(a.digits, b.digits)


# ---------------------------------------------------------------------------
# Additive engine
# ---------------------------------------------------------------------------

def negate(a: BigInt) -> BigInt:
    """Flip the sign.  Zero stays non-negative."""
    return _make(not a.negative, a.digits)


def abs_(a: BigInt) -> BigInt:
    return BigInt(False, a.digits)


def add(a: BigInt, b: BigInt) -> BigInt:
    """Signed addition.

    Branches: ADD-SAME-SIGN, ADD-CANCEL, ADD-A-LARGER, ADD-B-LARGER
    """
    if a.negative == b.negative:                                  # ADD-SAME-SIGN
        return _make(a.negative, add_magnitude(a.digits, b.digits))

    order = _order(a.digits, b.digits)
    if order == 0:                                                # ADD-CANCEL
        return BigInt()
    if order > 0:                                                 # ADD-A-LARGER
        return _make(a.negative, subtract_magnitude(a.digits, b.digits))
    return _make(b.negative, subtract_magnitude(b.digits, a.digits))  # ADD-B-LARGER


def subtract(a: BigInt, b: BigInt) -> BigInt:
    return add(a, negate(b))


# ---------------------------------------------------------------------------
# Multiplicative engine
# ---------------------------------------------------------------------------

def multiply(a: BigInt, b: BigInt) -> BigInt:
    """Signed multiplication.

    Branches: MUL-ZERO, MUL-A-UNIT, MUL-B-UNIT, MUL-GENERAL
    """
    if not a.digits or not b.digits:                              # MUL-ZERO
        return BigInt()
    negative = a.negative != b.negative
    if a.digits == ONE:                                           # MUL-A-UNIT
        return _make(negative, b.digits)
    if b.digits == ONE:                                           # MUL-B-UNIT
        return _make(negative, a.digits)
    return _make(negative, multiply_magnitude(a.digits, b.digits))  # MUL-GENERAL


# ---------------------------------------------------------------------------
# Division engine
# ---------------------------------------------------------------------------

_DIVIDERS = {
    DivisionStrategy.SUBTRACTIVE: divide_magnitude,
    DivisionStrategy.ESTIMATE: divide_magnitude_estimate,
}


def divide(
    a: BigInt,
    b: BigInt,
    strategy: DivisionStrategy = DivisionStrategy.ESTIMATE,
) -> BigInt:
    """Signed division truncating toward zero.  The remainder is dropped.

    Branches: DIV-ZERO, DIV-SMALLER, DIV-EQUAL, DIV-UNIT, DIV-GENERAL
    """
    if not b.digits:                                              # DIV-ZERO
        raise DivisionByZero("attempted to divide by zero")

    strategy = DivisionStrategy(strategy)
    order = _order(a.digits, b.digits)
    if order < 0:                                                 # DIV-SMALLER
        return BigInt()
    negative = a.negative != b.negative
    if order == 0:                                                # DIV-EQUAL
        return _make(negative, ONE)
    if b.digits == ONE:                                           # DIV-UNIT
        return _make(negative, a.digits)

    logger.debug(                                                 # DIV-GENERAL
        "dividing %d-group magnitude by %d-group magnitude (%s)",
        len(a.digits), len(b.digits), strategy.value,
    )
    return _make(negative, _DIVIDERS[strategy](a.digits, b.digits))


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------

def to_string(a: BigInt) -> str:
    """Canonical decimal form: ``-?[0-9]+`` with no redundant zeros."""
    if not a.digits:
        return "0"
    head = str(a.digits[-1])
    tail = "".join(str(g).zfill(WIDTH) for g in reversed(a.digits[:-1]))
    return ("-" if a.negative else "") + head + tail


def to_number(a: BigInt) -> float:
    """Approximate the value as a float.

    Lossy once the magnitude passes 2**53: this is an approximation for
    display and must not feed back into exact arithmetic.
    """
    total = 0.0
    for group in reversed(a.digits):
        total = total * BASE + group
    return -total if a.negative else total
