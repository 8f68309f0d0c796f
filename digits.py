"""Sign-blind magnitude arithmetic over digit-group tuples.

A magnitude is a tuple of base-``BASE`` digit groups, least significant
group first, with no high-order zero groups.  The empty tuple is zero.

Every function here is pure: inputs are never modified and every result
is a freshly built tuple that already satisfies the magnitude invariants
(no group outside ``[0, BASE)``, no high-order zero group).  Decision
branches are annotated with the branch IDs listed in spec.py
(BranchSpec) so white-box tests can trace coverage to every decision
point.
"""
from __future__ import annotations

from typing import Final, Sequence

WIDTH: Final[int] = 7
BASE: Final[int] = 10 ** WIDTH

Magnitude = tuple[int, ...]

ONE: Final[Magnitude] = (1,)


def strip(groups: Sequence[int]) -> Magnitude:
    """Drop high-order zero groups and freeze the result."""
    end = len(groups)
    while end and groups[end - 1] == 0:
        end -= 1
    return tuple(groups[:end])


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

def compare_magnitude(a: Magnitude, b: Magnitude) -> int:
    """Return -1, 0 or 1 comparing two magnitudes.

    Branches: CMP-MAG-LONGER, CMP-MAG-SHORTER, CMP-MAG-DIGITS
    """
    if len(a) > len(b):                                           # CMP-MAG-LONGER
        return 1
    if len(a) < len(b):                                           # CMP-MAG-SHORTER
        return -1
    # Same length: no leading zero groups, so the first differing
    # group from the top decides.                                 # CMP-MAG-DIGITS
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return 1 if a[i] > b[i] else -1
    return 0


# ---------------------------------------------------------------------------
# Addition / subtraction
# ---------------------------------------------------------------------------

def add_magnitude(a: Magnitude, b: Magnitude) -> Magnitude:
    """Schoolbook addition.

    Branches: ADD-MAG-CARRY-OUT
    """
    out: list[int] = []
    carry = 0
    for i in range(max(len(a), len(b))):
        total = (a[i] if i < len(a) else 0) + (b[i] if i < len(b) else 0) + carry
        if total >= BASE:
            out.append(total - BASE)
            carry = 1
        else:
            out.append(total)
            carry = 0
    if carry:                                                     # ADD-MAG-CARRY-OUT
        out.append(1)
    return tuple(out)


def subtract_magnitude(a: Magnitude, b: Magnitude) -> Magnitude:
    """Schoolbook subtraction; requires ``a >= b``.

    Branches: SUB-MAG-BORROW, SUB-MAG-SHRINK
    """
    out: list[int] = []
    borrow = 0
    for i in range(len(a)):
        diff = a[i] - (b[i] if i < len(b) else 0) - borrow
        if diff < 0:                                              # SUB-MAG-BORROW
            out.append(diff + BASE)
            borrow = 1
        else:
            out.append(diff)
            borrow = 0
    if borrow:
        raise ArithmeticError("subtract_magnitude requires a >= b")
    return strip(out)                                             # SUB-MAG-SHRINK


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

def multiply_magnitude(a: Magnitude, b: Magnitude) -> Magnitude:
    """Long multiplication with carries propagated as slots fill up.

    Each partial product ``a[i] * b[j]`` lands in slot ``i + j``.  A
    slot that reaches ``BASE`` immediately pushes its overflow into the
    slot above, so no slot ever holds more than one pending carry.
    """
    if not a or not b:
        return ()
    slots = [0] * (len(a) + len(b))
    for i, x in enumerate(a):
        if x == 0:
            continue
        for j, y in enumerate(b):
            pos = i + j
            slots[pos] += x * y
            if slots[pos] >= BASE:
                slots[pos + 1] += slots[pos] // BASE
                slots[pos] %= BASE
    # The top slot can still carry after the last row.
    for pos in range(len(slots) - 1):
        if slots[pos] >= BASE:
            slots[pos + 1] += slots[pos] // BASE
            slots[pos] %= BASE
    return strip(slots)


def multiply_small(a: Magnitude, k: int) -> Magnitude:
    """Multiply a magnitude by a single digit group ``0 <= k < BASE``."""
    if k == 0 or not a:
        return ()
    out: list[int] = []
    carry = 0
    for x in a:
        carry, group = divmod(x * k + carry, BASE)
        out.append(group)
    while carry:
        carry, group = divmod(carry, BASE)
        out.append(group)
    return tuple(out)


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------

def _shift_in(remainder: Magnitude, group: int) -> Magnitude:
    """Append ``group`` below the remainder's least significant group.

    Branches: DIV-MAG-SKIP-ZERO
    """
    if not remainder and group == 0:                              # DIV-MAG-SKIP-ZERO
        return ()
    return (group,) + remainder


def divide_magnitude(a: Magnitude, b: Magnitude) -> Magnitude:
    """Long division by repeated subtraction, truncated quotient only.

    Walks ``a`` from its most significant group down.  Each step shifts
    the next group into the running remainder, then subtracts ``b`` as
    many times as it fits; that count is the next quotient digit.  Cost
    grows with the quotient digit values, not only the digit count.

    Branches: DIV-MAG-SKIP-ZERO, DIV-MAG-LEADING-ZERO
    """
    if not b:
        raise ZeroDivisionError("divide_magnitude by zero")
    quotient: list[int] = []
    remainder: Magnitude = ()
    for i in range(len(a) - 1, -1, -1):
        remainder = _shift_in(remainder, a[i])
        count = 0
        while compare_magnitude(remainder, b) >= 0:
            remainder = subtract_magnitude(remainder, b)
            count += 1
        if count == 0 and not quotient:                           # DIV-MAG-LEADING-ZERO
            continue
        quotient.append(count)
    quotient.reverse()
    return tuple(quotient)


def divide_magnitude_estimate(a: Magnitude, b: Magnitude) -> Magnitude:
    """Long division that finds each quotient digit by binary search.

    Same walk and same truncated quotient as :func:`divide_magnitude`,
    but each quotient digit costs ``log2(BASE)`` trial multiplications
    instead of up to ``BASE - 1`` subtractions.
    """
    if not b:
        raise ZeroDivisionError("divide_magnitude_estimate by zero")
    quotient: list[int] = []
    remainder: Magnitude = ()
    for i in range(len(a) - 1, -1, -1):
        remainder = _shift_in(remainder, a[i])
        lo, hi = 0, BASE - 1
        # Largest q in [lo, hi] with b * q <= remainder.
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if compare_magnitude(multiply_small(b, mid), remainder) <= 0:
                lo = mid
            else:
                hi = mid - 1
        if lo:
            remainder = subtract_magnitude(remainder, multiply_small(b, lo))
        if lo == 0 and not quotient:
            continue
        quotient.append(lo)
    quotient.reverse()
    return tuple(quotient)
