"""Formal specification for the big integer library.

Each operation is specified as a collection of:
- preconditions: what inputs must satisfy before the operation
- postconditions: what the output must satisfy given valid inputs
- error conditions: what inputs must cause specific exceptions
- algebraic properties: mathematical relationships that must hold

The spec is machine-readable.  Validation tools iterate over it to
auto-generate conformance tests and search for counterexamples.

Postconditions are checked against Python's own ``int`` as an oracle:
the library never uses it for arithmetic, but the spec is free to.

Layers
------
is_canonical    representation invariants every result must satisfy
OperationSpec   per-operation contract (pre/post/error/properties)
BranchSpec      every decision point that white-box tests must cover
BigIntSpec      the full contract for a configured division strategy
build_spec()    constructs a BigIntSpec for a given configuration
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import bigint
from bigint import BASE, BigInt, DivisionByZero, DivisionStrategy


# ---------------------------------------------------------------------------
# Representation invariants
# ---------------------------------------------------------------------------

def is_canonical(v: BigInt) -> bool:
    """No high-order zero group, no negative zero, every group in range."""
    if v.digits and v.digits[-1] == 0:
        return False
    if v.negative and not v.digits:
        return False
    return all(0 <= g < BASE for g in v.digits)


def value_of(v: BigInt) -> int:
    """Oracle value of a BigInt, via its canonical string."""
    return int(bigint.to_string(v))


def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.  The library, like
    C, Java and Rust, truncates toward zero instead.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


# ---------------------------------------------------------------------------
# Spec building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Precondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free BigInt values the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    preconditions: list[Precondition]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class BigIntSpec:
    """Complete contract for the library under one division strategy."""

    strategy: DivisionStrategy
    operations: dict[str, OperationSpec]
    branches: list[BranchSpec]

    def op(self, name: str) -> Callable[[BigInt, BigInt], object]:
        """The library function implementing operation ``name``."""
        if name == "divide":
            return lambda a, b: bigint.divide(a, b, self.strategy)
        return getattr(bigint, name)

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    def branch_ids(self) -> set[str]:
        return {b.id for b in self.branches}


_BOTH_CANONICAL = Precondition(
    "inputs_canonical",
    "Both inputs satisfy the representation invariants",
    lambda a, b: is_canonical(a) and is_canonical(b),
)


def _canonical_result() -> Postcondition:
    return Postcondition(
        "result_canonical",
        "Result satisfies the representation invariants",
        lambda a, b, result: is_canonical(result),
    )


# ---------------------------------------------------------------------------
# Spec builder
# ---------------------------------------------------------------------------

def build_spec(
    strategy: DivisionStrategy = DivisionStrategy.ESTIMATE,
) -> BigIntSpec:
    """Construct the full library specification for a division strategy."""

    add, subtract, multiply = bigint.add, bigint.subtract, bigint.multiply
    negate, compare = bigint.negate, bigint.compare

    def divide(a: BigInt, b: BigInt) -> BigInt:
        return bigint.divide(a, b, strategy)

    one = bigint.construct(1)

    # ------------------------------------------------------------------ add
    add_spec = OperationSpec(
        name="add",
        preconditions=[_BOTH_CANONICAL],
        postconditions=[
            _canonical_result(),
            Postcondition(
                "result_correct",
                "Result equals the exact sum",
                lambda a, b, result: value_of(result) == value_of(a) + value_of(b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "add(a, b) == add(b, a)", 2,
                lambda a, b: add(a, b) == add(b, a),
            ),
            AlgebraicProperty(
                "identity", "add(a, 0) == a", 1,
                lambda a: add(a, bigint.ZERO) == a,
            ),
            AlgebraicProperty(
                "additive_inverse", "add(a, negate(a)) is canonical zero", 1,
                lambda a: add(a, negate(a)) == bigint.ZERO
                and not add(a, negate(a)).negative,
            ),
            AlgebraicProperty(
                "associativity", "add(add(a, b), c) == add(a, add(b, c))", 3,
                lambda a, b, c: add(add(a, b), c) == add(a, add(b, c)),
            ),
        ],
    )

    # ------------------------------------------------------------- subtract
    subtract_spec = OperationSpec(
        name="subtract",
        preconditions=[_BOTH_CANONICAL],
        postconditions=[
            _canonical_result(),
            Postcondition(
                "result_correct",
                "Result equals the exact difference",
                lambda a, b, result: value_of(result) == value_of(a) - value_of(b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "consistency", "subtract(a, b) == add(a, negate(b))", 2,
                lambda a, b: subtract(a, b) == add(a, negate(b)),
            ),
            AlgebraicProperty(
                "self_inverse", "subtract(a, a) == 0", 1,
                lambda a: subtract(a, a) == bigint.ZERO,
            ),
            AlgebraicProperty(
                "round_trip", "add(subtract(a, b), b) == a", 2,
                lambda a, b: add(subtract(a, b), b) == a,
            ),
        ],
    )

    # ------------------------------------------------------------- multiply
    multiply_spec = OperationSpec(
        name="multiply",
        preconditions=[_BOTH_CANONICAL],
        postconditions=[
            _canonical_result(),
            Postcondition(
                "result_correct",
                "Result equals the exact product",
                lambda a, b, result: value_of(result) == value_of(a) * value_of(b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "multiply(a, b) == multiply(b, a)", 2,
                lambda a, b: multiply(a, b) == multiply(b, a),
            ),
            AlgebraicProperty(
                "identity", "multiply(a, 1) == a", 1,
                lambda a: multiply(a, one) == a,
            ),
            AlgebraicProperty(
                "zero", "multiply(a, 0) is canonical zero", 1,
                lambda a: multiply(a, bigint.ZERO) == bigint.ZERO
                and not multiply(a, bigint.ZERO).negative,
            ),
            AlgebraicProperty(
                "distributivity",
                "multiply(a, add(b, c)) == add(multiply(a, b), multiply(a, c))", 3,
                lambda a, b, c: (
                    multiply(a, add(b, c)) == add(multiply(a, b), multiply(a, c))
                ),
            ),
        ],
    )

    # --------------------------------------------------------------- divide
    def _truncation_bounds(a: BigInt, b: BigInt) -> bool:
        if b.is_zero:
            return True
        q = bigint.abs_(divide(a, b))
        abs_a, abs_b = bigint.abs_(a), bigint.abs_(b)
        return (
            multiply(q, abs_b) <= abs_a
            and multiply(add(q, one), abs_b) > abs_a
        )

    def _quotient_sign(a: BigInt, b: BigInt) -> bool:
        if b.is_zero:
            return True
        q = divide(a, b)
        return q.is_zero or q.negative == (a.negative != b.negative)

    divide_spec = OperationSpec(
        name="divide",
        preconditions=[_BOTH_CANONICAL],
        postconditions=[
            _canonical_result(),
            Postcondition(
                "result_correct",
                "Result equals the quotient truncated toward zero",
                lambda a, b, result: (
                    value_of(result) == truncdiv(value_of(a), value_of(b))
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "division_by_zero",
                "DivisionByZero when the divisor is zero",
                lambda a, b: b.is_zero,
                DivisionByZero,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "truncation_bounds",
                "|q| * |b| <= |a| < (|q| + 1) * |b|", 2,
                _truncation_bounds,
            ),
            AlgebraicProperty(
                "quotient_sign",
                "non-zero quotient sign is the XOR of the operand signs", 2,
                _quotient_sign,
            ),
            AlgebraicProperty(
                "identity", "divide(a, 1) == a", 1,
                lambda a: divide(a, one) == a,
            ),
            AlgebraicProperty(
                "self", "divide(a, a) == 1 for a != 0", 1,
                lambda a: a.is_zero or divide(a, a) == one,
            ),
            AlgebraicProperty(
                "zero_numerator", "divide(0, b) == 0 for b != 0", 1,
                lambda b: b.is_zero or divide(bigint.ZERO, b) == bigint.ZERO,
            ),
            AlgebraicProperty(
                "multiply_inverse", "divide(multiply(a, b), b) == a for b != 0", 2,
                lambda a, b: b.is_zero or divide(multiply(a, b), b) == a,
            ),
        ],
    )

    # -------------------------------------------------------------- compare
    compare_spec = OperationSpec(
        name="compare",
        preconditions=[_BOTH_CANONICAL],
        postconditions=[
            Postcondition(
                "result_correct",
                "Result is the sign of a - b",
                lambda a, b, result: result == _sign(value_of(a) - value_of(b)),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "antisymmetry", "compare(a, b) == -compare(b, a)", 2,
                lambda a, b: compare(a, b) == -compare(b, a),
            ),
            AlgebraicProperty(
                "reflexivity", "compare(a, a) == 0", 1,
                lambda a: compare(a, a) == 0,
            ),
            AlgebraicProperty(
                "transitivity", "a <= b and b <= c implies a <= c", 3,
                lambda a, b, c: not (
                    compare(a, b) <= 0 and compare(b, c) <= 0
                ) or compare(a, c) <= 0,
            ),
            AlgebraicProperty(
                "translation",
                "compare(a, b) == compare(add(a, c), add(b, c))", 3,
                lambda a, b, c: compare(a, b) == compare(add(a, c), add(b, c)),
            ),
        ],
    )

    # -------------------------------------------------------------- branches
    branches = [
        # Construction
        BranchSpec("NEW-NONE", "No argument gives zero",
                   "value is None", "construct"),
        BranchSpec("NEW-INT", "Decompose a native int into groups",
                   "isinstance(value, int)", "construct"),
        BranchSpec("NEW-FLOAT", "Accept an exact float",
                   "isinstance(value, float)", "construct"),
        BranchSpec("NEW-FLOAT-NONFINITE", "InvalidInput on nan/inf",
                   "not isfinite(value)", "construct"),
        BranchSpec("NEW-FLOAT-TOO-LARGE", "InvalidInput above 2**53",
                   "abs(value) > MAX_EXACT_FLOAT", "construct"),
        BranchSpec("NEW-FLOAT-FRACTION", "InvalidInput on a fractional float",
                   "not value.is_integer()", "construct"),
        BranchSpec("NEW-COPY", "Copy an existing BigInt",
                   "isinstance(value, BigInt)", "construct"),
        BranchSpec("NEW-BAD-TYPE", "InvalidInput on any other argument",
                   "type(value) not accepted", "construct"),
        BranchSpec("PARSE-OK", "Decimal string split into 7-digit groups",
                   "fullmatch('-?[0-9]+', text)", "construct"),
        BranchSpec("PARSE-ERROR", "ParseError outside the grammar",
                   "not fullmatch('-?[0-9]+', text)", "construct"),
        BranchSpec("PARSE-NEG-ZERO", "'-0...0' canonicalizes to zero",
                   "negative and every group is zero", "construct"),
        # Comparison
        BranchSpec("CMP-SIGN-POS-NEG", "Non-negative beats negative",
                   "not a.negative and b.negative", "compare"),
        BranchSpec("CMP-SIGN-NEG-POS", "Negative loses to non-negative",
                   "a.negative and not b.negative", "compare"),
        BranchSpec("CMP-BOTH-NEG", "Both negative: magnitude order inverted",
                   "a.negative and b.negative", "compare"),
        BranchSpec("CMP-BOTH-NONNEG", "Both non-negative: magnitude order",
                   "not a.negative and not b.negative", "compare"),
        BranchSpec("CMP-MAG-LONGER", "More groups means larger",
                   "len(a) > len(b)", "compare_magnitude"),
        BranchSpec("CMP-MAG-SHORTER", "Fewer groups means smaller",
                   "len(a) < len(b)", "compare_magnitude"),
        BranchSpec("CMP-MAG-DIGITS", "Equal length: first differing group",
                   "len(a) == len(b)", "compare_magnitude"),
        # Addition / subtraction
        BranchSpec("ADD-SAME-SIGN", "Magnitudes added, sign kept",
                   "a.negative == b.negative", "add"),
        BranchSpec("ADD-CANCEL", "Opposite signs, equal magnitude: zero",
                   "signs differ and |a| == |b|", "add"),
        BranchSpec("ADD-A-LARGER", "Opposite signs, |a| > |b|",
                   "signs differ and |a| > |b|", "add"),
        BranchSpec("ADD-B-LARGER", "Opposite signs, |a| < |b|",
                   "signs differ and |a| < |b|", "add"),
        BranchSpec("ADD-MAG-CARRY-OUT", "Final carry adds a new top group",
                   "carry after the last group", "add_magnitude"),
        BranchSpec("SUB-MAG-BORROW", "Group borrows from the next one",
                   "a[i] - b[i] - borrow < 0", "subtract_magnitude"),
        BranchSpec("SUB-MAG-SHRINK", "High-order zero groups stripped",
                   "top groups cancel", "subtract_magnitude"),
        # Multiplication
        BranchSpec("MUL-ZERO", "Zero operand short-circuits",
                   "a == 0 or b == 0", "multiply"),
        BranchSpec("MUL-A-UNIT", "|a| == 1 copies b",
                   "|a| == 1", "multiply"),
        BranchSpec("MUL-B-UNIT", "|b| == 1 copies a",
                   "|b| == 1", "multiply"),
        BranchSpec("MUL-GENERAL", "Schoolbook multiplication",
                   "|a| > 1 and |b| > 1", "multiply"),
        # Division
        BranchSpec("DIV-ZERO", "DivisionByZero",
                   "b == 0", "divide"),
        BranchSpec("DIV-SMALLER", "|a| < |b| gives zero",
                   "|a| < |b|", "divide"),
        BranchSpec("DIV-EQUAL", "|a| == |b| gives +-1",
                   "|a| == |b|", "divide"),
        BranchSpec("DIV-UNIT", "|b| == 1 copies a",
                   "|b| == 1", "divide"),
        BranchSpec("DIV-GENERAL", "Long division",
                   "|a| > |b| > 1", "divide"),
        BranchSpec("DIV-MAG-SKIP-ZERO", "Zero group not shifted into empty remainder",
                   "remainder == 0 and a[i] == 0", "divide_magnitude"),
        BranchSpec("DIV-MAG-LEADING-ZERO", "Leading zero quotient digit dropped",
                   "count == 0 and no digits emitted", "divide_magnitude"),
    ]

    return BigIntSpec(
        strategy=strategy,
        operations={
            "add": add_spec,
            "subtract": subtract_spec,
            "multiply": multiply_spec,
            "divide": divide_spec,
            "compare": compare_spec,
        },
        branches=branches,
    )
