"""Counterexample search: discovers gaps in implementation or tests.

This module runs independently of the test suite.  It systematically
searches, over a fixed set of boundary operands, for:

1. Postcondition violations: inputs where the implementation doesn't
   match the expected output from spec.py.
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   input combination.

The operands sit on and around every digit-group boundary, where carry,
borrow and trimming bugs live.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import itertools
import sys
from dataclasses import dataclass, field

sys.path.insert(0, ".")

import bigint
from bigint import BASE, BigInt, DivisionStrategy
from spec import BigIntSpec, build_spec, truncdiv, value_of


# ---------------------------------------------------------------------------
# Operands
# ---------------------------------------------------------------------------

def boundary_operands() -> list[BigInt]:
    """Signed values at and around each digit-group boundary."""
    magnitudes = {0, 1, 2, 3, 7, 10, 99, 100}
    for k in (1, 2, 3):
        edge = BASE ** k
        magnitudes.update({edge - 1, edge, edge + 1, 2 * edge - 1})
    magnitudes.update({
        int("9" * 21),
        int("1" + "0" * 7 + "1" + "0" * 6 + "1"),   # inner zero group
        123456789123456789,
    })
    out: list[BigInt] = []
    for m in sorted(magnitudes):
        out.append(bigint.construct(m))
        if m:
            out.append(bigint.construct(-m))
    return out


# A trimmed set keeps the three-operand property checks tractable.
SMALL_OPERANDS = ("-10000001", "-9999999", "-1", "0", "1", "2", "9999999", "10000000")

# Most magnitude subtractions one subtractive division may cost here.
SUBTRACTION_BUDGET = 50_000


def subtraction_work(a: BigInt, b: BigInt) -> int:
    """Subtractions repeated-subtraction division performs for ``a / b``.

    Equals the sum of the quotient's digit groups.
    """
    if b.is_zero:
        return 0
    q = abs(truncdiv(value_of(a), value_of(b)))
    work = 0
    while q:
        q, group = divmod(q, BASE)
        work += group
    return work


def affordable(spec: BigIntSpec, op_name: str, values: tuple[BigInt, ...]) -> bool:
    """False when a subtractive division over ``values`` would take too long.

    Division properties also divide ``a * b`` by ``b``, whose quotient is
    ``a``, so both quotients are charged.
    """
    if spec.strategy is not DivisionStrategy.SUBTRACTIVE or op_name != "divide":
        return True
    if len(values) < 2:
        return True
    a, b = values[0], values[1]
    work = subtraction_work(a, b)
    if not b.is_zero:
        work = max(work, subtraction_work(bigint.multiply(a, b), b))
    return work <= SUBTRACTION_BUDGET


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found; all checks passed.")
        return "\n".join(lines)


def _show(values: tuple[BigInt, ...]) -> tuple[str, ...]:
    return tuple(bigint.to_string(v) for v in values)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    spec: BigIntSpec,
    operands: list[BigInt],
) -> tuple[list[Counterexample], int]:
    """Verify postconditions for every operand pair."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_spec in spec.operations.items():
        op = spec.op(op_name)
        for a, b in itertools.product(operands, repeat=2):
            if not affordable(spec, op_name, (a, b)):
                continue
            checks += 1
            # Skip inputs that are supposed to error
            if any(ec.trigger(a, b) for ec in op_spec.error_conditions):
                continue

            try:
                result = op(a, b)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=_show((a, b)),
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            for post in op_spec.postconditions:
                if not post.check(a, b, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=_show((a, b)),
                        expected=post.description,
                        actual=f"result={result!r}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    spec: BigIntSpec,
    operands: list[BigInt],
) -> tuple[list[Counterexample], int]:
    """Verify every error condition triggers the right exception."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_spec in spec.operations.items():
        op = spec.op(op_name)
        for a, b in itertools.product(operands, repeat=2):
            for ec in op_spec.error_conditions:
                if not ec.trigger(a, b):
                    continue
                checks += 1
                try:
                    result = op(a, b)
                    cxs.append(Counterexample(
                        category="missing_error",
                        operation=op_name,
                        inputs=_show((a, b)),
                        expected=f"{ec.exception.__name__}",
                        actual=f"result={result!r}",
                        description=(
                            f"Error condition '{ec.name}' should have "
                            f"triggered but didn't"
                        ),
                    ))
                except ec.exception:
                    pass  # expected
                except Exception as e:
                    cxs.append(Counterexample(
                        category="wrong_error",
                        operation=op_name,
                        inputs=_show((a, b)),
                        expected=f"{ec.exception.__name__}",
                        actual=f"{type(e).__name__}: {e}",
                        description=f"Wrong exception type for '{ec.name}'",
                    ))

    return cxs, checks


def search_property_violations(
    spec: BigIntSpec,
    operands: list[BigInt],
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property over all operand combinations."""
    cxs: list[Counterexample] = []
    checks = 0
    small = [bigint.construct(s) for s in SMALL_OPERANDS]

    for op_name, prop in spec.all_properties:
        pool = small if prop.arity == 3 else operands
        for combo in itertools.product(pool, repeat=prop.arity):
            if not affordable(spec, op_name, combo):
                continue
            checks += 1
            try:
                held = prop.check(*combo)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=_show(combo),
                    expected=prop.description,
                    actual=f"{type(e).__name__}: {e}",
                    description=f"Property '{prop.name}' raised",
                ))
                continue
            if not held:
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=_show(combo),
                    expected=prop.description,
                    actual="property does not hold",
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(strategy: DivisionStrategy) -> SearchReport:
    """Run complete counterexample search for one division strategy."""
    spec = build_spec(strategy)
    operands = boundary_operands()
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(spec, operands)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main() -> None:
    """Run counterexample search for every division strategy."""
    all_passed = True
    for strategy in DivisionStrategy:
        print(f"\n--- Division strategy: {strategy.value} ---")
        report = run_search(strategy)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL STRATEGIES PASSED")
    else:
        print("SOME STRATEGIES HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
