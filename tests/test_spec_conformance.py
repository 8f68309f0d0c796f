"""Conformance tests against the executable contract in spec.py.

These tests are *driven by* ``build_spec()``: they iterate over every
postcondition, error condition, and algebraic property defined in
``spec.build_spec`` and verify the implementation satisfies them.

If spec.py changes (e.g. a new postcondition is added), these tests
automatically cover it, with no manual test authoring required for the
new predicate.
"""
from __future__ import annotations

import itertools

import pytest
from hypothesis import given, settings, assume
from hypothesis.strategies import integers

import bigint
from bigint import DivisionStrategy, construct
from spec import build_spec, is_canonical, truncdiv, value_of
from test_whitebox import BRANCH_COVERAGE

SPEC = build_spec()
SUBTRACTIVE_SPEC = build_spec(DivisionStrategy.SUBTRACTIVE)

values = integers(min_value=-10 ** 40, max_value=10 ** 40).map(construct)

# Operands on and around the digit-group boundaries.
EDGES = [
    construct(s)
    for s in (
        "0", "1", "-1", "2", "-3", "9999999", "-9999999", "10000000",
        "-10000001", "99999999999999", "-100000000000000", "100000000000001",
    )
]


def _subtractions(a, b) -> int:
    q = abs(truncdiv(value_of(a), value_of(b)))
    return sum(construct(q).digits)


# ===================================================================
# POSTCONDITIONS — property-based
# ===================================================================

class TestPostconditions:
    """Every postcondition from build_spec holds for random inputs."""

    @pytest.mark.parametrize("op_name", ["add", "subtract", "multiply", "compare"])
    @given(a=values, b=values)
    @settings(max_examples=200)
    def test_postconditions(self, op_name, a, b):
        result = SPEC.op(op_name)(a, b)
        for post in SPEC.operations[op_name].postconditions:
            assert post.check(a, b, result), (
                f"Postcondition '{post.name}' failed: {op_name}({a}, {b}) = {result}"
            )

    @given(a=values, b=values)
    @settings(max_examples=200)
    def test_divide_postconditions(self, a, b):
        assume(not b.is_zero)
        result = SPEC.op("divide")(a, b)
        for post in SPEC.operations["divide"].postconditions:
            assert post.check(a, b, result), (
                f"Postcondition '{post.name}' failed: divide({a}, {b}) = {result}"
            )

    def test_preconditions_hold_for_constructed_values(self):
        for a, b in itertools.product(EDGES, repeat=2):
            for op in SPEC.operations.values():
                for pre in op.preconditions:
                    assert pre.check(a, b)


# ===================================================================
# ERROR CONDITIONS
# ===================================================================

class TestErrorConditions:
    """Every error condition from build_spec triggers correctly."""

    @pytest.mark.parametrize("spec", [SPEC, SUBTRACTIVE_SPEC], ids=["estimate", "subtractive"])
    def test_division_by_zero_triggers(self, spec):
        zero = construct(0)
        for a in EDGES:
            for ec in spec.operations["divide"].error_conditions:
                assert ec.trigger(a, zero)
                with pytest.raises(ec.exception):
                    spec.op("divide")(a, zero)

    def test_no_other_operation_raises_on_zero(self):
        zero = construct(0)
        for name in ("add", "subtract", "multiply", "compare"):
            assert SPEC.operations[name].error_conditions == []
            for a in EDGES:
                SPEC.op(name)(a, zero)


# ===================================================================
# ALGEBRAIC PROPERTIES — property-based
# ===================================================================

class TestAlgebraicProperties:
    """Every algebraic property from build_spec holds for random inputs."""

    @given(a=values)
    @settings(max_examples=200)
    def test_unary_properties(self, a):
        for op_name, prop in SPEC.all_properties:
            if prop.arity != 1:
                continue
            assert prop.check(a), f"Property '{prop.name}' failed for {op_name}({a})"

    @given(a=values, b=values)
    @settings(max_examples=200)
    def test_binary_properties(self, a, b):
        for op_name, prop in SPEC.all_properties:
            if prop.arity != 2:
                continue
            assert prop.check(a, b), (
                f"Property '{prop.name}' failed for {op_name}({a}, {b})"
            )

    @given(a=values, b=values, c=values)
    @settings(max_examples=100)
    def test_ternary_properties(self, a, b, c):
        for op_name, prop in SPEC.all_properties:
            if prop.arity != 3:
                continue
            assert prop.check(a, b, c), (
                f"Property '{prop.name}' failed for {op_name}({a}, {b}, {c})"
            )


# ===================================================================
# EXHAUSTIVE VERIFICATION — boundary operands
# ===================================================================

class TestExhaustive:
    """Check *every* boundary pair against every postcondition."""

    @pytest.mark.parametrize("op_name", ["add", "subtract", "multiply", "compare"])
    def test_all_edge_pairs(self, op_name):
        checked = 0
        op = SPEC.op(op_name)
        for a, b in itertools.product(EDGES, repeat=2):
            result = op(a, b)
            for post in SPEC.operations[op_name].postconditions:
                assert post.check(a, b, result)
            checked += 1
        assert checked == len(EDGES) ** 2

    @pytest.mark.parametrize("spec", [SPEC, SUBTRACTIVE_SPEC], ids=["estimate", "subtractive"])
    def test_all_edge_pairs_divide(self, spec):
        checked = 0
        for a, b in itertools.product(EDGES, repeat=2):
            if b.is_zero:
                continue
            # Repeated subtraction costs the sum of the quotient's groups.
            if spec is SUBTRACTIVE_SPEC and _subtractions(a, b) > 10_000:
                continue
            result = spec.op("divide")(a, b)
            for post in spec.operations["divide"].postconditions:
                assert post.check(a, b, result)
            checked += 1
        assert checked > 0

    def test_scenarios(self):
        assert bigint.to_string(construct("99999999999999999999999999")) == (
            "99999999999999999999999999"
        )
        assert bigint.add(construct("9999999"), construct("1")) == construct("10000000")
        assert bigint.multiply(
            construct("123456789123456789"), construct("-1")
        ) == construct("-123456789123456789")
        assert bigint.divide(construct("100"), construct("3")) == construct("33")
        with pytest.raises(bigint.DivisionByZero):
            bigint.divide(construct("7"), construct("0"))
        assert bigint.compare(construct("-5"), construct("3")) == -1


# ===================================================================
# SPEC SELF-CHECKS
# ===================================================================

class TestSpecShape:

    def test_every_branch_has_a_test(self):
        assert SPEC.branch_ids() == set(BRANCH_COVERAGE)

    def test_branch_ids_unique(self):
        ids = [b.id for b in SPEC.branches]
        assert len(ids) == len(set(ids))

    def test_every_operation_has_properties(self):
        for name, op in SPEC.operations.items():
            assert op.postconditions, name
            assert op.properties, name

    def test_is_canonical_rejects_bad_shapes(self):
        # Bypass validation to build shapes the library never returns.
        bad = object.__new__(bigint.BigInt)
        object.__setattr__(bad, "negative", True)
        object.__setattr__(bad, "digits", ())
        assert not is_canonical(bad)
        object.__setattr__(bad, "negative", False)
        object.__setattr__(bad, "digits", (1, 0))
        assert not is_canonical(bad)

    def test_truncdiv(self):
        assert truncdiv(7, 2) == 3
        assert truncdiv(-7, 2) == -3
        assert truncdiv(7, -2) == -3
        assert truncdiv(-7, -2) == 3
