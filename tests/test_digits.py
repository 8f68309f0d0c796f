"""Unit tests for the sign-blind magnitude engines in ``digits``."""
from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis.strategies import integers

from digits import (
    BASE,
    WIDTH,
    add_magnitude,
    compare_magnitude,
    divide_magnitude,
    divide_magnitude_estimate,
    multiply_magnitude,
    multiply_small,
    strip,
    subtract_magnitude,
)

magnitudes = integers(min_value=0, max_value=10 ** 50)


def mag(n: int) -> tuple[int, ...]:
    """Digit groups of a non-negative int, least significant first."""
    out = []
    while n:
        n, group = divmod(n, BASE)
        out.append(group)
    return tuple(out)


def val(m: tuple[int, ...]) -> int:
    return sum(g * BASE ** i for i, g in enumerate(m))


def well_formed(m: tuple[int, ...]) -> bool:
    return (not m or m[-1] != 0) and all(0 <= g < BASE for g in m)


class TestConstants:

    def test_base_is_ten_to_the_width(self):
        assert WIDTH == 7
        assert BASE == 10_000_000

    def test_group_product_is_exact_in_a_double(self):
        assert (BASE - 1) ** 2 < 2 ** 53


class TestStrip:

    def test_strips_high_order_zeros(self):
        assert strip([5, 0, 0]) == (5,)

    def test_keeps_inner_zeros(self):
        assert strip([0, 0, 3]) == (0, 0, 3)

    def test_all_zero_is_empty(self):
        assert strip([0, 0]) == ()

    def test_returns_tuple(self):
        assert isinstance(strip([1]), tuple)


class TestCompareMagnitude:

    def test_longer_is_larger(self):
        assert compare_magnitude((0, 1), (9_999_999,)) == 1

    def test_shorter_is_smaller(self):
        assert compare_magnitude((9_999_999,), (0, 1)) == -1

    def test_top_group_decides(self):
        assert compare_magnitude((9, 2), (0, 3)) == -1

    def test_low_group_decides_when_top_equal(self):
        assert compare_magnitude((4, 3), (5, 3)) == -1

    def test_equal(self):
        assert compare_magnitude((1, 2, 3), (1, 2, 3)) == 0

    def test_empty_is_smallest(self):
        assert compare_magnitude((), ()) == 0
        assert compare_magnitude((), (1,)) == -1


class TestAddMagnitude:

    def test_carry_out_adds_group(self):
        assert add_magnitude((9_999_999,), (1,)) == (0, 1)

    def test_carry_ripples(self):
        assert add_magnitude((9_999_999, 9_999_999), (1,)) == (0, 0, 1)

    def test_unequal_lengths(self):
        assert add_magnitude((1,), (2, 3, 4)) == (3, 3, 4)

    def test_empty_operand(self):
        assert add_magnitude((), (7,)) == (7,)
        assert add_magnitude((), ()) == ()

    @given(a=magnitudes, b=magnitudes)
    def test_matches_int(self, a, b):
        result = add_magnitude(mag(a), mag(b))
        assert well_formed(result)
        assert val(result) == a + b


class TestSubtractMagnitude:

    def test_borrow(self):
        assert subtract_magnitude((0, 1), (1,)) == (9_999_999,)

    def test_borrow_ripples(self):
        assert subtract_magnitude((0, 0, 1), (1,)) == (9_999_999, 9_999_999)

    def test_shrinks_to_empty(self):
        assert subtract_magnitude((5, 6), (5, 6)) == ()

    def test_strips_cancelled_top_groups(self):
        assert subtract_magnitude((7, 6, 5), (3, 6, 5)) == (4,)

    def test_rejects_larger_subtrahend(self):
        with pytest.raises(ArithmeticError):
            subtract_magnitude((1,), (2,))

    @given(a=magnitudes, b=magnitudes)
    def test_matches_int(self, a, b):
        hi, lo = max(a, b), min(a, b)
        result = subtract_magnitude(mag(hi), mag(lo))
        assert well_formed(result)
        assert val(result) == hi - lo


class TestMultiplyMagnitude:

    def test_single_groups_with_carry(self):
        assert multiply_magnitude((9_999_999,), (9_999_999,)) == (1, 9_999_998)

    def test_empty_operand(self):
        assert multiply_magnitude((), (5,)) == ()

    def test_inner_zero_groups(self):
        a = mag(10 ** 14 + 1)
        assert val(multiply_magnitude(a, a)) == (10 ** 14 + 1) ** 2

    def test_all_nines(self):
        n = 10 ** 35 - 1
        assert val(multiply_magnitude(mag(n), mag(n))) == n * n

    @given(a=magnitudes, b=magnitudes)
    def test_matches_int(self, a, b):
        result = multiply_magnitude(mag(a), mag(b))
        assert well_formed(result)
        assert val(result) == a * b

    @given(a=magnitudes, k=integers(min_value=0, max_value=BASE - 1))
    def test_multiply_small_matches_int(self, a, k):
        result = multiply_small(mag(a), k)
        assert well_formed(result)
        assert val(result) == a * k


class TestDivideMagnitude:

    def test_small_quotient(self):
        assert divide_magnitude((100,), (3,)) == (33,)

    def test_zero_group_in_dividend(self):
        # 10**14 / 10**7 walks over two zero groups.
        assert divide_magnitude(mag(10 ** 14), mag(10 ** 7)) == mag(10 ** 7)

    def test_no_leading_zero_digit(self):
        result = divide_magnitude(mag(3 * BASE + 5), mag(BASE + 2))
        assert result == (2,)

    def test_divide_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            divide_magnitude((1,), ())
        with pytest.raises(ZeroDivisionError):
            divide_magnitude_estimate((1,), ())

    def test_smaller_dividend_gives_empty(self):
        assert divide_magnitude((3,), (4,)) == ()
        assert divide_magnitude_estimate((3,), (4,)) == ()

    @given(
        b=integers(min_value=1, max_value=10 ** 30),
        q=integers(min_value=0, max_value=400),
        r=integers(min_value=0, max_value=10 ** 30),
    )
    @settings(max_examples=100)
    def test_subtractive_matches_int(self, b, q, r):
        # Keep quotient digits small: repeated subtraction costs their sum.
        a = b * q + r % b
        result = divide_magnitude(mag(a), mag(b))
        assert well_formed(result)
        assert val(result) == a // b

    @given(a=magnitudes, b=integers(min_value=1, max_value=10 ** 30))
    def test_estimate_matches_int(self, a, b):
        result = divide_magnitude_estimate(mag(a), mag(b))
        assert well_formed(result)
        assert val(result) == a // b

    @given(
        b=integers(min_value=1, max_value=10 ** 20),
        q=integers(min_value=0, max_value=400),
        r=integers(min_value=0, max_value=10 ** 20),
    )
    @settings(max_examples=100)
    def test_strategies_agree(self, b, q, r):
        a = mag(b * q + r % b)
        assert divide_magnitude(a, mag(b)) == divide_magnitude_estimate(a, mag(b))
