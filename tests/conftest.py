"""Shared fixtures for big integer tests."""
from __future__ import annotations

import pytest

from bigint import BigInt, construct


@pytest.fixture
def zero() -> BigInt:
    return construct(0)


@pytest.fixture
def one() -> BigInt:
    return construct(1)


@pytest.fixture
def minus_one() -> BigInt:
    return construct(-1)


@pytest.fixture
def base() -> BigInt:
    """10**7: the smallest value with two digit groups."""
    return construct("10000000")


@pytest.fixture
def huge() -> BigInt:
    """A 26-digit value spanning four digit groups."""
    return construct("99999999999999999999999999")
