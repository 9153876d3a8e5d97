"""Shared test fixtures."""

import pytest

from setbuilder import Comprehension


@pytest.fixture
def comprehension():
    return Comprehension()


@pytest.fixture
def numbers():
    return [1, 2, 3, 4]


def is_even(value):
    return value % 2 == 0


def doubles(a, b):
    return a * 2 == b
