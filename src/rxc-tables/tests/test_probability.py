"""Provides unit tests for log-factorial and table probability routines."""

# License: MIT

import numpy as np
import pytest
import scipy.special as sp

from rxc_tables import (
    log_factorial_table,
    table_log_probability,
    table_probability,
)


def test_log_factorial_table_matches_factorials():
    """Test log-factorials agree with logarithms of factorials."""
    log_factorials = log_factorial_table(5)

    expected = np.log([1.0, 1.0, 2.0, 6.0, 24.0, 120.0])

    assert log_factorials.shape == (6,)
    assert log_factorials[0] == 0
    assert np.allclose(log_factorials, expected)


def test_log_factorial_table_matches_gammaln_for_large_arguments():
    """Test log-factorials remain accurate where factorials overflow."""
    n = 500
    log_factorials = log_factorial_table(n)

    assert np.allclose(log_factorials, sp.gammaln(np.arange(n + 1) + 1))


def test_log_factorial_table_is_read_only():
    """Test log-factorial table cannot be modified."""
    log_factorials = log_factorial_table(3)

    with pytest.raises(ValueError):
        log_factorials[1] = 1.0


def test_log_factorial_table_of_zero():
    """Test table for n = 0 only contains log(0!)."""
    assert np.array_equal(log_factorial_table(0), [0.0])


def test_log_factorial_table_throws_when_given_invalid_size():
    """Test throws exception when given negative or non-integer size."""
    with pytest.raises(ValueError):
        log_factorial_table(-1)

    with pytest.raises(ValueError):
        log_factorial_table(2.0)


def test_table_probability_of_two_by_two_tables():
    """Test probabilities of all tables with row sums (3, 2) and column sums (2, 3)."""
    assert np.isclose(table_probability([[0, 3], [2, 0]]), 0.1)
    assert np.isclose(table_probability([[1, 2], [1, 1]]), 0.6)
    assert np.isclose(table_probability([[2, 1], [0, 2]]), 0.3)


def test_table_probability_of_identity_permutation_table():
    """Test permutation tables with unit margins are equally likely."""
    n = 4
    expected = 1.0 / sp.factorial(n)

    assert np.isclose(table_probability(np.eye(n)), expected)
    assert np.isclose(table_log_probability(np.eye(n)), np.log(expected))


def test_table_probability_throws_when_given_negative_entries():
    """Test throws exception when given a table with negative entries."""
    with pytest.raises(ValueError):
        table_probability([[1, -1], [0, 2]])
