"""Provides helper routines for validating margins and tables."""

# License: MIT

import numbers

import numpy as np

from .exceptions import InvalidMarginsError


INTEGER_TYPES = (numbers.Integral, np.integer)


def is_integer(x):
    """Check if x is an integer."""
    return isinstance(x, INTEGER_TYPES)


def _has_integral_entries(x):
    """Check all entries of a numeric array are whole numbers."""
    if np.issubdtype(x.dtype, np.integer):
        return True

    if not np.issubdtype(x.dtype, np.number):
        return False

    return bool(np.all(np.isfinite(x)) and np.all(np.equal(np.mod(x, 1), 0)))


def _check_margin(margin, name):
    """Check a single vector of row or column totals.

    Parameters
    ----------
    margin : array-like, shape (n_entries,)
        The totals to check.

    name : str
        Either 'row' or 'column', used in error messages.

    Returns
    -------
    margin : array, shape (n_entries,)
        Read-only copy of the totals with integer dtype.
    """
    try:
        margin = np.array(margin)
    except ValueError as error:
        raise InvalidMarginsError(
            'Could not convert the %s sums to an array: %s'
            % (name, error)) from error

    if margin.ndim != 1:
        raise InvalidMarginsError(
            'Expected the %s sums to be one-dimensional, '
            'but got an array with shape %r' % (name, margin.shape))

    if margin.shape[0] < 2:
        raise InvalidMarginsError(
            'The contingency table must have at least 2 %ss, '
            'but got %d' % (name, margin.shape[0]))

    if not _has_integral_entries(margin):
        raise InvalidMarginsError(
            'Expected integer %s sums, but got %r' % (name, margin.tolist()))

    margin = margin.astype(np.int64)

    if np.any(margin <= 0):
        raise InvalidMarginsError(
            'Every %s sum must be positive, but got min value %d'
            % (name, np.min(margin)))

    margin.setflags(write=False)

    return margin


def check_margins(row_sums, col_sums):
    """Check row and column totals define a non-empty set of tables.

    Parameters
    ----------
    row_sums : array-like, shape (n_rows,)
        The desired row totals, at least 2 positive integers.

    col_sums : array-like, shape (n_cols,)
        The desired column totals, at least 2 positive integers.

    Returns
    -------
    row_sums : array, shape (n_rows,)

    col_sums : array, shape (n_cols,)
    """
    row_sums = _check_margin(row_sums, 'row')
    col_sums = _check_margin(col_sums, 'column')

    row_total = int(np.sum(row_sums))
    col_total = int(np.sum(col_sums))
    if row_total != col_total:
        raise InvalidMarginsError(
            'The row sums and the column sums do not add up to the same '
            'total: got %d for the rows and %d for the columns'
            % (row_total, col_total))

    return row_sums, col_sums


def is_valid_table(table, row_sums, col_sums):
    """Check a table is non-negative, integral and has the given margins."""
    table = np.asarray(table)
    row_sums = np.asarray(row_sums)
    col_sums = np.asarray(col_sums)

    if table.shape != (row_sums.shape[0], col_sums.shape[0]):
        return False

    if not _has_integral_entries(table):
        return False

    if np.any(table < 0):
        return False

    return bool(np.array_equal(table.sum(axis=1), row_sums) and
                np.array_equal(table.sum(axis=0), col_sums))
