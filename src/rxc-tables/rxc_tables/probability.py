"""Provides routines for evaluating log-factorials and table probabilities."""

# License: MIT

import numpy as np
from scipy.special import gammaln
from sklearn.utils import check_array

from .validation import is_integer


def log_factorial_table(n):
    """Return read-only array with entries log(k!) for k = 0, ..., n.

    Entries are accumulated as running sums of log(1), ..., log(n), so
    that each entry is computed once.
    """
    if not is_integer(n) or n < 0:
        raise ValueError("Invalid value for 'n': %r "
                         "expected a non-negative integer" % (n,))

    log_factorials = np.zeros((n + 1,), dtype=np.float64)
    log_factorials[1:] = np.cumsum(np.log(np.arange(1, n + 1, dtype=np.float64)))
    log_factorials.setflags(write=False)

    return log_factorials


def table_log_probability(table):
    """Calculate log-probability of a table given its own margins.

    Under independence, conditional on its row and column totals a table
    has the multiple hypergeometric probability

        prod_i (r_i!) prod_j (c_j!) / (N! prod_ij (a_ij!)).

    Parameters
    ----------
    table : array-like, shape (n_rows, n_cols)
        Table of non-negative integer counts.

    Returns
    -------
    log_probability : float
    """
    table = check_array(table, dtype=np.float64)

    if np.any(table < 0):
        raise ValueError('Expected non-negative table entries, '
                         'but got min value %.5f' % np.min(table))

    row_sums = table.sum(axis=1)
    col_sums = table.sum(axis=0)
    total = table.sum()

    return float(np.sum(gammaln(row_sums + 1)) +
                 np.sum(gammaln(col_sums + 1)) -
                 gammaln(total + 1) -
                 np.sum(gammaln(table + 1)))


def table_probability(table):
    """Calculate probability of a table given its own margins."""
    return np.exp(table_log_probability(table))
