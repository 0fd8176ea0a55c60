"""Provides routines for generating random tables with given margins."""

# License: MIT

import time
from collections import namedtuple

import numpy as np
from sklearn.utils import check_random_state

from .conditional_distribution import ConditionalCellDistribution
from .discrete_sampling import DiscreteSampler
from .probability import log_factorial_table
from .validation import check_margins, is_integer, is_valid_table


GeneratedTable = namedtuple('GeneratedTable',
                            ['table', 'probability', 'log_probability'])


class AS159TableGenerator:
    """Random R x C tables with given row and column totals.

    Tables are generated by Patefield's Algorithm AS 159, filling the
    entries row by row from their exact conditional distributions given
    the entries filled so far. The last entry of each row and the last
    row are determined by the margins.

    Parameters
    ----------
    row_sums : array-like, shape (n_rows,)
        The row totals. There must be at least 2 rows and every total
        must be a positive integer.

    col_sums : array-like, shape (n_cols,)
        The column totals. There must be at least 2 columns, every total
        must be a positive integer and the column totals must add up to
        the same grand total as the row totals.

    random_state : integer, RandomState or None
        If an integer, random_state is the seed used by the
        random number generator. If a RandomState instance,
        random_state is the random number generator. If None,
        the random number generator is the RandomState instance
        used by `np.random`.

    verbose : integer, default: 0
        Enable verbose output when sampling several tables.

    verbose_interval : integer, default: 1
        The number of tables between each verbose print message.

    Attributes
    ----------
    n_rows : integer
        The number of rows.

    n_cols : integer
        The number of columns.

    total : integer
        The grand total of the table.

    log_factorials : array, shape (total + 1,)
        The values log(k!) for k = 0, ..., total.

    References
    ----------
    W. M. Patefield, "Algorithm AS 159: An Efficient Method of Generating
    Random R x C Tables with Given Row and Column Totals", Applied
    Statistics 30(1), 91-97 (1981).

    Examples
    --------
    from rxc_tables import AS159TableGenerator
    generator = AS159TableGenerator([3, 2], [2, 3], random_state=0)
    table, probability, log_probability = generator.generate()
    """

    def __init__(self, row_sums, col_sums, random_state=None, verbose=0,
                 verbose_interval=1):

        row_sums, col_sums = check_margins(row_sums, col_sums)
        rng = check_random_state(random_state)

        self._row_sums = row_sums
        self._col_sums = col_sums
        self._total = int(np.sum(row_sums))
        self._log_factorials = log_factorial_table(self._total)

        self.random_state = random_state
        self._random_state = rng
        self.verbose = verbose
        self.verbose_interval = verbose_interval

    @property
    def row_sums(self):
        return self._row_sums

    @property
    def col_sums(self):
        return self._col_sums

    @property
    def n_rows(self):
        return self._row_sums.shape[0]

    @property
    def n_cols(self):
        return self._col_sums.shape[0]

    @property
    def total(self):
        return self._total

    @property
    def log_factorials(self):
        return self._log_factorials

    def is_valid(self, table):
        """Check whether a table has the generator's margins."""
        return is_valid_table(table, self._row_sums, self._col_sums)

    def generate(self):
        """Generate a random table.

        Returns
        -------
        table : array, shape (n_rows, n_cols)
            Read-only array containing the generated table.

        probability : float
            The probability of generating this table, i.e., the product
            of the conditional probabilities of the sampled entries. May
            underflow to zero for large tables, see log_probability.

        log_probability : float
            The logarithm of the probability, accumulated as the sum of
            the log conditional probabilities of the sampled entries.
        """
        table = np.zeros((self.n_rows, self.n_cols), dtype=np.int64)
        remaining_col_sums = self._col_sums.copy()

        log_probability = 0.0
        for row in range(self.n_rows - 1):
            log_probability = self._fill_row(
                table, row, remaining_col_sums, log_probability)

        table[-1, :] = remaining_col_sums
        table.setflags(write=False)

        return GeneratedTable(table, float(np.exp(log_probability)),
                              float(log_probability))

    def sample(self, n_tables):
        """Generate several independent random tables.

        Parameters
        ----------
        n_tables : integer
            The number of tables to generate.

        Returns
        -------
        tables : array, shape (n_tables, n_rows, n_cols)
            The generated tables.

        probabilities : array, shape (n_tables,)
            The probability of each of the generated tables.

        log_probabilities : array, shape (n_tables,)
            The log-probability of each of the generated tables.
        """
        if not is_integer(n_tables) or n_tables < 1:
            raise ValueError("Invalid value for 'n_tables': %r "
                             "at least one table must be generated"
                             % (n_tables,))

        if not is_integer(self.verbose_interval) or self.verbose_interval < 1:
            raise ValueError("Invalid value for 'verbose_interval': %r "
                             "expected a positive integer"
                             % (self.verbose_interval,))

        tables = np.empty((n_tables, self.n_rows, self.n_cols), dtype=np.int64)
        probabilities = np.empty((n_tables,), dtype=np.float64)
        log_probabilities = np.empty((n_tables,), dtype=np.float64)

        self._print_verbose_msg_sample_beg(n_tables)
        self._sample_start_time = time.time()

        for n_table in range(n_tables):
            self._iter_start_time = time.time()

            (tables[n_table], probabilities[n_table],
             log_probabilities[n_table]) = self.generate()

            self._iter_end_time = time.time()
            self._print_verbose_msg_iter_end(n_table, log_probabilities[n_table])

        self._sample_end_time = time.time()
        self._print_verbose_msg_sample_end(n_tables)

        return tables, probabilities, log_probabilities

    def _fill_row(self, table, row, remaining_col_sums, log_probability):
        """Fill a single row, which must not be the last row of the table.

        Updates remaining_col_sums in place and returns the running
        log-probability plus the log conditional probabilities of the
        sampled entries.
        """
        n_cols = self.n_cols
        remaining_row_sum = int(self._row_sums[row])

        for col in range(n_cols - 1):
            # total of the unfilled block with top-left corner (row, col)
            big = int(np.sum(remaining_col_sums[col:]))

            if big == 0:
                # remaining_row_sum is zero here, the rest of the row is empty
                table[row, col:] = 0
                break

            remaining_col_sum = int(remaining_col_sums[col])
            right = big - remaining_col_sum
            below = big - remaining_row_sum
            small = big - remaining_col_sum - remaining_row_sum

            distribution = ConditionalCellDistribution(
                remaining_row_sum, remaining_col_sum, big, small, right, below,
                self._log_factorials)
            sampler = DiscreteSampler(distribution)

            entry = sampler.sample(self._random_state.uniform())

            table[row, col] = entry
            remaining_row_sum -= entry
            remaining_col_sums[col] -= entry

            log_probability += np.log(distribution.probability(entry))

        table[row, n_cols - 1] = remaining_row_sum
        remaining_col_sums[n_cols - 1] -= remaining_row_sum

        return log_probability

    def _print_verbose_msg_sample_beg(self, n_tables):
        """Print verbose message on start of sampling."""
        if self.verbose > 0:
            print('AS159 ({:d} x {:d}, total = {:d}): sampling {:d} tables'.format(
                self.n_rows, self.n_cols, self._total, n_tables))
            print('{:<12s} | {:<15s} | {:<12s}'.format(
                'Table', 'Log-probability', 'Time'))
            print(46 * '-')

    def _print_verbose_msg_iter_end(self, n_table, log_probability):
        """Print verbose message on generating a table."""
        if n_table % self.verbose_interval == 0:
            if self.verbose > 0:
                print('{:12d} | {: 15.6e} | {: 12.6e}'.format(
                    n_table + 1, log_probability,
                    self._iter_end_time - self._iter_start_time))

    def _print_verbose_msg_sample_end(self, n_tables):
        """Print verbose message on the end of sampling."""
        if self.verbose > 0:
            print('Sampled {:d} tables (total time: {:12.6e})'.format(
                n_tables, self._sample_end_time - self._sample_start_time))


def sample_tables(row_sums, col_sums, n_tables, random_state=None):
    """Generate random tables with the given row and column totals.

    Parameters
    ----------
    row_sums : array-like, shape (n_rows,)
        The row totals.

    col_sums : array-like, shape (n_cols,)
        The column totals.

    n_tables : integer
        The number of tables to generate.

    random_state : integer, RandomState or None
        The random number generator or seed used.

    Returns
    -------
    tables : array, shape (n_tables, n_rows, n_cols)

    probabilities : array, shape (n_tables,)

    log_probabilities : array, shape (n_tables,)
    """
    generator = AS159TableGenerator(row_sums, col_sums,
                                    random_state=random_state)
    return generator.sample(n_tables)
