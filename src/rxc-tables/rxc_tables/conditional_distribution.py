"""Provides the conditional distribution of a single table entry."""

# License: MIT

import numpy as np

from .exceptions import OutOfOrderQueryError


NOT_STARTED = 'not_started'
ASCENDING = 'ascending'
DESCENDING = 'descending'
EXHAUSTED = 'exhausted'


class ConditionalCellDistribution:
    """Conditional distribution of the entry a_lm given the entries filled so far.

    With r the part of the row total still to be allocated, c the part of
    the column total still to be allocated, and big the total of the
    unfilled block of the table whose top-left corner is (l, m), the
    entry has probability (Patefield, 1981, eq. 1)

        P(a) = r! below! c! right! / (a! (c - a)! (r - a)! (small + a)! big!)

    where right = big - c, below = big - r and small = big - c - r.

    Values are produced by iterating over the distribution, starting at
    the mode and alternately stepping upwards and downwards. Only the
    probability of the mode is evaluated from the log-factorials, the
    probabilities of the other values are obtained by multiplying by the
    ratio of consecutive probabilities.

    Parameters
    ----------
    remaining_row_sum : integer
        The amount r of the row total not yet allocated.

    remaining_col_sum : integer
        The amount c of the column total not yet allocated.

    big : integer
        The total of the unfilled block, must be positive.

    small : integer
        The value big - c - r.

    right : integer
        The value big - c.

    below : integer
        The value big - r.

    log_factorials : array-like, shape (n_max + 1,)
        Table of log(k!) for k = 0, ..., n_max, with n_max >= big.

    Attributes
    ----------
    mode : integer
        The most probable value, round(r * c / big).

    mode_probability : float
        The probability of the mode.

    support : tuple
        The smallest and largest values with non-zero probability.

    state : str
        Which cursor produces the next value: one of 'not_started',
        'ascending', 'descending' or 'exhausted'.
    """

    def __init__(self, remaining_row_sum, remaining_col_sum, big, small,
                 right, below, log_factorials):
        self.remaining_row_sum = int(remaining_row_sum)
        self.remaining_col_sum = int(remaining_col_sum)
        self.big = int(big)
        self.small = int(small)
        self.right = int(right)
        self.below = int(below)

        if self.big <= 0:
            raise ValueError("Invalid value for 'big': %d "
                             "the unfilled block must have a positive total"
                             % self.big)

        r = self.remaining_row_sum
        c = self.remaining_col_sum

        if r < 0 or r > self.big:
            raise ValueError("Invalid value for 'remaining_row_sum': %d "
                             "expected a value in [0, %d]" % (r, self.big))

        if c < 0 or c > self.big:
            raise ValueError("Invalid value for 'remaining_col_sum': %d "
                             "expected a value in [0, %d]" % (c, self.big))

        if self.right != self.big - c:
            raise ValueError("Invalid value for 'right': %d "
                             "expected big - remaining_col_sum = %d"
                             % (self.right, self.big - c))

        if self.below != self.big - r:
            raise ValueError("Invalid value for 'below': %d "
                             "expected big - remaining_row_sum = %d"
                             % (self.below, self.big - r))

        if self.small != self.big - c - r:
            raise ValueError("Invalid value for 'small': %d "
                             "expected big - remaining_col_sum - "
                             "remaining_row_sum = %d"
                             % (self.small, self.big - c - r))

        if len(log_factorials) <= self.big:
            raise ValueError("Log-factorial table of length %d is too short, "
                             "expected at least %d entries"
                             % (len(log_factorials), self.big + 1))

        self.support = (max(0, -self.small), min(r, c))

        # nearest integer to r * c / big, with halves rounded up
        self.mode = (2 * r * c + self.big) // (2 * self.big)

        lf = log_factorials
        self.mode_probability = float(np.exp(
            lf[r] + lf[self.below] + lf[c] + lf[self.right] -
            lf[self.mode] - lf[c - self.mode] - lf[r - self.mode] -
            lf[self.small + self.mode] - lf[self.big]))

        self.state = NOT_STARTED
        self._last = None
        self._probabilities = {}

        # cursors are set to None once their side of the support is exhausted
        self._inc_value = self.mode
        self._inc_probability = self.mode_probability
        self._dec_value = self.mode
        self._dec_probability = self.mode_probability

    def __iter__(self):
        return self

    def __next__(self):
        if self.state == NOT_STARTED:
            value, probability = self.mode, self.mode_probability
            self._step_ascending()
            self._step_descending()
        elif self.state == ASCENDING:
            value, probability = self._inc_value, self._inc_probability
            self._step_ascending()
        elif self.state == DESCENDING:
            value, probability = self._dec_value, self._dec_probability
            self._step_descending()
        else:
            raise StopIteration

        self._last = value
        self._probabilities[value] = probability
        self._update_state()

        return value, probability

    @property
    def last(self):
        """The most recently enumerated value, or None."""
        return self._last

    def probability(self, value):
        """Return the probability of an already enumerated value."""
        try:
            return self._probabilities[value]
        except KeyError:
            raise OutOfOrderQueryError(
                'The probability of %r was requested before it was '
                'enumerated' % (value,)) from None

    def _update_state(self):
        """Select the cursor that produces the next value."""
        if self._inc_value is None and self._dec_value is None:
            self.state = EXHAUSTED
        elif self._inc_value is not None and (
                self._last <= self.mode or self._dec_value is None):
            self.state = ASCENDING
        else:
            self.state = DESCENDING

    def _step_ascending(self):
        """Move the ascending cursor from k to k + 1."""
        k = self._inc_value
        p = (self.remaining_col_sum - k) * (self.remaining_row_sum - k)

        if p > 0:
            k += 1
            self._inc_probability *= p / (float(k) * (self.small + k))
            self._inc_value = k
        else:
            self._inc_value = None

    def _step_descending(self):
        """Move the descending cursor from k to k - 1."""
        k = self._dec_value
        q = k * (self.small + k)

        if q > 0:
            k -= 1
            self._dec_probability *= q / (
                float(self.remaining_col_sum - k) * (self.remaining_row_sum - k))
            self._dec_value = k
        else:
            self._dec_value = None
