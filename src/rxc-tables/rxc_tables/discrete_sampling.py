"""Provides sampling from enumerated discrete distributions."""

# License: MIT

import warnings

from .exceptions import SamplingFallbackWarning


class DiscreteSampler:
    """Sampler using cumulative-mass inversion.

    Parameters
    ----------
    distribution : iterable
        Iterable yielding (value, probability) pairs. The order of the
        pairs determines which value is selected for a given draw.
    """

    def __init__(self, distribution):
        self.distribution = distribution

    def sample(self, u):
        """Select a value using the uniform draw u.

        Returns the first value at which the running sum of the
        probabilities exceeds u. If the probabilities are exhausted
        first, the last value is returned and a SamplingFallbackWarning
        is issued.

        Parameters
        ----------
        u : float
            Uniform random number in [0, 1).

        Returns
        -------
        value
            The selected value.
        """
        if not 0 <= u < 1:
            raise ValueError("Invalid value for 'u': %r "
                             "expected a value in [0, 1)" % (u,))

        cumulative_probability = 0.0
        value = None
        n_candidates = 0

        for value, probability in self.distribution:
            n_candidates += 1
            cumulative_probability += probability

            if cumulative_probability > u:
                return value

        if n_candidates == 0:
            raise ValueError('Cannot sample from a distribution with no values')

        warnings.warn(
            'Cumulative probability %.17g did not exceed uniform draw %.17g, '
            'returning last enumerated value %r'
            % (cumulative_probability, u, value), SamplingFallbackWarning)

        return value
