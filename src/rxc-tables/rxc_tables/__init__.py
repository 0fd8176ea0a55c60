"""Provides routines for generating random tables with fixed margins."""

# License: MIT

from .conditional_distribution import ConditionalCellDistribution
from .discrete_sampling import DiscreteSampler
from .exceptions import (
    InvalidMarginsError,
    OutOfOrderQueryError,
    SamplingFallbackWarning,
)
from .probability import (
    log_factorial_table,
    table_log_probability,
    table_probability,
)
from .table_generator import AS159TableGenerator, GeneratedTable, sample_tables
from .validation import check_margins, is_integer, is_valid_table


__version__ = '0.0.1'


__all__ = [
    "AS159TableGenerator",
    "ConditionalCellDistribution",
    "DiscreteSampler",
    "GeneratedTable",
    "InvalidMarginsError",
    "OutOfOrderQueryError",
    "SamplingFallbackWarning",
    "check_margins",
    "is_integer",
    "is_valid_table",
    "log_factorial_table",
    "sample_tables",
    "table_log_probability",
    "table_probability"
]
