"""
Shared default settings for pygroupstats procedures.

This module is the SINGLE SOURCE OF TRUTH for tuning defaults.
Import from here, never hard-code the numbers in a procedure signature.
"""

# Proportion trimmed from each tail for the descriptive trimmed mean
DEFAULT_DESCRIBE_TRIM = 0.1

# Proportion trimmed from each tail by the robust (trimmed-means) procedures
DEFAULT_ROBUST_TRIM = 0.2

# Label permutations for the omnibus permutation test
DEFAULT_N_PERM = 5000

# Label permutations for the two-sample Monte Carlo permutation test
DEFAULT_N_PERM_TWO_SAMPLE = 10000

# Bootstrap resamples for robust tests, intervals and pairwise comparisons
DEFAULT_N_BOOT = 2000

# Below this many resamples a ResamplingPrecisionWarning is emitted
RECOMMENDED_MIN_RESAMPLES = 1000

# Largest number of label assignments enumerated by an exact permutation test
DEFAULT_EXACT_LIMIT = 50000

# Hard ceiling on enumerated assignments, whatever distribution= asks for
MAX_EXACT_ASSIGNMENTS = 2_000_000

# Assignments materialised at once while enumerating an exact null
EXACT_CHUNK_SIZE = 20000

# Resamples drawn per chunk by the resampling engine (one child seed each)
DEFAULT_BATCH_SIZE = 500

# Spread at or below this fraction of the data's magnitude counts as zero
DEGENERATE_REL_TOL = 1e-12

# Consistency constant turning the raw MAD into a normal-theory SD estimate
MAD_CONSTANT = 1.4826

VALID_ALTERNATIVES = ("two.sided", "less", "greater")

__all__ = [
    'DEFAULT_DESCRIBE_TRIM',
    'DEFAULT_ROBUST_TRIM',
    'DEFAULT_N_PERM',
    'DEFAULT_N_PERM_TWO_SAMPLE',
    'DEFAULT_N_BOOT',
    'RECOMMENDED_MIN_RESAMPLES',
    'DEFAULT_EXACT_LIMIT',
    'MAX_EXACT_ASSIGNMENTS',
    'EXACT_CHUNK_SIZE',
    'DEFAULT_BATCH_SIZE',
    'DEGENERATE_REL_TOL',
    'MAD_CONSTANT',
    'VALID_ALTERNATIVES',
]
