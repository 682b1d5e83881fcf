"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def two_groups():
    """A = 1..5, B = 3..7: Welch t = -2 on 8 df, d = -1.265, omega^2 = 3/13."""
    y = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 3.0, 4.0, 5.0, 6.0, 7.0])
    group = np.array(['A'] * 5 + ['B'] * 5)
    return y, group


@pytest.fixture
def three_groups():
    """3 balanced groups (n=12), clear differences, unequal spread."""
    gen = np.random.default_rng(7)
    y = np.concatenate([
        gen.normal(10.0, 1.0, 12),
        gen.normal(12.0, 2.0, 12),
        gen.normal(15.0, 3.0, 12),
    ])
    group = np.array(['ctrl'] * 12 + ['low'] * 12 + ['high'] * 12)
    return y, group


@pytest.fixture
def null_groups():
    """4 groups drawn from one distribution, unbalanced."""
    gen = np.random.default_rng(2024)
    sizes = [8, 10, 12, 9]
    y = gen.normal(50.0, 5.0, sum(sizes))
    group = np.repeat(['g1', 'g2', 'g3', 'g4'], sizes)
    return y, group
