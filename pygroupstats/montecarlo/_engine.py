"""
Chunked, seedable replication of resampling statistics.

The R replicates are cut into fixed-size chunks. Chunk i always receives the
i-th child of SeedSequence(seed) and always covers the same replicate
indices, so the output depends only on (seed, R, batch_size), never on how
many workers ran the chunks or in which order they finished.

Chunks are independent, so they can be farmed out to a thread pool; the
batch kernels are numpy-vectorised and release the GIL inside the heavy
sort / reduce calls.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from pygroupstats.core.defaults import DEFAULT_BATCH_SIZE
from pygroupstats.core.exceptions import InvalidConfigurationError

SeedLike = int | np.random.SeedSequence | None

# fn(rng, size) -> array whose first axis has length `size`
BatchKernel = Callable[[np.random.Generator, int], NDArray[Any]]


def resolve_seed(seed: SeedLike) -> np.random.SeedSequence:
    """Turn an int / SeedSequence / None into a SeedSequence."""
    if isinstance(seed, np.random.SeedSequence):
        return seed
    if seed is None:
        return np.random.SeedSequence()
    try:
        as_int = int(seed)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidConfigurationError(
            f"seed: expected a non-negative integer, got {seed!r}",
            parameter="seed", value=seed,
        ) from e
    if isinstance(seed, (bool, float)) or as_int != seed or as_int < 0:
        raise InvalidConfigurationError(
            f"seed: expected a non-negative integer, got {seed!r}",
            parameter="seed", value=seed,
        )
    return np.random.SeedSequence(as_int)


def replicate(
    kernel: BatchKernel,
    R: int,
    *,
    seed: SeedLike = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    n_workers: int = 1,
) -> NDArray[Any]:
    """
    Run `kernel` over R replicates in seeded chunks.

    Args:
        kernel: fn(rng, size) returning `size` replicate values (first axis)
        R: Total number of replicates
        seed: Seed for the whole run
        batch_size: Replicates per chunk (part of the reproducibility key)
        n_workers: Threads used to evaluate chunks; does not affect output

    Returns:
        Concatenated replicate values, first axis of length R
    """
    if batch_size < 1:
        raise InvalidConfigurationError(
            f"batch_size: must be >= 1, got {batch_size}",
            parameter="batch_size", value=batch_size,
        )
    if n_workers < 1:
        raise InvalidConfigurationError(
            f"n_workers: must be >= 1, got {n_workers}",
            parameter="n_workers", value=n_workers,
        )

    root = resolve_seed(seed)
    n_chunks = -(-R // batch_size)
    children = root.spawn(n_chunks)
    sizes = [min(batch_size, R - i * batch_size) for i in range(n_chunks)]

    def run_chunk(i: int) -> NDArray[Any]:
        rng = np.random.default_rng(children[i])
        return np.asarray(kernel(rng, sizes[i]))

    if n_workers == 1 or n_chunks == 1:
        parts = [run_chunk(i) for i in range(n_chunks)]
    else:
        with ThreadPoolExecutor(max_workers=n_workers) as pool:
            parts = list(pool.map(run_chunk, range(n_chunks)))

    return np.concatenate(parts, axis=0)


def permutation_indices(rng: np.random.Generator, size: int, n: int) -> NDArray[np.intp]:
    """(size, n) matrix whose rows are independent permutations of 0..n-1."""
    base = np.tile(np.arange(n), (size, 1))
    return rng.permuted(base, axis=1)


def bootstrap_indices(rng: np.random.Generator, size: int, n: int) -> NDArray[np.intp]:
    """(size, n) matrix of indices drawn with replacement from 0..n-1."""
    return rng.integers(0, n, size=(size, n))
