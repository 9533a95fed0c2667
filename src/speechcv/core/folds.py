# folds.py
from typing import List, Sequence, Tuple
import random

import numpy as np

from .errors import InvalidFoldIndex, InvalidInput


def fold_mask(j: int, k: int, n: int) -> np.ndarray:
    """
    Boolean mask selecting the test rows of fold ``j`` out of ``k``.

    Rows are dealt round-robin: row ``i`` (0-based) belongs to fold
    ``(i % k) + 1``, not to a contiguous block.

    Args:
        j: Fold number, 1-based
        k: Number of folds
        n: Number of rows

    Returns:
        Array of ``n`` booleans, true for rows in fold ``j``
    """
    if k < 1:
        raise InvalidFoldIndex(f"fold count must be >= 1, got {k}")
    if j < 1 or j > k:
        raise InvalidFoldIndex(f"cannot select fold {j} of {k}")
    if n < 0:
        raise InvalidInput(f"size must be >= 0, got {n}")
    return np.arange(n) % k == (j - 1)


def fold_indices(k: int, n: int) -> List[Tuple[np.ndarray, np.ndarray]]:
    """(train_idx, test_idx) for every fold, in fold order."""
    out = []
    for j in range(1, k + 1):
        mask = fold_mask(j, k, n)
        out.append((np.flatnonzero(~mask), np.flatnonzero(mask)))
    return out


def stratified_fold_indices(
    labels: Sequence, k: int, seed: int = 42
) -> List[Tuple[np.ndarray, np.ndarray]]:
    """
    Class-preserving alternative to :func:`fold_indices`.

    Rows of each class are shuffled with a seeded RNG and dealt to the folds
    round-robin, continuing where the previous class stopped so that overall
    fold sizes still differ by at most one.
    """
    if k < 1:
        raise InvalidFoldIndex(f"fold count must be >= 1, got {k}")
    rng = random.Random(seed)
    buckets = {}
    for i, yi in enumerate(labels):
        buckets.setdefault(yi, []).append(i)

    test_splits = [[] for _ in range(k)]
    pos = 0
    for cls in sorted(buckets, key=str):
        idx = buckets[cls]
        rng.shuffle(idx)
        for i in idx:
            test_splits[pos % k].append(i)
            pos += 1

    n = len(labels)
    out = []
    for split in test_splits:
        test_idx = np.array(sorted(split), dtype=int)
        mask = np.zeros(n, dtype=bool)
        mask[test_idx] = True
        out.append((np.flatnonzero(~mask), test_idx))
    return out
