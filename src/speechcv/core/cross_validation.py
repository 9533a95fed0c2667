# cross_validation.py
from typing import List, Optional, Sequence

import numpy as np
from scipy import sparse

from .errors import InvalidInput
from .folds import fold_indices, stratified_fold_indices
from .metrics import FOREIGN, LABELS, Metrics, evaluate, mean_metrics, threshold_predict


def _as_rows(features):
    """Row-indexable view of a dense or sparse feature matrix (input untouched)."""
    if sparse.issparse(features):
        return features.tocsr()
    X = np.asarray(features)
    if X.ndim != 2:
        raise InvalidInput(f"feature matrix must be 2-D, got shape {X.shape}")
    return X


def cross_validate_folds(
    features,
    labels: Sequence,
    k: int = 10,
    cost: float = 1.0,
    positive_class: str = FOREIGN,
    backend=None,
    stratified: bool = False,
    threshold: Optional[float] = None,
    seed: int = 42,
    label_set: Sequence = LABELS,
    verbose: bool = True,
) -> List[Metrics]:
    """
    Train and evaluate one model per fold.

    Fold ``j`` holds out the rows selected by ``fold_mask(j, k, n)``, trains on
    the rest and scores the held-out predictions against their true labels.

    Args:
        features: Feature matrix (numpy array or scipy.sparse), one row per example
        labels: Class labels aligned with the rows of ``features``
        k: Number of folds
        cost: Regularization cost passed to the backend
        positive_class: Class scored as positive
        backend: ClassifierBackend; defaults to liblinear logistic regression
        stratified: Use class-preserving folds instead of round-robin stripes
        threshold: If set, label by thresholding the positive-class probability
        seed: Shuffling seed for stratified folds
        label_set: Known labels
        verbose: Print one line per fold

    Returns:
        Per-fold Metrics, in fold order
    """
    if backend is None:
        from ..models.liblinear import LiblinearBackend

        backend = LiblinearBackend()

    X = _as_rows(features)
    y = np.asarray(labels, dtype=object)
    n = X.shape[0]

    if n != len(y):
        raise InvalidInput(f"feature rows ({n}) and labels ({len(y)}) differ in length")
    if positive_class not in label_set:
        raise InvalidInput(f"positive class {positive_class!r} not in labels {list(label_set)}")
    if k < 2:
        raise InvalidInput(f"need at least 2 folds, got {k}")
    if n < k:
        raise InvalidInput(f"cannot split {n} rows into {k} folds")

    folds = stratified_fold_indices(y, k, seed) if stratified else fold_indices(k, n)

    results = []
    for j, (tr_idx, te_idx) in enumerate(folds, 1):
        model = backend.train(X[tr_idx], y[tr_idx], cost)
        if threshold is None:
            pred = backend.predict(model, X[te_idx])
        else:
            classes, proba = backend.predict_proba(model, X[te_idx])
            pred = threshold_predict(proba, classes, positive_class, threshold)

        m = evaluate(pred, y[te_idx], positive_class, label_set)
        results.append(m)
        if verbose:
            print(f"[fold {j}/{k}] F={m.f:.4f}  acc={m.accuracy:.4f}  n_test={len(te_idx)}")

    return results


def cross_validate(
    features,
    labels: Sequence,
    k: int = 10,
    cost: float = 1.0,
    positive_class: str = FOREIGN,
    **kwargs,
) -> Metrics:
    """
    Mean of the per-fold metrics from :func:`cross_validate_folds`.

    Each field is averaged over the k folds; predictions are never pooled
    into a single confusion matrix.
    """
    per_fold = cross_validate_folds(features, labels, k, cost, positive_class, **kwargs)
    mean = mean_metrics(per_fold)
    if kwargs.get("verbose", True):
        print(
            f"[cv] k={k} C={cost:g}  mean F={mean.f:.4f}  P={mean.precision:.4f}  "
            f"R={mean.recall:.4f}  acc={mean.accuracy:.4f}"
        )
    return mean
