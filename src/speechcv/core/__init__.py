# Core evaluation components

from .errors import InvalidFoldIndex, InvalidInput, DegenerateFoldWarning
from .folds import fold_mask, fold_indices, stratified_fold_indices
from .metrics import (
    DOMESTIC,
    FOREIGN,
    LABELS,
    ConfusionCounts,
    Metrics,
    confusion_counts,
    metrics_from_counts,
    evaluate,
    mean_metrics,
    threshold_predict,
    classification_report,
)
from .cross_validation import cross_validate, cross_validate_folds

__all__ = [
    "InvalidFoldIndex",
    "InvalidInput",
    "DegenerateFoldWarning",
    "fold_mask",
    "fold_indices",
    "stratified_fold_indices",
    "DOMESTIC",
    "FOREIGN",
    "LABELS",
    "ConfusionCounts",
    "Metrics",
    "confusion_counts",
    "metrics_from_counts",
    "evaluate",
    "mean_metrics",
    "threshold_predict",
    "classification_report",
    "cross_validate",
    "cross_validate_folds",
]
