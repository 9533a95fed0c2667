#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Binary classification metrics for a chosen positive class.

All metrics are derived from one confusion matrix computed with respect to
``positive_class``:

- Accuracy    = (TP + TN) / (TP + TN + FP + FN)
- Precision   = TP / (TP + FP)
- Recall      = TP / (TP + FN)
- Specificity = TN / (TN + FP)
- F           = 2 * Precision * Recall / (Precision + Recall)

A zero denominator yields 0 together with a ``DegenerateFoldWarning``
instead of NaN, so that fold averages stay defined.
"""

import warnings
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from .errors import DegenerateFoldWarning, InvalidInput

DOMESTIC = "DOMESTIC"
FOREIGN = "FOREIGN"
LABELS = (DOMESTIC, FOREIGN)


@dataclass(frozen=True)
class ConfusionCounts:
    tp: int
    fp: int
    tn: int
    fn: int

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn


@dataclass(frozen=True)
class Metrics:
    accuracy: float
    precision: float
    recall: float
    specificity: float
    f: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def _ratio(num: float, den: float, name: str, degenerate: List[str]) -> float:
    if den == 0:
        degenerate.append(name)
        return 0.0
    return float(num / den)


def _check_inputs(
    predicted: Sequence, truth: Sequence, positive_class, labels: Sequence
):
    predicted = np.asarray(predicted, dtype=object)
    truth = np.asarray(truth, dtype=object)

    if predicted.ndim != 1 or truth.ndim != 1:
        raise InvalidInput("label vectors must be one-dimensional")
    if len(predicted) != len(truth):
        raise InvalidInput(
            f"predicted and true labels differ in length: {len(predicted)} != {len(truth)}"
        )
    if len(truth) == 0:
        raise InvalidInput("cannot evaluate empty label vectors")

    known = set(labels)
    if positive_class not in known:
        raise InvalidInput(f"positive class {positive_class!r} not in labels {list(labels)}")
    unknown = (set(predicted) | set(truth)) - known
    if unknown:
        raise InvalidInput(f"unknown label(s): {sorted(map(str, unknown))}")

    return predicted, truth


def confusion_counts(
    predicted: Sequence,
    truth: Sequence,
    positive_class: str,
    labels: Sequence = LABELS,
) -> ConfusionCounts:
    """
    Count TP/FP/TN/FN of ``predicted`` against ``truth``, aligned by position.

    Args:
        predicted: Predicted labels
        truth: Ground truth labels
        positive_class: Label counted as the positive ("signal") class
        labels: Known label set

    Returns:
        ConfusionCounts for ``positive_class``
    """
    predicted, truth = _check_inputs(predicted, truth, positive_class, labels)

    pred_pos = predicted == positive_class
    true_pos = truth == positive_class
    return ConfusionCounts(
        tp=int(np.sum(pred_pos & true_pos)),
        fp=int(np.sum(pred_pos & ~true_pos)),
        tn=int(np.sum(~pred_pos & ~true_pos)),
        fn=int(np.sum(~pred_pos & true_pos)),
    )


def metrics_from_counts(counts: ConfusionCounts) -> Metrics:
    """Derive all five metrics from a confusion matrix."""
    degenerate: List[str] = []
    tp, fp, tn, fn = counts.tp, counts.fp, counts.tn, counts.fn

    accuracy = _ratio(tp + tn, counts.total, "accuracy", degenerate)
    precision = _ratio(tp, tp + fp, "precision", degenerate)
    recall = _ratio(tp, tp + fn, "recall", degenerate)
    specificity = _ratio(tn, tn + fp, "specificity", degenerate)
    f = _ratio(2 * precision * recall, precision + recall, "f", degenerate)

    if degenerate:
        warnings.warn(
            f"ill-defined {', '.join(degenerate)} for {counts}; reported as 0",
            DegenerateFoldWarning,
            stacklevel=3,
        )

    return Metrics(
        accuracy=accuracy,
        precision=precision,
        recall=recall,
        specificity=specificity,
        f=f,
    )


def evaluate(
    predicted: Sequence,
    truth: Sequence,
    positive_class: str,
    labels: Sequence = LABELS,
) -> Metrics:
    """
    Compute Accuracy, Precision, Recall, Specificity and F for one class.

    Args:
        predicted: Predicted labels
        truth: Ground truth labels, same length as ``predicted``
        positive_class: Label treated as positive
        labels: Known label set; any other value is rejected

    Returns:
        Metrics record
    """
    return metrics_from_counts(confusion_counts(predicted, truth, positive_class, labels))


def mean_metrics(results: Sequence[Metrics]) -> Metrics:
    """Elementwise arithmetic mean of per-fold metrics."""
    if len(results) == 0:
        raise InvalidInput("no metrics to average")
    table = np.array(
        [[m.accuracy, m.precision, m.recall, m.specificity, m.f] for m in results],
        dtype=float,
    )
    return Metrics(*(float(v) for v in table.mean(axis=0)))


def threshold_predict(
    probabilities: np.ndarray,
    classes: Sequence,
    positive_class: str,
    threshold: float = 0.5,
) -> np.ndarray:
    """
    Turn per-class probabilities into hard labels by thresholding one column.

    A row is labelled ``positive_class`` when its probability for that class
    is at least ``threshold``; otherwise it gets the other class.

    Args:
        probabilities: Array of shape (n_rows, n_classes)
        classes: Column order of ``probabilities``
        positive_class: Class whose column is thresholded
        threshold: Cut-off in [0, 1]

    Returns:
        Array of labels
    """
    classes = list(classes)
    probabilities = np.asarray(probabilities, dtype=float)

    if len(classes) != 2:
        raise InvalidInput(f"thresholding needs exactly 2 classes, got {classes}")
    if positive_class not in classes:
        raise InvalidInput(f"positive class {positive_class!r} not in {classes}")
    if not 0.0 <= threshold <= 1.0:
        raise InvalidInput(f"threshold must be within [0, 1], got {threshold}")
    if probabilities.ndim != 2 or probabilities.shape[1] != 2:
        raise InvalidInput(
            f"expected probabilities of shape (n, 2), got {probabilities.shape}"
        )

    negative_class = classes[1 - classes.index(positive_class)]
    p_pos = probabilities[:, classes.index(positive_class)]
    return np.where(p_pos >= threshold, positive_class, negative_class).astype(object)


def classification_report(
    predicted: Sequence,
    truth: Sequence,
    labels: Sequence = LABELS,
    digits: int = 2,
) -> str:
    """
    Per-class report, each label taken as the positive class in turn.

    Args:
        predicted: Predicted labels
        truth: Ground truth labels
        labels: Labels to report on
        digits: Number of decimal places to show

    Returns:
        Formatted report string
    """
    truth_arr = np.asarray(truth, dtype=object)
    width = max(max(len(str(label)) for label in labels), len("accuracy"))

    report = (
        f"{'':>{width}} {'precision':>11} {'recall':>9} {'specificity':>11} "
        f"{'f-measure':>9} {'support':>9}\n"
    )
    accuracy: Optional[float] = None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", DegenerateFoldWarning)
        for label in labels:
            m = evaluate(predicted, truth, label, labels)
            accuracy = m.accuracy
            support = int(np.sum(truth_arr == label))
            report += (
                f"{str(label):>{width}} {m.precision:>11.{digits}f} {m.recall:>9.{digits}f} "
                f"{m.specificity:>11.{digits}f} {m.f:>9.{digits}f} {support:>9}\n"
            )
    report += f"\n{'accuracy':>{width}} {accuracy:>11.{digits}f} {'':>9} {'':>11} {'':>9} {len(truth_arr):>9}\n"
    return report
