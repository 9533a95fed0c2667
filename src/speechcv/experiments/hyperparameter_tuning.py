#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Regularization Cost Search

Grid search over the cost parameter C of a linear classifier. Every candidate
is scored by k-fold cross-validated F-measure and the best one is kept.

Features:
- Ordered candidate grids (see COST_GRIDS / COST_GRIDS_FAST)
- Deterministic tie-break: the first candidate in grid order wins
- Full score curve kept for reporting, not only the optimum
- JSON save/load of search results
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

import pandas as pd

from ..core.cross_validation import cross_validate
from ..core.errors import InvalidInput
from ..core.metrics import FOREIGN, Metrics
from ..models.models_registry import COST_GRIDS, COST_GRIDS_FAST


@dataclass(frozen=True)
class HyperparameterSearchResult:
    """
    Outcome of one cost search.

    ``costs`` and ``metrics`` are aligned and kept in the order the candidates
    were tried.
    """

    costs: Tuple[float, ...]
    metrics: Tuple[Metrics, ...]
    best_cost: float = field(init=False)
    best_f: float = field(init=False)

    def __post_init__(self):
        if len(self.costs) == 0:
            raise InvalidInput("empty search result")
        if len(self.costs) != len(self.metrics):
            raise InvalidInput("costs and metrics differ in length")
        best_i = 0
        for i, m in enumerate(self.metrics):
            # strict ">" keeps the first of tied candidates
            if m.f > self.metrics[best_i].f:
                best_i = i
        object.__setattr__(self, "best_cost", self.costs[best_i])
        object.__setattr__(self, "best_f", self.metrics[best_i].f)

    @property
    def scores(self) -> Dict[float, float]:
        """Cost -> cross-validated F, in iteration order."""
        return {c: m.f for c, m in zip(self.costs, self.metrics)}

    def to_frame(self) -> pd.DataFrame:
        rows = [{"C": c, **m.as_dict()} for c, m in zip(self.costs, self.metrics)]
        return pd.DataFrame(rows, columns=["C", "accuracy", "precision", "recall", "specificity", "f"])

    def as_dict(self) -> Dict:
        return {
            "best_cost": self.best_cost,
            "best_f": self.best_f,
            "curve": [{"C": c, **m.as_dict()} for c, m in zip(self.costs, self.metrics)],
        }


def search_costs(
    features,
    labels: Sequence,
    candidate_costs: Sequence[float],
    k: int = 10,
    positive_class: str = FOREIGN,
    cv_func: Callable[..., Metrics] = cross_validate,
    verbose: bool = True,
    **cv_kwargs,
) -> HyperparameterSearchResult:
    """
    Cross-validate every candidate cost and collect the score curve.

    Args:
        features: Feature matrix
        labels: Labels aligned with ``features`` rows
        candidate_costs: Ordered cost values to try
        k: Number of folds
        positive_class: Class whose F-measure is maximised
        cv_func: Cross-validation routine returning mean Metrics
        verbose: Print one line per candidate
        **cv_kwargs: Passed through to ``cv_func`` (backend, stratified, threshold, ...)

    Returns:
        HyperparameterSearchResult
    """
    costs = [float(c) for c in candidate_costs]
    if not costs:
        raise InvalidInput("candidate cost list is empty")

    if verbose:
        print(f"  Testing {len(costs)} cost values with {k}-fold CV")

    results: List[Metrics] = []
    for ci, c in enumerate(costs, 1):
        m = cv_func(features, labels, k=k, cost=c, positive_class=positive_class, verbose=False, **cv_kwargs)
        results.append(m)
        if verbose:
            print(f"    [{ci}/{len(costs)}] C={c:g}  mean F={m.f:.4f}  acc={m.accuracy:.4f}")

    result = HyperparameterSearchResult(costs=tuple(costs), metrics=tuple(results))
    if verbose:
        print(f"  Best C: {result.best_cost:g}  (F={result.best_f:.4f})")
    return result


def optimize_cost(
    features,
    labels: Sequence,
    candidate_costs: Sequence[float],
    k: int = 10,
    positive_class: str = FOREIGN,
    **kwargs,
) -> Tuple[float, float]:
    """(best_cost, best_F) over ``candidate_costs``; see :func:`search_costs`."""
    result = search_costs(features, labels, candidate_costs, k, positive_class, **kwargs)
    return result.best_cost, result.best_f


def save_search(result: HyperparameterSearchResult, filepath) -> Path:
    """
    Save a search result to JSON.

    Args:
        result: Search result
        filepath: Path to save results
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(result.as_dict(), f, indent=2)
    print(f"Results saved to: {filepath}")
    return filepath


def load_search(filepath) -> HyperparameterSearchResult:
    """Rebuild a search result saved by :func:`save_search`."""
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    curve = data["curve"]
    return HyperparameterSearchResult(
        costs=tuple(float(row["C"]) for row in curve),
        metrics=tuple(
            Metrics(
                accuracy=row["accuracy"],
                precision=row["precision"],
                recall=row["recall"],
                specificity=row["specificity"],
                f=row["f"],
            )
            for row in curve
        ),
    )


__all__ = [
    "COST_GRIDS",
    "COST_GRIDS_FAST",
    "HyperparameterSearchResult",
    "search_costs",
    "optimize_cost",
    "save_search",
    "load_search",
]
