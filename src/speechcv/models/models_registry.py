# models_registry.py
from typing import Dict, List, Tuple

from .backend import ClassifierBackend
from .liblinear import LiblinearBackend

# Geometric progressions of the regularization cost C
COST_GRIDS: Dict[str, List[float]] = {
    "logreg": [0.003, 0.01, 0.03, 0.1, 0.3, 1.0, 3.0, 10.0, 30.0, 100.0, 300.0, 1000.0],
    "svm": [0.001, 0.003, 0.01, 0.03, 0.1, 0.3, 1.0, 3.0, 10.0, 30.0, 100.0],
}
COST_GRIDS_FAST: Dict[str, List[float]] = {
    "logreg": [0.01, 0.1, 1.0, 10.0],
    "svm": [0.01, 0.1, 1.0, 10.0],
}


def get_backend_and_grid(model: str, fast: bool = True, **params) -> Tuple[ClassifierBackend, List[float]]:
    """
    返回 (backend, candidate_costs)。
    params 原样传给 LiblinearBackend 构造函数。
    """
    model = model.lower()

    if model in {"lr", "logreg", "logistic"}:
        key = "logreg"
    elif model in {"svm", "linearsvm", "linear_svm"}:
        key = "svm"
    else:
        raise ValueError(f"Unknown model: {model}")

    backend = LiblinearBackend(model_type=key, **params)
    grid = COST_GRIDS_FAST[key] if fast else COST_GRIDS[key]
    return backend, list(grid)
