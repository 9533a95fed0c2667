# Classifier backends

from .backend import ClassifierBackend
from .liblinear import LiblinearBackend
from .models_registry import COST_GRIDS, COST_GRIDS_FAST, get_backend_and_grid

__all__ = [
    "ClassifierBackend",
    "LiblinearBackend",
    "COST_GRIDS",
    "COST_GRIDS_FAST",
    "get_backend_and_grid",
]
