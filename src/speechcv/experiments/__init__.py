# Experiment drivers: cost search and end-to-end pipeline

from .hyperparameter_tuning import (
    COST_GRIDS,
    COST_GRIDS_FAST,
    HyperparameterSearchResult,
    search_costs,
    optimize_cost,
    save_search,
    load_search,
)
from .pipeline import ExperimentalPipeline, label_shares

__all__ = [
    "COST_GRIDS",
    "COST_GRIDS_FAST",
    "HyperparameterSearchResult",
    "search_costs",
    "optimize_cost",
    "save_search",
    "load_search",
    "ExperimentalPipeline",
    "label_shares",
]
