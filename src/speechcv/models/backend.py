# backend.py
from abc import ABC, abstractmethod
from typing import Any, Sequence, Tuple

import numpy as np


class ClassifierBackend(ABC):
    """
    Train/predict contract the cross-validator relies on.

    Backends hold configuration only; fitted models are returned from
    ``train`` and passed back into ``predict``, so one backend instance can be
    shared across folds and cost candidates.
    """

    name = "backend"

    @abstractmethod
    def train(self, X, y: Sequence, cost: float) -> Any:
        """Fit a model on rows ``X`` with labels ``y`` at regularization ``cost``."""

    @abstractmethod
    def predict(self, model: Any, X) -> np.ndarray:
        """Hard labels for rows ``X``."""

    def predict_proba(self, model: Any, X) -> Tuple[list, np.ndarray]:
        """(classes, probabilities) with one probability column per class."""
        raise NotImplementedError(f"{type(self).__name__} does not return probabilities")
