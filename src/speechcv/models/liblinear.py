# liblinear.py
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
from scipy.special import expit
from sklearn.linear_model import LogisticRegression
from sklearn.svm import LinearSVC

from ..core.errors import InvalidInput
from .backend import ClassifierBackend


class LiblinearBackend(ClassifierBackend):
    """Linear models solved by liblinear, wrapped as a ClassifierBackend.

    params:
      - model_type: "logreg" (L2-regularized logistic regression) or
        "svm" (L2-regularized L2-loss linear SVM)
      - bias: fit an intercept term
      - tol, max_iter: solver stopping criteria
      - class_weight: None or "balanced"
      - random_state: seed for liblinear's coordinate shuffling
    """

    MODEL_TYPES = ("logreg", "svm")

    def __init__(
        self,
        model_type: str = "logreg",
        bias: bool = True,
        tol: float = 1e-4,
        max_iter: int = 1000,
        class_weight: Optional[str] = None,
        random_state: int = 42,
    ):
        if model_type not in self.MODEL_TYPES:
            raise ValueError(f"Unknown model_type: {model_type}")
        self.model_type = model_type
        self.bias = bias
        self.tol = tol
        self.max_iter = max_iter
        self.class_weight = class_weight
        self.random_state = random_state
        self.name = f"liblinear-{model_type}"

    def params(self) -> Dict[str, Any]:
        return {
            "model_type": self.model_type,
            "bias": self.bias,
            "tol": self.tol,
            "max_iter": self.max_iter,
            "class_weight": self.class_weight,
            "random_state": self.random_state,
        }

    def _make(self, cost: float):
        if cost <= 0:
            raise InvalidInput(f"cost must be > 0, got {cost}")
        if self.model_type == "logreg":
            return LogisticRegression(
                C=cost,
                solver="liblinear",
                fit_intercept=self.bias,
                tol=self.tol,
                max_iter=self.max_iter,
                class_weight=self.class_weight,
                random_state=self.random_state,
            )
        return LinearSVC(
            C=cost,
            fit_intercept=self.bias,
            tol=self.tol,
            max_iter=self.max_iter,
            class_weight=self.class_weight,
            random_state=self.random_state,
        )

    def train(self, X, y: Sequence, cost: float):
        cls = self._make(cost)
        cls.fit(X, np.asarray(y, dtype=object))
        return cls

    def predict(self, model, X) -> np.ndarray:
        return np.asarray(model.predict(X), dtype=object)

    def predict_proba(self, model, X) -> Tuple[list, np.ndarray]:
        classes = list(model.classes_)
        if hasattr(model, "predict_proba"):
            return classes, model.predict_proba(X)
        # LinearSVC has no probabilities; squash the margin with a sigmoid
        if len(classes) != 2:
            raise InvalidInput("margin-based probabilities need exactly 2 classes")
        p1 = expit(model.decision_function(X))
        return classes, np.vstack([1 - p1, p1]).T
