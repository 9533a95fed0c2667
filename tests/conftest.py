import numpy as np
import pandas as pd
import pytest

from speechcv.core.metrics import DOMESTIC, FOREIGN
from speechcv.models.backend import ClassifierBackend

FOREIGN_TEXTS = [
    "the treaty with our allies abroad",
    "embassy staff and foreign diplomacy",
    "troops deployed overseas to protect the alliance",
    "negotiations with foreign governments on the treaty",
]
DOMESTIC_TEXTS = [
    "lower taxes for working families at home",
    "schools and teachers in every town",
    "healthcare costs for farmers and workers",
    "new jobs in domestic manufacturing and schools",
]


class ColumnBackend(ClassifierBackend):
    """Predicts FOREIGN where column 0 is positive; records training rows by column 1."""

    name = "column"

    def __init__(self):
        self.trained_on = []
        self.costs = []

    def train(self, X, y, cost):
        self.trained_on.append(sorted(int(v) for v in X[:, 1]))
        self.costs.append(cost)
        return "model"

    def predict(self, model, X):
        return np.where(X[:, 0] > 0, FOREIGN, DOMESTIC).astype(object)

    def predict_proba(self, model, X):
        p = np.clip(X[:, 0], 0.0, 1.0)
        return [DOMESTIC, FOREIGN], np.vstack([1 - p, p]).T


@pytest.fixture
def column_backend():
    return ColumnBackend()


@pytest.fixture
def separable():
    """40 rows, labels alternating DOMESTIC/FOREIGN, one indicator column per class."""
    n = 40
    y = np.array([FOREIGN if i % 2 else DOMESTIC for i in range(n)], dtype=object)
    is_foreign = (y == FOREIGN).astype(float)
    X = np.column_stack([is_foreign, 1.0 - is_foreign])
    return X, y


@pytest.fixture
def paragraphs_csv(tmp_path):
    rows = []
    for i in range(40):
        if i % 2:
            text, label = FOREIGN_TEXTS[i % 4 // 2 + (i // 4) % 2 * 2], "foreign"
        else:
            text, label = DOMESTIC_TEXTS[i % 4 // 2 + (i // 4) % 2 * 2], "Domestic"
        rows.append({"paragraph": text, "category": label, "speech": f"speech_{i // 10}"})
    rows.append({"paragraph": "the alliance and the treaty abroad", "category": None, "speech": "speech_4"})
    rows.append({"paragraph": "taxes and schools at home", "category": None, "speech": "speech_4"})
    path = tmp_path / "paragraphs.csv"
    pd.DataFrame(rows).to_csv(path, index=False)
    return path
