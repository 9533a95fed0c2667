import numpy as np
import pandas as pd
import pytest

from speechcv.core.errors import InvalidInput
from speechcv.core.metrics import FOREIGN, Metrics
from speechcv.experiments.hyperparameter_tuning import (
    HyperparameterSearchResult,
    load_search,
    optimize_cost,
    save_search,
    search_costs,
)
from speechcv.models.liblinear import LiblinearBackend


def _stub_cv(scores):
    calls = []

    def cv(features, labels, k, cost, positive_class, **kwargs):
        calls.append((k, cost, positive_class, kwargs))
        return Metrics(accuracy=0.0, precision=0.0, recall=0.0, specificity=0.0, f=scores[cost])

    return cv, calls


def test_first_of_tied_costs_wins():
    cv, calls = _stub_cv({1.0: 0.5, 2.0: 0.9, 3.0: 0.9})
    assert optimize_cost(None, [], [1, 2, 3], k=10, cv_func=cv, verbose=False) == (2.0, 0.9)
    assert [c[1] for c in calls] == [1.0, 2.0, 3.0]


def test_search_keeps_full_curve():
    cv, calls = _stub_cv({0.1: 0.4, 1.0: 0.7, 10.0: 0.6})
    result = search_costs(None, [], [0.1, 1.0, 10.0], k=5, positive_class=FOREIGN, cv_func=cv, verbose=False, stratified=True)

    assert result.scores == {0.1: 0.4, 1.0: 0.7, 10.0: 0.6}
    assert list(result.scores) == [0.1, 1.0, 10.0]
    assert result.best_cost == 1.0
    assert result.best_f == 0.7
    assert all(c[0] == 5 and c[2] == FOREIGN for c in calls)
    assert all(c[3] == {"verbose": False, "stratified": True} for c in calls)

    frame = result.to_frame()
    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ["C", "accuracy", "precision", "recall", "specificity", "f"]
    assert frame["f"].tolist() == [0.4, 0.7, 0.6]


def test_empty_candidates():
    cv, _ = _stub_cv({})
    with pytest.raises(InvalidInput):
        optimize_cost(None, [], [], cv_func=cv, verbose=False)


def test_result_is_immutable():
    result = HyperparameterSearchResult(costs=(1.0,), metrics=(Metrics(1, 1, 1, 1, 1),))
    with pytest.raises(AttributeError):
        result.best_cost = 5.0


def test_result_rejects_misaligned():
    with pytest.raises(InvalidInput):
        HyperparameterSearchResult(costs=(1.0, 2.0), metrics=(Metrics(1, 1, 1, 1, 1),))


def test_save_and_load(tmp_path):
    cv, _ = _stub_cv({0.01: 0.2, 0.1: 0.8})
    result = search_costs(None, [], [0.01, 0.1], cv_func=cv, verbose=False)
    path = save_search(result, tmp_path / "out" / "search.json")
    assert path.exists()
    assert load_search(path) == result


def test_search_with_liblinear(separable, capsys):
    X, y = separable
    result = search_costs(X, y, [0.1, 1.0, 10.0], k=5, backend=LiblinearBackend())
    assert result.best_f == pytest.approx(1.0)
    assert result.best_cost in (0.1, 1.0, 10.0)
    out = capsys.readouterr().out
    assert "[3/3] C=10" in out
    assert "Best C:" in out
    # per-fold lines are silenced during the search
    assert "[fold" not in out
