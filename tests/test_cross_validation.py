import numpy as np
import pytest
from scipy import sparse

from speechcv.core.cross_validation import cross_validate, cross_validate_folds
from speechcv.core.errors import DegenerateFoldWarning, InvalidInput
from speechcv.core.metrics import DOMESTIC, FOREIGN, Metrics, evaluate, mean_metrics
from speechcv.models.liblinear import LiblinearBackend


def _rows(pred_foreign):
    """Column 0 drives the stub prediction, column 1 carries the row id."""
    n = len(pred_foreign)
    return np.column_stack([np.asarray(pred_foreign, dtype=float), np.arange(n, dtype=float)])


def test_trains_on_complement_of_each_fold(column_backend):
    n, k = 13, 4
    X = _rows([i % 2 for i in range(n)])
    y = np.array([FOREIGN if i % 2 else DOMESTIC for i in range(n)], dtype=object)

    cross_validate_folds(X, y, k=k, cost=0.5, backend=column_backend, verbose=False)

    assert len(column_backend.trained_on) == k
    assert column_backend.costs == [0.5] * k
    for j, trained in enumerate(column_backend.trained_on):
        held_out = [i for i in range(n) if i % k == j]
        assert trained == [i for i in range(n) if i not in held_out]


def test_mean_is_over_folds_not_pooled(column_backend):
    # fold 1 = rows 0, 2; fold 2 = rows 1, 3
    y = np.array([FOREIGN, FOREIGN, FOREIGN, DOMESTIC], dtype=object)
    X = _rows([1, 1, 0, 1])

    with pytest.warns(DegenerateFoldWarning):
        per_fold = cross_validate_folds(X, y, k=2, backend=column_backend, verbose=False)
    assert per_fold[0] == Metrics(accuracy=0.5, precision=1.0, recall=0.5, specificity=0.0, f=pytest.approx(2 / 3))
    assert per_fold[1] == Metrics(accuracy=0.5, precision=0.5, recall=1.0, specificity=0.0, f=pytest.approx(2 / 3))

    with pytest.warns(DegenerateFoldWarning):
        mean = cross_validate(X, y, k=2, backend=column_backend, verbose=False)
    assert mean.precision == pytest.approx(0.75)
    assert mean.recall == pytest.approx(0.75)
    assert mean.f == pytest.approx(2 / 3)

    pooled = evaluate(np.where(X[:, 0] > 0, FOREIGN, DOMESTIC), y, FOREIGN)
    assert pooled.precision == pytest.approx(2 / 3)
    assert pooled.precision != pytest.approx(mean.precision)


def test_mean_equals_mean_of_folds(column_backend):
    rng = np.random.default_rng(3)
    y = rng.choice([DOMESTIC, FOREIGN], size=60).astype(object)
    X = _rows(rng.integers(0, 2, size=60))

    per_fold = cross_validate_folds(X, y, k=10, backend=column_backend, verbose=False)
    assert cross_validate(X, y, k=10, backend=column_backend, verbose=False) == mean_metrics(per_fold)


def test_inputs_are_not_mutated(column_backend, separable):
    X, y = separable
    X_before, y_before = X.copy(), y.copy()
    cross_validate(_rows(X[:, 0]), y, k=5, backend=column_backend, verbose=False)
    cross_validate(X, y, k=5, backend=LiblinearBackend(), verbose=False)
    assert (X == X_before).all()
    assert (y == y_before).all()


def test_threshold_mode_uses_probabilities(column_backend):
    y = np.array([DOMESTIC, FOREIGN] * 10, dtype=object)
    X = np.column_stack([np.tile([0.3, 0.6], 10), np.arange(20, dtype=float)])

    hard = cross_validate(X, y, k=5, backend=column_backend, verbose=False)
    assert hard.recall == pytest.approx(1.0)
    assert hard.precision == pytest.approx(0.5)

    strict = cross_validate(X, y, k=5, backend=column_backend, threshold=0.5, verbose=False)
    assert strict.precision == pytest.approx(1.0)
    assert strict.accuracy == pytest.approx(1.0)


def test_liblinear_on_separable_data(separable):
    X, y = separable
    m = cross_validate(X, y, k=5, cost=1.0, backend=LiblinearBackend("logreg"), verbose=False)
    assert m == Metrics(1.0, 1.0, 1.0, 1.0, 1.0)

    m = cross_validate(X, y, k=5, cost=1.0, positive_class=DOMESTIC, backend=LiblinearBackend("svm"), verbose=False)
    assert m.f == pytest.approx(1.0)


def test_sparse_features_and_stratified_folds(separable):
    X, y = separable
    m = cross_validate(
        sparse.coo_matrix(X), y, k=4, backend=LiblinearBackend(), stratified=True, verbose=False
    )
    assert m.accuracy == pytest.approx(1.0)


def test_threshold_zero_labels_everything_positive(separable):
    X, y = separable
    m = cross_validate(X, y, k=5, backend=LiblinearBackend(), threshold=0.0, verbose=False)
    assert m.recall == pytest.approx(1.0)
    assert m.precision == pytest.approx(0.5)
    assert m.specificity == pytest.approx(0.0)


def test_backend_errors_propagate():
    # every training fold holds a single class
    y = np.array([DOMESTIC] * 10, dtype=object)
    X = np.eye(10)
    with pytest.raises(ValueError):
        cross_validate(X, y, k=5, backend=LiblinearBackend(), verbose=False)


@pytest.mark.parametrize(
    "X,y,k,positive",
    [
        (np.zeros((5, 2)), [DOMESTIC] * 4, 2, FOREIGN),
        (np.zeros((5, 2)), [DOMESTIC] * 5, 2, "SPORTS"),
        (np.zeros((3, 2)), [DOMESTIC] * 3, 5, FOREIGN),
        (np.zeros((3, 2)), [DOMESTIC] * 3, 1, FOREIGN),
        (np.zeros(3), [DOMESTIC] * 3, 2, FOREIGN),
    ],
)
def test_invalid_input(column_backend, X, y, k, positive):
    with pytest.raises(InvalidInput):
        cross_validate(X, y, k=k, positive_class=positive, backend=column_backend, verbose=False)


def test_verbose_prints_each_fold(column_backend, separable, capsys):
    X, y = separable
    cross_validate(_rows(X[:, 0]), y, k=4, backend=column_backend)
    out = capsys.readouterr().out
    assert "[fold 4/4]" in out
    assert "[cv] k=4" in out
