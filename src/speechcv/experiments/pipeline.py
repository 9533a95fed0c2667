#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Experimental pipeline for domestic vs foreign affairs classification.

The pipeline coordinates:
1. Loading labelled (and unlabelled) paragraphs
2. Building the document-term matrix
3. Searching the regularization cost C by k-fold cross-validation
4. Reporting per-fold and mean metrics at the best C
5. Training on all labelled paragraphs and classifying the whole corpus
6. Share of each predicted class per group (speech, year, ...)
"""

import argparse
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..core.cross_validation import cross_validate_folds
from ..core.errors import InvalidInput
from ..core.metrics import FOREIGN, LABELS, mean_metrics, threshold_predict
from ..features import FeatureMatrix, load_paragraphs, vectorize
from ..models.models_registry import get_backend_and_grid
from .hyperparameter_tuning import search_costs


def label_shares(
    predicted: Sequence, groups: Sequence, labels: Sequence = LABELS
) -> pd.DataFrame:
    """
    Fraction of paragraphs per predicted label within each group.

    Returns:
        DataFrame indexed by group with one column per label; rows sum to 1
    """
    if len(predicted) != len(groups):
        raise InvalidInput(f"{len(predicted)} predictions but {len(groups)} groups")
    table = pd.crosstab(
        pd.Series(list(groups), name="group"),
        pd.Series(list(predicted), name="label"),
        normalize="index",
    )
    return table.reindex(columns=list(labels), fill_value=0.0)


class ExperimentalPipeline:
    """
    End-to-end run: CSV in, cost curve + CV metrics + corpus predictions out.
    """

    def __init__(
        self,
        csv_path: str,
        results_dir: str = "results",
        model: str = "logreg",
        k: int = 10,
        positive_class: str = FOREIGN,
        fast: bool = False,
        stratified: bool = False,
        threshold: Optional[float] = None,
        text_col: str = "text",
        label_col: str = "label",
        group_col: Optional[str] = None,
        min_df: int = 1,
        tfidf: bool = False,
        seed: int = 42,
    ):
        self.csv_path = Path(csv_path)
        self.results_dir = Path(results_dir)
        self.model = model
        self.k = k
        self.positive_class = positive_class
        self.fast = fast
        self.stratified = stratified
        self.threshold = threshold
        self.text_col = text_col
        self.label_col = label_col
        self.group_col = group_col
        self.min_df = min_df
        self.tfidf = tfidf
        self.seed = seed

        self.data: Optional[pd.DataFrame] = None
        self.results: Dict[str, Any] = {}

    def load_data(self) -> pd.DataFrame:
        print("=" * 60)
        print("STEP 1: Loading Paragraphs")
        print("=" * 60)
        self.data = load_paragraphs(self.csv_path, self.text_col, self.label_col, self.group_col)
        labelled = self.data["label"].notna()
        dist = self.data.loc[labelled, "label"].value_counts().to_dict()
        print(f"[data] rows={len(self.data)}, labelled={int(labelled.sum())}, balance={dist}")
        return self.data

    def _predict_all(self, backend, model, X) -> np.ndarray:
        if self.threshold is None:
            return backend.predict(model, X)
        classes, proba = backend.predict_proba(model, X)
        return threshold_predict(proba, classes, self.positive_class, self.threshold)

    def run(self) -> Dict[str, Any]:
        if self.data is None:
            self.load_data()
        df = self.data

        print("=" * 60)
        print("STEP 2: Building Feature Matrix")
        print("=" * 60)
        X_all, _ = vectorize(df["text"].tolist(), min_df=self.min_df, tfidf=self.tfidf)
        labelled_idx = np.flatnonzero(df["label"].notna().to_numpy())
        fm = FeatureMatrix(
            matrix=X_all[labelled_idx],
            labels=df["label"].to_numpy()[labelled_idx],
        )

        print("=" * 60)
        print(f"STEP 3: Cost Search ({self.model}, {self.k}-fold)")
        print("=" * 60)
        backend, grid = get_backend_and_grid(self.model, fast=self.fast, random_state=self.seed)
        cv_kwargs = dict(backend=backend, stratified=self.stratified, threshold=self.threshold, seed=self.seed)
        search = search_costs(fm.matrix, fm.labels, grid, k=self.k, positive_class=self.positive_class, **cv_kwargs)

        print("=" * 60)
        print(f"STEP 4: Cross-Validation at C={search.best_cost:g}")
        print("=" * 60)
        per_fold = cross_validate_folds(
            fm.matrix, fm.labels, self.k, search.best_cost, self.positive_class, **cv_kwargs
        )
        mean = mean_metrics(per_fold)
        print(f"[cv] mean {mean.as_dict()}")

        print("=" * 60)
        print("STEP 5: Classifying Corpus")
        print("=" * 60)
        final_model = backend.train(fm.matrix, fm.labels, search.best_cost)
        predicted = self._predict_all(backend, final_model, X_all)
        counts = pd.Series(predicted).value_counts().to_dict()
        print(f"[predict] {len(predicted)} paragraphs: {counts}")

        self.results = {
            "csv": str(self.csv_path),
            "model": backend.name,
            "backend_params": backend.params(),
            "k": self.k,
            "positive_class": self.positive_class,
            "stratified": self.stratified,
            "threshold": self.threshold,
            "n_rows": int(len(df)),
            "n_labelled": int(len(labelled_idx)),
            "n_features": int(X_all.shape[1]),
            "search": search.as_dict(),
            "cv_folds": [m.as_dict() for m in per_fold],
            "cv_mean": mean.as_dict(),
            "predicted_counts": {str(k): int(v) for k, v in counts.items()},
        }

        if "group" in df.columns:
            shares = label_shares(predicted, df["group"].tolist())
            print(f"[shares] per {self.group_col}:\n{shares}")
            self.results["label_shares"] = {
                str(g): {str(c): float(v) for c, v in row.items()} for g, row in shares.iterrows()
            }

        self.save_results()
        return self.results

    def save_results(self) -> Path:
        self.results_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        out = self.results_dir / f"experiment_results_{stamp}.json"
        out.write_text(json.dumps(self.results, ensure_ascii=False, indent=2), encoding="utf-8")
        print(f"Saved summary: {out}")
        return out


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Domestic vs foreign paragraph classification with k-fold CV")
    ap.add_argument("--csv", type=Path, required=True, help="CSV with one paragraph per row")
    ap.add_argument("--text-col", default="text")
    ap.add_argument("--label-col", default="label", help="Empty cells mark unlabelled paragraphs")
    ap.add_argument("--group-col", default=None, help="Column to aggregate predicted shares by")
    ap.add_argument("--results-dir", type=Path, default=Path("results"))
    ap.add_argument("--model", choices=["logreg", "svm"], default="logreg")
    ap.add_argument("--k", type=int, default=10)
    ap.add_argument("--positive", default=FOREIGN, choices=list(LABELS))
    ap.add_argument("--fast", action="store_true", help="Use the short cost grid")
    ap.add_argument("--stratified", action="store_true", help="Class-preserving folds")
    ap.add_argument("--threshold", type=float, default=None, help="Probability cut-off for the positive class")
    ap.add_argument("--min-df", type=int, default=1)
    ap.add_argument("--tfidf", action="store_true")
    ap.add_argument("--seed", type=int, default=42)
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_arg_parser().parse_args(argv)
    pipeline = ExperimentalPipeline(
        csv_path=args.csv,
        results_dir=args.results_dir,
        model=args.model,
        k=args.k,
        positive_class=args.positive,
        fast=args.fast,
        stratified=args.stratified,
        threshold=args.threshold,
        text_col=args.text_col,
        label_col=args.label_col,
        group_col=args.group_col,
        min_df=args.min_df,
        tfidf=args.tfidf,
        seed=args.seed,
    )
    pipeline.run()


if __name__ == "__main__":
    main()
