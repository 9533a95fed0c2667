# -*- coding: utf-8 -*-
"""
Feature matrices for paragraph classification.

- load_paragraphs: read a CSV of paragraphs with a class label (and optionally
  a grouping column such as speech id or year)
- vectorize / build_feature_matrix: bag-of-words or TF-IDF document-term
  matrix from scikit-learn vectorizers

Tokenization, stopword removal and vocabulary pruning are left to the
vectorizer; this module only wires its output to the evaluation core.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import sparse
from sklearn.feature_extraction.text import CountVectorizer, TfidfVectorizer

from .core.errors import InvalidInput
from .core.metrics import LABELS


@dataclass
class FeatureMatrix:
    """Rows = examples, aligned by position with ``labels``."""

    matrix: object
    labels: np.ndarray
    feature_names: Optional[List[str]] = None
    label_set: Tuple[str, ...] = LABELS

    def __post_init__(self):
        self.labels = np.asarray(self.labels, dtype=object)
        n_rows = self.matrix.shape[0]
        if n_rows != len(self.labels):
            raise InvalidInput(
                f"feature matrix has {n_rows} rows but {len(self.labels)} labels"
            )
        unknown = set(self.labels) - set(self.label_set)
        if unknown:
            raise InvalidInput(f"unknown label(s): {sorted(map(str, unknown))}")
        if self.feature_names is not None and len(self.feature_names) != self.matrix.shape[1]:
            raise InvalidInput("feature_names length must match number of columns")

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    def is_sparse(self) -> bool:
        return sparse.issparse(self.matrix)


def _normalize_label(value) -> Optional[str]:
    if pd.isna(value) or str(value).strip() == "":
        return None
    return str(value).strip().upper()


def load_paragraphs(
    csv_path: str | Path,
    text_col: str = "text",
    label_col: str = "label",
    group_col: Optional[str] = None,
) -> pd.DataFrame:
    """
    Read paragraphs from CSV.

    Labels are stripped and upper-cased (``foreign`` -> ``FOREIGN``). A
    missing label is kept as None: the paragraph is not used for training but
    is still classified by the pipeline. Rows with empty text are dropped.

    Returns:
        DataFrame with columns ``text``, ``label`` and, if requested, ``group``
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")
    df = pd.read_csv(csv_path)

    needed = [text_col, label_col] + ([group_col] if group_col else [])
    missing = [c for c in needed if c not in df.columns]
    if missing:
        raise InvalidInput(f"CSV is missing column(s) {missing}; has {list(df.columns)}")

    out = pd.DataFrame(
        {
            "text": df[text_col],
            "label": df[label_col].map(_normalize_label).astype(object),
        }
    )
    if group_col:
        out["group"] = df[group_col]

    out = out[out["text"].notna()]
    out = out[out["text"].astype(str).str.strip() != ""]
    out["text"] = out["text"].astype(str)
    return out.reset_index(drop=True)


def vectorize(
    texts: Sequence[str],
    min_df: int = 1,
    tfidf: bool = False,
    stop_words: Optional[str] = "english",
    ngram_range: Tuple[int, int] = (1, 1),
):
    """
    Fit a vectorizer on ``texts`` and return (sparse matrix, vectorizer).

    Args:
        texts: Paragraph texts
        min_df: Minimum document frequency for a term to be kept
        tfidf: Use TF-IDF weights instead of raw counts
        stop_words: Stopword list name passed to the vectorizer (None keeps all)
        ngram_range: Word n-gram range
    """
    vec_cls = TfidfVectorizer if tfidf else CountVectorizer
    vectorizer = vec_cls(
        lowercase=True,
        stop_words=stop_words,
        min_df=min_df,
        ngram_range=ngram_range,
    )
    X = vectorizer.fit_transform(list(texts))
    print(f"[features] {X.shape[0]} rows x {X.shape[1]} terms ({'tf-idf' if tfidf else 'counts'}, min_df={min_df})")
    return X, vectorizer


def build_feature_matrix(
    texts: Sequence[str],
    labels: Sequence[str],
    label_set: Tuple[str, ...] = LABELS,
    **vectorizer_kwargs,
):
    """
    Vectorize labelled paragraphs into a FeatureMatrix.

    Returns:
        (FeatureMatrix, fitted vectorizer)
    """
    if len(texts) != len(labels):
        raise InvalidInput(f"{len(texts)} texts but {len(labels)} labels")

    X, vectorizer = vectorize(texts, **vectorizer_kwargs)
    fm = FeatureMatrix(
        matrix=X,
        labels=labels,
        feature_names=[str(t) for t in vectorizer.get_feature_names_out()],
        label_set=label_set,
    )
    return fm, vectorizer
