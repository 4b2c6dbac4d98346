from __future__ import annotations
import time
from typing import Callable, Dict, List, Tuple

import numpy as np
from sklearn.model_selection import KFold

from .metrics import regression_metrics
from .reporting import summarize_folds

# preds, mspe = predict_fn(train_coords, train_values, test_coords)
PredictFn = Callable[[np.ndarray, np.ndarray, np.ndarray], Tuple[np.ndarray, np.ndarray]]

def cross_validate(
    coords: np.ndarray,
    values: np.ndarray,
    predict_fn: PredictFn,
    n_splits: int = 10,
    seed: int = 42,
) -> Tuple[List[Dict], List[Dict]]:
    """
    KFold CV of a kriging-style predictor that returns (preds, mspe).

    Returns:
      fold_rows: list of per-fold dicts
      summary_rows: list with one dict summary (mean across folds)
    """
    coords = np.asarray(coords, dtype=float)
    values = np.asarray(values, dtype=float).reshape(-1)

    # Clean invalid rows
    mask = np.isfinite(values) & np.all(np.isfinite(coords), axis=1)
    coords, values = coords[mask], values[mask]

    if len(values) < n_splits:
        raise ValueError(f"Need at least {n_splits} finite samples for {n_splits}-fold CV, got {len(values)}")

    kf = KFold(n_splits=n_splits, shuffle=True, random_state=seed)

    fold_rows: List[Dict] = []
    for fold_idx, (tr, te) in enumerate(kf.split(coords), start=1):
        tc, tv = coords[tr], values[tr]
        qc, qv = coords[te], values[te]

        t0 = time.time()
        preds, mspe = predict_fn(tc, tv, qc)
        dt = time.time() - t0

        m = regression_metrics(qv, preds, mspe)
        fold_rows.append({
            "fold": fold_idx,
            "n_train": len(tr),
            "n_test": len(te),
            "time_s": float(dt),
            **m
        })

    return fold_rows, [summarize_folds(fold_rows)]
