from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

from src.utils.io import save_csv
from src.utils.paths import tables_dir

METRIC_KEYS = ("MSE", "MAE", "RMSE", "R2", "PearsonR", "MSSE", "Coverage95")

def summarize_folds(fold_rows: List[Dict[str, Any]], extra: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """
    One summary row: nan-mean of each metric across folds (as <key>_mean),
    plus timing, followed by any `extra` fields (method, variant, ...).
    """
    if not fold_rows:
        return dict(extra or {})

    def nanmean(key: str) -> float:
        arr = np.array([r.get(key, np.nan) for r in fold_rows], dtype=float)
        if np.all(np.isnan(arr)):
            return float("nan")
        return float(np.nanmean(arr))

    out: Dict[str, Any] = {"folds": len(fold_rows)}
    for k in METRIC_KEYS:
        if any(k in r for r in fold_rows):
            out[f"{k}_mean"] = nanmean(k)
    out["time_mean_s"] = nanmean("time_s")
    out["time_total_s"] = float(np.nansum([r.get("time_s", np.nan) for r in fold_rows]))
    out.update(extra or {})
    return out

def save_cv_outputs(
    fold_rows: List[Dict[str, Any]],
    summary_rows: List[Dict[str, Any]],
    tag: str,
    out_dir: Path | None = None,
) -> tuple[Path, Path]:
    """
    Saves fold-level and summary csv files to results/tables by default.
    """
    out = out_dir or tables_dir()
    folds_path = out / f"{tag}_cv_folds.csv"
    summary_path = out / f"{tag}_cv_summary.csv"

    save_csv(fold_rows, folds_path)
    save_csv(summary_rows, summary_path)
    return summary_path, folds_path

def save_predictions(
    query_coords: np.ndarray,
    preds: np.ndarray,
    mspe: np.ndarray,
    path: Path,
) -> Path:
    query_coords = np.asarray(query_coords, dtype=float).reshape(-1, 2)
    rows = [
        {"x": float(x), "y": float(y), "prediction": float(p), "mspe": float(v)}
        for (x, y), p, v in zip(query_coords, preds, mspe)
    ]
    save_csv(rows, path)
    return path
