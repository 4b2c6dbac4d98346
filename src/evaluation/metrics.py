from __future__ import annotations
import numpy as np
from math import sqrt

from sklearn.metrics import mean_squared_error, mean_absolute_error, r2_score
from scipy.stats import pearsonr

Z_95 = 1.959963984540054

def _pearson_safe(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    # pearsonr is undefined for constant or length<2 inputs
    if len(y_true) < 2 or np.ptp(y_true) == 0 or np.ptp(y_pred) == 0:
        return float("nan")
    return float(pearsonr(y_true, y_pred)[0])

def regression_metrics(y_true: np.ndarray, y_pred: np.ndarray, mspe: np.ndarray | None = None) -> dict:
    """
    Returns: MSE, MAE, RMSE, R2, PearsonR
    With mspe also: MSSE (mean of squared standardized errors, ~1 when the
    kriging variance is calibrated) and Coverage95 (share of y_true inside
    y_pred +- 1.96 sqrt(mspe)).
    Rows with non-finite entries are dropped.
    """
    y_true = np.asarray(y_true, dtype=float).reshape(-1)
    y_pred = np.asarray(y_pred, dtype=float).reshape(-1)

    mask = np.isfinite(y_true) & np.isfinite(y_pred)
    if mspe is not None:
        mspe = np.asarray(mspe, dtype=float).reshape(-1)
        mask &= np.isfinite(mspe)

    keys = ["MSE", "MAE", "RMSE", "R2", "PearsonR"] + (["MSSE", "Coverage95"] if mspe is not None else [])
    if mask.sum() == 0:
        return {k: np.nan for k in keys}

    yt, yp = y_true[mask], y_pred[mask]
    mse = float(mean_squared_error(yt, yp))
    out = {
        "MSE": mse,
        "MAE": float(mean_absolute_error(yt, yp)),
        "RMSE": float(sqrt(mse)),
        "R2": float(r2_score(yt, yp)) if len(yt) > 1 else float("nan"),
        "PearsonR": _pearson_safe(yt, yp),
    }

    if mspe is not None:
        var = mspe[mask]
        err = yt - yp
        pos = var > 0
        out["MSSE"] = float(np.mean(err[pos] ** 2 / var[pos])) if pos.any() else float("nan")
        half = Z_95 * np.sqrt(np.clip(var, 0.0, None))
        out["Coverage95"] = float(np.mean(np.abs(err) <= half))
    return out
