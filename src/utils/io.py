from __future__ import annotations
import csv
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)

def save_csv(rows: List[Dict[str, Any]], path: Path) -> None:
    """
    Writes rows with a header built from the union of keys (first-seen order).
    """
    ensure_dir(path.parent)
    if not rows:
        return
    keys: List[str] = []
    for r in rows:
        for k in r.keys():
            if k not in keys:
                keys.append(k)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=keys)
        writer.writeheader()
        writer.writerows(rows)

def load_npy(path: str | Path) -> np.ndarray:
    p = Path(path)
    return np.load(p)

def load_npy_dict(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    obj = np.load(p, allow_pickle=True)
    if isinstance(obj, np.ndarray) and obj.shape == ():
        obj = obj.item()
    if not isinstance(obj, dict):
        raise ValueError(f"{p} is not a dict-like npy.")
    return obj

def load_coords(path: str | Path) -> np.ndarray:
    coords = np.asarray(load_npy(path), dtype=float)
    if coords.ndim != 2 or coords.shape[1] != 2:
        raise ValueError(f"coords must be shape (N,2). Got {coords.shape} from {path}")
    return coords

def load_values(path: str | Path, values_key: Optional[str] = None) -> np.ndarray:
    if values_key is None:
        return np.asarray(load_npy(path), dtype=float).reshape(-1)
    d = load_npy_dict(path)
    if values_key not in d:
        raise KeyError(f"Key '{values_key}' not found in {path}. Available: {list(d.keys())[:20]}")
    return np.asarray(d[values_key], dtype=float).reshape(-1)

def drop_non_finite(coords: np.ndarray, values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    if len(coords) != len(values):
        raise ValueError(f"coords and values length mismatch: {len(coords)} vs {len(values)}")
    mask = np.isfinite(values) & np.all(np.isfinite(coords), axis=1)
    return coords[mask], values[mask]
