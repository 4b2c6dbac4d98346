# experiments/run_experiments.py
"""
Unified experiment runner (config-driven).

What it does
- Reads a YAML config describing:
  - dataset files (coords + values + optional values_key)
  - the known mean and a base Matern covariance parameter set
  - optional parameter variants (each overrides some of sill/range/smoothness/nugget)
  - CV settings (splits, seed)
- Runs simple-kriging K-fold CV for every variant and aggregates one comparison table:
  - results/tables/compare_<tag>.csv
- Also saves per-variant fold/summary CSVs via save_cv_outputs()

Example:
python experiments/run_experiments.py --config experiments/configs/example.yaml
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from src.evaluation.cv import cross_validate
from src.evaluation.reporting import save_cv_outputs
from src.kriging.errors import KrigingError
from src.kriging.model import CovarianceParameters
from src.kriging.predict import kriging_predict
from src.utils.config import load_config, parameters_from_config
from src.utils.io import drop_non_finite, load_coords, load_values, save_csv
from src.utils.logging import log
from src.utils.paths import tables_dir


# ---------- Helpers ----------

def _as_path(p: str | Path) -> Path:
    return Path(p).expanduser().resolve()

def _load_dataset(cfg: Dict[str, Any]) -> tuple[np.ndarray, np.ndarray, Optional[str]]:
    """
    Expected config keys:
      dataset:
        coords_file: ...
        values_file: ...
        values_key: (optional)
    """
    ds = cfg["dataset"]
    values_key = ds.get("values_key", None)
    coords = load_coords(ds["coords_file"])
    values = load_values(ds["values_file"], values_key=values_key)
    coords, values = drop_non_finite(coords, values)
    return coords, values, values_key

def _print_top(rows: List[Dict[str, Any]], key: str = "MSE_mean", n: int = 10) -> None:
    rows2 = [r for r in rows if r.get(key) is not None and np.isfinite(r.get(key))]
    rows2.sort(key=lambda r: float(r[key]))
    print(f"\nTop results by {key}:")
    for r in rows2[:n]:
        print(f"  {r.get('variant',''):>12} | {key}={r.get(key):.6g} | MSSE={r.get('MSSE_mean', float('nan')):.4g}")


# ---------- Variant runner ----------

def run_variant(
    coords: np.ndarray,
    values: np.ndarray,
    mean: float,
    params: CovarianceParameters,
    cv_cfg: Dict[str, Any],
    variant: str,
    base_tag: str,
    values_key: Optional[str],
) -> Dict[str, Any]:
    def predict_fn(tc, tv, qc):
        return kriging_predict(tc, tv, qc, params, mean=mean)

    fold_rows, summary_rows = cross_validate(
        coords, values,
        predict_fn=predict_fn,
        n_splits=int(cv_cfg.get("splits", 10)),
        seed=int(cv_cfg.get("seed", 42)),
    )

    summary_rows[0].update({
        "method": "simple_kriging",
        "variant": variant,
        "values_key": values_key,
        "mean": mean,
        "sill": params.sill,
        "range": params.range,
        "smoothness": params.smoothness,
        "nugget": params.nugget,
    })

    save_cv_outputs(fold_rows, summary_rows, tag=f"kriging_{base_tag}_{variant}")
    return summary_rows[0]


# ---------- Main ----------

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", required=True, help="Path to YAML config.")
    args = ap.parse_args()

    cfg_path = _as_path(args.config)
    cfg = load_config(cfg_path)

    coords, values, values_key = _load_dataset(cfg)
    mean = float(cfg.get("mean", 0.0))
    base = parameters_from_config(cfg["covariance"])

    cv_cfg = cfg.get("cv", {})
    base_tag = cfg.get("output", {}).get("tag", cfg_path.stem)

    variants = cfg.get("variants") or [{"name": "base"}]

    all_rows: List[Dict[str, Any]] = []
    for i, var_cfg in enumerate(variants, start=1):
        name = var_cfg.get("name") or f"variant{i}"
        params = parameters_from_config(var_cfg, base=base)

        log(f"Running variant {name}: {params}")
        try:
            all_rows.append(run_variant(coords, values, mean, params, cv_cfg, name, base_tag, values_key))
        except KrigingError as e:
            # failed variants get an error row; remaining variants still run
            log(f"Variant {name} failed: {e}", level="ERROR")
            all_rows.append({"method": "simple_kriging", "variant": name, "error": str(e)})

    out_path = tables_dir() / f"compare_{base_tag}.csv"
    save_csv(all_rows, out_path)

    print(f"\nSaved combined comparison table:\n  {out_path}")
    _print_top(all_rows, key="MSE_mean", n=10)


if __name__ == "__main__":
    main()
