# src/kriging/scripts/predict_points.py
"""
Predict at target points with the simple kriging engine.

Reads a YAML config (dataset, mean, covariance, targets; see experiments/configs/example.yaml)
and writes one CSV row per target: x, y, prediction, mspe.

Example:
  python -m src.kriging.scripts.predict_points --config experiments/configs/example.yaml
  python -m src.kriging.scripts.predict_points --config cfg.yaml --targets_file data/grid.npy --out preds.csv
"""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from src.evaluation.reporting import save_predictions
from src.kriging.predict import kriging_predict
from src.kriging.model import locations_to_array
from src.utils.config import load_config, parameters_from_config, targets_from_config
from src.utils.io import drop_non_finite, load_coords, load_npy, load_values
from src.utils.logging import log
from src.utils.paths import tables_dir


def main() -> None:
    ap = argparse.ArgumentParser(description="Simple kriging prediction at target points.")
    ap.add_argument("--config", required=True, help="Path to YAML config.")
    ap.add_argument("--targets_file", default=None, help="Optional (M,2) .npy overriding config targets.")
    ap.add_argument("--out", default=None, help="Output CSV (defaults to results/tables/predictions_<tag>.csv).")
    args = ap.parse_args()

    cfg = load_config(args.config)
    ds = cfg["dataset"]
    coords = load_coords(ds["coords_file"])
    values = load_values(ds["values_file"], values_key=ds.get("values_key"))
    coords, values = drop_non_finite(coords, values)

    params = parameters_from_config(cfg["covariance"])
    mean = float(cfg.get("mean", 0.0))

    if args.targets_file is not None:
        targets = np.asarray(load_npy(args.targets_file), dtype=float).reshape(-1, 2)
    else:
        targets = locations_to_array(targets_from_config(cfg))
    if len(targets) == 0:
        raise ValueError("No targets given (config 'targets:' or --targets_file).")

    log(f"Predicting {len(targets)} targets from {len(values)} observations with {params}")
    preds, mspe = kriging_predict(coords, values, targets, params, mean=mean)

    tag = cfg.get("output", {}).get("tag", Path(args.config).stem)
    out = Path(args.out).expanduser().resolve() if args.out else tables_dir() / f"predictions_{tag}.csv"
    save_predictions(targets, preds, mspe, out)
    log(f"Saved predictions to {out}")


if __name__ == "__main__":
    main()
