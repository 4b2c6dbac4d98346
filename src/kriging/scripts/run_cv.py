# src/kriging/scripts/run_cv.py
"""
Simple-kriging cross-validation runner.

What it does
- Loads sparse 2D points (coords + values)
- Runs K-Fold CV of the simple kriging engine for one Matern parameter set
  (known constant mean, no parameter fitting)
- Computes: MSE, MAE, RMSE, R2, PearsonR, MSSE, Coverage95
- Saves:
  - results/tables/kriging_<tag>_cv_summary.csv
  - results/tables/kriging_<tag>_cv_folds.csv

Example:
  python -m src.kriging.scripts.run_cv --coords_file data/coords.npy --values_file data/values.npy \
      --sill 5 --range 0.25 --smoothness 0.5 --nugget 0.1 --mean 0 --tag demo

Notes
- coords must be (N, 2): x,y
- values must be (N,) or a dict saved in .npy where you select a key via --values_key
"""

from __future__ import annotations

import argparse
from pathlib import Path

from src.evaluation.cv import cross_validate
from src.evaluation.reporting import save_cv_outputs
from src.kriging.model import CovarianceParameters
from src.kriging.predict import kriging_predict
from src.utils.io import drop_non_finite, load_coords, load_values
from src.utils.logging import log


def main() -> None:
    parser = argparse.ArgumentParser(description="Simple kriging K-fold CV.")
    parser.add_argument("--coords_file", type=str, required=True, help="Path to coords .npy (shape Nx2).")
    parser.add_argument("--values_file", type=str, required=True, help="Path to values .npy (shape N) or dict-like npy.")
    parser.add_argument("--values_key", type=str, default=None, help="Key for dict-like values npy.")

    parser.add_argument("--mean", type=float, default=0.0, help="Known constant mean.")
    parser.add_argument("--sill", type=float, required=True)
    parser.add_argument("--range", type=float, required=True)
    parser.add_argument("--smoothness", type=float, default=0.5)
    parser.add_argument("--nugget", type=float, default=0.0)

    parser.add_argument("--splits", type=int, default=10, help="KFold splits.")
    parser.add_argument("--seed", type=int, default=42, help="Random seed.")
    parser.add_argument("--tag", type=str, default="kriging", help="Tag used in output filenames.")
    parser.add_argument("--out_dir", type=str, default=None, help="Output dir (defaults to <repo>/results/tables).")
    args = parser.parse_args()

    coords = load_coords(args.coords_file)
    values = load_values(args.values_file, values_key=args.values_key)
    coords, values = drop_non_finite(coords, values)
    log(f"Loaded {len(values)} observations")

    params = CovarianceParameters(
        sill=args.sill,
        range=args.range,
        smoothness=args.smoothness,
        nugget=args.nugget,
    )

    def predict_fn(tc, tv, qc):
        return kriging_predict(tc, tv, qc, params, mean=args.mean)

    fold_rows, summary_rows = cross_validate(
        coords, values,
        predict_fn=predict_fn,
        n_splits=args.splits,
        seed=args.seed,
    )

    summary_rows[0].update({
        "method": "simple_kriging",
        "values_key": args.values_key,
        "mean": args.mean,
        "sill": params.sill,
        "range": params.range,
        "smoothness": params.smoothness,
        "nugget": params.nugget,
        "seed": args.seed,
    })

    out_dir = Path(args.out_dir).expanduser().resolve() if args.out_dir else None
    summary_csv, folds_csv = save_cv_outputs(fold_rows, summary_rows, tag=f"kriging_{args.tag}", out_dir=out_dir)

    log(f"Summary: {summary_rows[0]}")
    print(f"\nSaved:\n- {summary_csv}\n- {folds_csv}\n")


if __name__ == "__main__":
    main()
