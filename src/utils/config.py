from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import yaml

from src.kriging.model import CovarianceParameters, Location


def load_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path).expanduser().resolve()
    with p.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{p} must contain a YAML mapping at top level.")
    return cfg


def parameters_from_config(section: Dict[str, Any], base: Optional[CovarianceParameters] = None) -> CovarianceParameters:
    """
    Builds CovarianceParameters from a mapping with keys sill, range, smoothness, nugget.
    Keys missing from `section` fall back to `base`; without a base, sill and range are required.
    """
    if base is not None:
        return CovarianceParameters(
            sill=float(section.get("sill", base.sill)),
            range=float(section.get("range", base.range)),
            smoothness=float(section.get("smoothness", base.smoothness)),
            nugget=float(section.get("nugget", base.nugget)),
        )
    return CovarianceParameters(
        sill=float(section["sill"]),
        range=float(section["range"]),
        smoothness=float(section.get("smoothness", 0.5)),
        nugget=float(section.get("nugget", 0.0)),
    )


def targets_from_config(cfg: Dict[str, Any]) -> List[Location]:
    pts = np.asarray(cfg.get("targets", []), dtype=float).reshape(-1, 2)
    return [Location(float(x), float(y)) for x, y in pts]
