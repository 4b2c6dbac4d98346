import os
from pathlib import Path

def repo_root() -> Path:
    # Assumes this file is at <repo>/src/utils/paths.py
    return Path(__file__).resolve().parents[2]

def results_dir() -> Path:
    override = os.environ.get("KRIGING_RESULTS_DIR")
    if override:
        return Path(override).expanduser().resolve()
    return repo_root() / "results"

def tables_dir() -> Path:
    return results_dir() / "tables"
