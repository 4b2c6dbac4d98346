from __future__ import annotations
from datetime import datetime

_VERBOSE = True

def now_str() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

def set_verbose(verbose: bool) -> None:
    # WARNING/ERROR lines are always printed
    global _VERBOSE
    _VERBOSE = bool(verbose)

def log(msg: str, level: str = "INFO") -> None:
    if level == "INFO" and not _VERBOSE:
        return
    print(f"[{now_str()}] {level} {msg}")
