from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List

# Defaults
_DEFAULT_PRELUDE_FILES: List[Path] = []
_DEFAULT_RECURSION_LIMIT = 10_000

_TRUTHY = {"1", "true", "yes", "on"}


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_prelude_files() -> List[Path]:
    """Files evaluated before the program, in order."""
    return paths_from_env('MINILISP_PRELUDE_PATH', _DEFAULT_PRELUDE_FILES)


def get_recursion_limit() -> int:
    return int_from_env('MINILISP_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)


def lenient_exit() -> bool:
    """Whether the driver exits with status 0 even after an evaluation error."""
    return flag_from_env('MINILISP_LENIENT_EXIT')
