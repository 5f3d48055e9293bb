from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Optional, Protocol

from minilisp.config import get_prelude_files

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def load_files(itp: _HasEvalPrelude, paths: Iterable[Path]) -> None:
    for p in paths:
        if not p.is_file():
            raise FileNotFoundError(f"Cannot find prelude file '{p}'")
        logger.debug("loading prelude %s", p)
        itp.eval_prelude(p.read_text(encoding='utf-8'))


# Prelude convenience loader (files listed in MINILISP_PRELUDE_PATH)

def load_prelude(itp: _HasEvalPrelude, paths: Optional[Iterable[Path]] = None) -> None:
    load_files(itp, get_prelude_files() if paths is None else paths)
