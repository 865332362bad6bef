from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional


# Resolve installation dir (schemer package directory)
_SCHEMER_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE = _SCHEMER_DIR / 'prelude' / 'stdlib.scm'
_DEFAULT_RECURSION_LIMIT = 10000
_DEFAULT_LOG_LEVEL = 'WARNING'
_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_load_path() -> List[Path]:
    """Directories searched for relative file names that do not exist in the working directory."""
    return paths_from_env('SCHEMER_LOAD_PATH', [])


def get_prelude_file() -> Path:
    roots = paths_from_env('SCHEMER_PRELUDE_PATH', [_DEFAULT_PRELUDE])
    # treat as a single file; if a directory is set, look for stdlib.scm inside it
    p = roots[0]
    return p / 'stdlib.scm' if p.is_dir() else p


def get_recursion_limit() -> int:
    raw = os.environ.get('SCHEMER_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return max(int(raw), 100)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring non-integer SCHEMER_RECURSION_LIMIT=%r", raw
        )
        return _DEFAULT_RECURSION_LIMIT


def resolve_file(filename: str) -> Path:
    """Resolve `filename` against the working directory, then each load-path entry."""
    p = Path(filename)
    if p.is_absolute() or p.exists():
        return p
    for root in get_load_path():
        candidate = root / p
        if candidate.exists():
            return candidate
    return p


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the command-line front end.

    `level` falls back to SCHEMER_LOG_LEVEL, then WARNING. Logs go to stderr so
    they never interleave with program output written to stdout.
    """
    name = (level or os.environ.get('SCHEMER_LOG_LEVEL') or _DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, name, logging.WARNING)
    logging.basicConfig(level=numeric_level, format=_LOG_FORMAT, stream=sys.stderr)
    logging.getLogger(__name__).debug("Logging initialized at %s level", name)
