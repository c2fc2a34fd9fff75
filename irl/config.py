from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List, Literal


SOURCE_EXTENSION = ".irl"
# Suffix marking a closure parameter that collects the remaining arguments
REST_MARKER = "..."
# Root binding holding the path of the file being executed
FILE_BINDING = "FILE"

Mode = Literal['debug', 'release']


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_module_roots() -> List[Path]:
    """Directories searched by `import` for non-relative module paths."""
    return paths_from_env('IRL_PATH', [Path.cwd()])


def get_default_mode() -> Mode:
    mode = os.environ.get('IRL_MODE', 'release').strip().lower()
    return 'debug' if mode == 'debug' else 'release'


def get_log_level() -> str:
    return os.environ.get('IRL_LOG_LEVEL', 'WARNING').strip().upper()


# Python recursion limit used while evaluating; each irl call level nests about ten frames
DEFAULT_MAX_DEPTH = 10000


def get_max_depth() -> int:
    raw = os.environ.get('IRL_MAX_DEPTH', '').strip()
    try:
        return int(raw) if raw else DEFAULT_MAX_DEPTH
    except ValueError:
        return DEFAULT_MAX_DEPTH
