# blockify/fs.py
from __future__ import annotations

"""
Directory checks, file discovery and output staging.
"""

import shutil
from pathlib import Path
from typing import Iterable, List, Union

from .errors import ConfigError

PathLike = Union[str, Path]


def check_dir_exists(path: PathLike) -> Path:
    """Return path as a Path, or raise ConfigError if it is not a directory."""
    p = Path(path)
    if not p.is_dir():
        raise ConfigError(f"directory not found: {p}")
    return p


def find_files(root: PathLike, recursive: bool, extensions: Iterable[str]) -> List[str]:
    """
    Absolute paths of files under root whose names end with one of extensions
    (case-insensitive), sorted.
    """
    exts = tuple(e.lower() for e in extensions)
    base = Path(root).resolve()
    entries = base.rglob("*") if recursive else base.iterdir()
    return sorted(
        str(p) for p in entries if p.is_file() and p.name.lower().endswith(exts)
    )


def reset_dir(path: PathLike) -> Path:
    """Remove path if it exists, then create it empty."""
    p = Path(path)
    if p.exists():
        shutil.rmtree(p)
    p.mkdir(parents=True)
    return p


def stage_output(pack: PathLike, output: PathLike) -> Path:
    """Fresh output directory holding a copy of the pack's contents."""
    src = check_dir_exists(pack)
    dst = reset_dir(output)
    try:
        shutil.copytree(src, dst, dirs_exist_ok=True)
    except (shutil.Error, OSError) as exc:
        raise ConfigError(f"failed to copy {src} to {dst}: {exc}") from exc
    return dst


__all__ = ["check_dir_exists", "find_files", "reset_dir", "stage_output"]
