# blockify/optimize.py
from __future__ import annotations

"""
Optional post-pass over a finished output tree: compact JSON metadata and
losslessly re-encode PNGs.
"""

import json
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from .constants import IMAGE_EXTENSIONS, JSON_EXTENSIONS
from .errors import DecodeError, EncodeError
from .fs import find_files
from .parallel import parallel_map
from .utils import log, thread_tag


def minify_json_file(path: Union[str, Path]) -> None:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(p, str(exc)) from exc
    p.write_text(
        json.dumps(data, separators=(",", ":"), ensure_ascii=False), encoding="utf-8"
    )


def minify_json_files(root: Union[str, Path]) -> int:
    """Rewrite every JSON/.mcmeta file under root without whitespace. Returns the count."""
    paths = find_files(root, True, JSON_EXTENSIONS)
    for p in paths:
        minify_json_file(p)
    return len(paths)


def optimize_png(path: Union[str, Path]) -> int:
    """Re-save a PNG with Pillow's optimiser. Returns bytes saved (may be negative)."""
    p = Path(path)
    before = p.stat().st_size
    try:
        with Image.open(p) as im:
            im.load()
            img = im.copy()
    except (UnidentifiedImageError, OSError) as exc:
        raise DecodeError(p, str(exc)) from exc
    try:
        img.save(p, format="PNG", optimize=True)
    except (OSError, ValueError) as exc:
        raise EncodeError(p, str(exc)) from exc
    return before - p.stat().st_size


def optimize_images(root: Union[str, Path], workers: Optional[int] = None) -> int:
    """Optimise every PNG under root on the worker pool. Returns total bytes saved."""
    paths = find_files(root, True, IMAGE_EXTENSIONS)

    def _task(thread_name: str, path: str) -> int:
        log(f"{thread_tag(thread_name, 'optimize')} {path}")
        return optimize_png(path)

    return sum(parallel_map(paths, workers, _task))


__all__ = [
    "minify_json_file",
    "minify_json_files",
    "optimize_png",
    "optimize_images",
]
