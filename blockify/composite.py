# blockify/composite.py
from __future__ import annotations

"""
Mosaic compositor.

Each visible target pixel becomes a BLOCK_SIZE x BLOCK_SIZE copy of its
closest block: the block supplies RGB, the source pixel supplies alpha.
Fully transparent pixels leave their region transparent. Targets are
overwritten in place at BLOCK_SIZE times their original size.
"""

from pathlib import Path
from typing import Dict, Optional, Sequence, Union

import numpy as np

from .colour_convert import rgb_to_lab
from .constants import BLOCK_SIZE
from .core_types import LabTuple, Palette, PixelCounter, RGBTuple, U8Image
from .image_io import load_image_rgba, save_image_rgba
from .parallel import parallel_map
from .resolve import closest_block
from .utils import log, thread_tag


def blockify_image(
    path: Union[str, Path],
    palette: Palette,
    counter: PixelCounter,
    thread_name: str = "main",
) -> int:
    """
    Replace the image at path with its block mosaic.

    Lookups are memoised per RGB value and tiles are decoded once per image;
    both caches live only for this call.

    Returns:
      destination pixels written (16w * 16h)
    Raises:
      DecodeError: the target or a resolved block cannot be read
      EncodeError: the result cannot be written
    """
    log(
        f"{thread_tag(thread_name, 'blockify')} "
        f"[{counter.value:,} output pixels] starting {path}"
    )
    rgb, alpha = load_image_rgba(path)
    height, width = alpha.shape

    out_rgb = np.zeros((height * BLOCK_SIZE, width * BLOCK_SIZE, 3), dtype=np.uint8)
    out_alpha = np.zeros((height * BLOCK_SIZE, width * BLOCK_SIZE), dtype=np.uint8)

    match_of: Dict[RGBTuple, str] = {}
    tiles: Dict[str, U8Image] = {}

    ys, xs = np.nonzero(alpha)
    if ys.size and not palette:
        raise ValueError(f"no blocks to draw {path} with")
    labs = rgb_to_lab(rgb[ys, xs])

    for i in range(ys.size):
        y, x = int(ys[i]), int(xs[i])
        r, g, b = (int(v) for v in rgb[y, x])
        key: RGBTuple = (r, g, b)
        selected = match_of.get(key)
        if selected is None:
            lab: LabTuple = (float(labs[i, 0]), float(labs[i, 1]), float(labs[i, 2]))
            selected = closest_block(lab, palette)
            match_of[key] = selected

        tile = tiles.get(selected)
        if tile is None:
            tile, _ = load_image_rgba(selected)
            tiles[selected] = tile

        y0, x0 = y * BLOCK_SIZE, x * BLOCK_SIZE
        out_rgb[y0 : y0 + BLOCK_SIZE, x0 : x0 + BLOCK_SIZE] = tile[
            :BLOCK_SIZE, :BLOCK_SIZE
        ]
        out_alpha[y0 : y0 + BLOCK_SIZE, x0 : x0 + BLOCK_SIZE] = alpha[y, x]

    save_image_rgba(path, out_rgb, out_alpha)

    written = out_alpha.size
    counter.add(written)
    return written


def blockify_images(
    paths: Sequence[str],
    palette: Palette,
    counter: Optional[PixelCounter] = None,
    workers: Optional[int] = None,
) -> int:
    """
    Phase 2: one compositing task per target, all reading the same palette.

    The counter is reset before any task starts. Returns the total number of
    destination pixels written.
    """
    if counter is None:
        counter = PixelCounter()
    counter.reset()

    def _task(thread_name: str, path: str) -> int:
        return blockify_image(path, palette, counter, thread_name)

    return sum(parallel_map(list(paths), workers, _task))


__all__ = ["blockify_image", "blockify_images"]
