# blockify/signature.py
from __future__ import annotations

"""
Block signatures.

Ranks the colours of each 16x16 candidate block by their mean dE2000 to the
rest of the block, so the most representative colour comes first. Blocks of
the wrong size or with any transparency are left out of the palette.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np

from .colour_convert import delta_e2000_pair, rgb_to_lab
from .constants import BLOCK_SIZE, OPAQUE
from .core_types import BlockSignature, DistinctColour, Palette, RGBATuple
from .image_io import load_image_rgba
from .parallel import parallel_map
from .utils import log, thread_tag


def _unique_in_pixel_order(rgba: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Unique RGBA rows ordered by first appearance (row-major), with counts.
    """
    uniq, first_idx, counts = np.unique(
        rgba, axis=0, return_index=True, return_counts=True
    )
    order = np.argsort(first_idx, kind="stable")
    return uniq[order], counts[order]


def rank_colours(rgb: np.ndarray, alpha: np.ndarray) -> List[DistinctColour]:
    """
    Score every colour of an opaque image and return them ascending by score.

    Each pixel's score is the mean dE2000 to every pixel of the image, itself
    included. Equal pixels share a score, so the ranking is computed once per
    unique colour and weighted by pixel count. Equal scores keep pixel order.
    """
    pixel_count = int(alpha.size)
    flat = np.concatenate([rgb.reshape(-1, 3), alpha.reshape(-1, 1)], axis=1)
    uniq, counts = _unique_in_pixel_order(flat)
    labs = rgb_to_lab(uniq[:, :3])

    n = uniq.shape[0]
    dist = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            d = delta_e2000_pair(labs[i], labs[j])
            dist[i, j] = d
            dist[j, i] = d

    colours: List[DistinctColour] = []
    for i in range(n):
        score = float(np.dot(dist[i], counts)) / pixel_count
        rgba: RGBATuple = (
            int(uniq[i, 0]),
            int(uniq[i, 1]),
            int(uniq[i, 2]),
            int(uniq[i, 3]),
        )
        lab = (float(labs[i, 0]), float(labs[i, 1]), float(labs[i, 2]))
        colours.append(DistinctColour(score=score, rgba=rgba, lab=lab))

    colours.sort(key=lambda c: c.score)
    return colours


def build_block_signature(path: Union[str, Path]) -> Optional[BlockSignature]:
    """
    Signature for one candidate block, or None when it cannot be a fill tile.

    Raises DecodeError if the file cannot be read; a broken candidate stops the run.
    """
    rgb, alpha = load_image_rgba(path)
    height, width = alpha.shape
    if width != BLOCK_SIZE or height != BLOCK_SIZE:
        return None
    if np.any(alpha < OPAQUE):
        return None

    colours = rank_colours(rgb, alpha)
    if not colours:
        return None
    return BlockSignature(path=str(path), colours=tuple(colours))


def build_palette(paths: Sequence[str], workers: Optional[int] = None) -> Palette:
    """
    Phase 1: one signature task per candidate path.

    Returns the accepted signatures ordered by path.
    """

    def _task(thread_name: str, path: str) -> Optional[BlockSignature]:
        log(f"{thread_tag(thread_name, 'palette')} ranking {path}")
        return build_block_signature(path)

    results = parallel_map(list(paths), workers, _task)
    signatures = [sig for sig in results if sig is not None]
    signatures.sort(key=lambda s: s.path)
    return tuple(signatures)


__all__ = ["rank_colours", "build_block_signature", "build_palette"]
