# blockify/image_io.py
from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .core_types import U8Image, U8Mask
from .errors import DecodeError, EncodeError

"""
Image I/O helpers (8-bit RGBA). Alpha is passed through untouched.
"""


def load_image_rgba(path: Union[str, Path]) -> Tuple[U8Image, U8Mask]:
    """Load an image with Pillow, convert to RGBA, return (rgb [H,W,3], alpha [H,W])."""
    try:
        with Image.open(path) as im:
            arr = np.array(im.convert("RGBA"), dtype=np.uint8)
    except (
        UnidentifiedImageError,
        OSError,
        ValueError,
        SyntaxError,
        EOFError,
    ) as exc:
        raise DecodeError(path, str(exc)) from exc
    return arr[..., :3], arr[..., 3]


def save_image_rgba(path: Union[str, Path], rgb: U8Image, alpha: U8Mask) -> None:
    """
    Write RGB and alpha arrays to path. The format follows the file suffix,
    so a target is overwritten in its own format.
    """
    out = np.zeros((rgb.shape[0], rgb.shape[1], 4), dtype=np.uint8)
    out[..., :3] = rgb
    out[..., 3] = alpha
    try:
        Image.fromarray(out).save(path)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(path, str(exc)) from exc


def has_visible_pixels(path: Union[str, Path]) -> bool:
    """True if any pixel of the image at path has alpha > 0."""
    _, alpha = load_image_rgba(path)
    return bool(np.any(alpha))


__all__ = [
    "load_image_rgba",
    "save_image_rgba",
    "has_visible_pixels",
]
