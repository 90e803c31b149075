# blockify/constants.py
"""
Global tunables used across the project.

- Tile geometry (BLOCK_SIZE)
- File discovery filters (IMAGE_EXTENSIONS, JSON_EXTENSIONS)
- CLI defaults
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Tiles
# =========================

# Candidate blocks must be exactly this many pixels on each side, and every
# target pixel is scaled up by this factor.
BLOCK_SIZE: int = 16

# Alpha value a candidate pixel must carry to be usable as a fill tile.
OPAQUE: int = 255

# =========================
# Discovery
# =========================
IMAGE_EXTENSIONS: Tuple[str, ...] = (".png",)
JSON_EXTENSIONS: Tuple[str, ...] = (".json", ".mcmeta")

# =========================
# CLI defaults
# =========================
DEFAULT_OUTPUT_DIR: str = "output"

__all__ = [
    "BLOCK_SIZE",
    "OPAQUE",
    "IMAGE_EXTENSIONS",
    "JSON_EXTENSIONS",
    "DEFAULT_OUTPUT_DIR",
]
