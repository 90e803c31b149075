"""
blockify package.

Purpose:
  Rebuild texture images out of 16x16 block tiles, one tile per source pixel,
  chosen by CIEDE2000 closeness. See blockify.cli for the command line.

Public API:
  build_palette   : rank the colours of every candidate block (phase 1).
  closest_block   : best block path for one Lab colour.
  blockify_image  : composite one target in place.
  blockify_images : composite many targets on a thread pool (phase 2).
  colour_convert  : rgb_to_lab, delta_e2000_pair.
  core_types      : DistinctColour, BlockSignature, Palette, PixelCounter.

Quick start:
  from blockify import build_palette, blockify_images
  palette = build_palette(block_paths)
  blockify_images(texture_paths, palette)
"""

__version__ = "0.1.0"

from . import colour_convert
from . import core_types
from . import errors

from .composite import blockify_image, blockify_images
from .resolve import closest_block
from .signature import build_block_signature, build_palette

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "errors",
    "build_block_signature",
    "build_palette",
    "closest_block",
    "blockify_image",
    "blockify_images",
]
