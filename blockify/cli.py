# blockify/cli.py
"""
Turn every pixel of a texture pack into a 16x16 block tile.

Usage:
  blockify BLOCKS PACK [--output DIR] [--optimize] [--workers N] [--debug]
  python -m blockify BLOCKS PACK ...

Input:
  BLOCKS : folder of 16x16 fully opaque PNG blocks (not searched recursively).
           Other sizes and blocks with any transparency are skipped.
  PACK   : texture pack folder. Every PNG below it is blockified.

Output:
  A copy of PACK in --output (default ./output, wiped first) where each PNG
  is 16x larger and every visible pixel is the closest block by dE2000.
  Alpha comes from the original pixel.

Notes:
  --optimize compacts JSON/.mcmeta files and re-encodes PNGs losslessly.
  Any unreadable image stops the run; files already written stay written.
  With no usable blocks the run only fails if some texture has a visible
  pixel; packs whose textures are fully transparent still blockify.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import List, Optional

from .composite import blockify_images
from .constants import DEFAULT_OUTPUT_DIR, IMAGE_EXTENSIONS
from .core_types import PixelCounter
from .errors import BlockifyError, ConfigError
from .fs import check_dir_exists, find_files, stage_output
from .image_io import has_visible_pixels
from .optimize import minify_json_files, optimize_images
from .signature import build_palette
from .utils import (
    debug_log,
    default_workers,
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        blocks: Path to the block folder
        pack: Path to the texture pack
        output: Path of the staged output folder
        optimize: bool, run the JSON/PNG post-pass
        workers: thread pool size
        debug: bool for per-phase details
    """
    parser = argparse.ArgumentParser(
        prog="blockify",
        description="Rebuild a texture pack out of 16x16 blocks, one block per pixel.",
    )
    parser.add_argument("blocks", type=Path, help="Folder of 16x16 block images")
    parser.add_argument("pack", type=Path, help="Texture pack folder")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(DEFAULT_OUTPUT_DIR),
        help=f"Output folder, replaced on every run (default: ./{DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--optimize",
        action="store_true",
        help="Minify JSON metadata and losslessly recompress PNGs afterwards",
    )
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Worker threads"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose run details")
    return parser.parse_args(argv)


def run(
    blocks: Path,
    pack: Path,
    output: Path,
    *,
    optimize: bool = False,
    workers: Optional[int] = None,
    debug: bool = False,
) -> int:
    """
    Full run: validate, stage, build palette, composite, optionally optimise.

    Returns:
      destination pixels written
    Raises:
      BlockifyError subclasses for any fault; nothing is rolled back.
    """
    t_start = time.perf_counter()
    check_dir_exists(blocks)
    check_dir_exists(pack)
    out_abs, pack_abs = output.resolve(), pack.resolve()
    if (
        out_abs == pack_abs
        or pack_abs in out_abs.parents
        or out_abs in pack_abs.parents
    ):
        raise ConfigError(f"output {output} must not overlap the pack {pack}")

    print_banner("stage")
    out_dir = stage_output(pack, output)
    block_files = find_files(blocks, False, IMAGE_EXTENSIONS)
    texture_files = find_files(out_dir, True, IMAGE_EXTENSIONS)
    log(
        key_value_pairs_to_string(
            [
                ("Output", str(out_dir)),
                ("Blocks", len(block_files)),
                ("Textures", len(texture_files)),
            ]
        )
    )

    print_banner("palette")
    t_palette = time.perf_counter()
    palette = build_palette(block_files, workers)
    skipped = len(block_files) - len(palette)
    log(f"Palette: {len(palette)} blocks ({skipped} skipped)")
    if debug:
        for sig in palette:
            debug_log(
                f"{Path(sig.path).name}: colours={len(sig.colours)} "
                f"head=rgba{sig.head.rgba} score={sig.head.score:.3f}"
            )
        debug_log(
            f"palette time {format_total_duration_compact(time.perf_counter() - t_palette)}"
        )
    if not palette and any(has_visible_pixels(p) for p in texture_files):
        raise ConfigError(f"no usable 16x16 opaque blocks in {blocks}")

    print_banner("blockify")
    t_blockify = time.perf_counter()
    counter = PixelCounter()
    written = blockify_images(texture_files, palette, counter, workers)
    log(f"Output pixels: {written:,}")
    if debug:
        debug_log(
            f"blockify time {format_total_duration_compact(time.perf_counter() - t_blockify)}"
        )

    if optimize:
        print_banner("optimize")
        n_json = minify_json_files(out_dir)
        saved = optimize_images(out_dir, workers)
        log(f"Minified {n_json} JSON files, PNG bytes saved: {saved:,}")
        if saved < 0:
            warn("re-encoding grew the PNGs")

    log(f"Total time {format_total_duration_compact(time.perf_counter() - t_start)}")
    return written


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    print_config_line(
        "run",
        [
            ("CPU cores", os.cpu_count() or 1),
            ("Workers", args.workers),
            ("Optimize", args.optimize),
        ],
        debug=False,
    )

    try:
        run(
            args.blocks,
            args.pack,
            args.output,
            optimize=args.optimize,
            workers=args.workers,
            debug=args.debug,
        )
    except ConfigError as exc:
        error(str(exc))
        return 2
    except BlockifyError as exc:
        error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
