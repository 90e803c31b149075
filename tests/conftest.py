"""Shared fixtures: small PNGs written into tmp_path."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image


def write_rgba(path: Path, rgba: np.ndarray) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8)).save(path)
    return str(path)


def solid(r, g, b, a=255, height=16, width=16):
    """Uniform RGBA array."""
    return np.full((height, width, 4), [r, g, b, a], dtype=np.uint8)


def read_rgba(path) -> np.ndarray:
    with Image.open(path) as im:
        return np.array(im.convert("RGBA"), dtype=np.uint8)


@pytest.fixture
def block_dir(tmp_path):
    d = tmp_path / "blocks"
    d.mkdir()
    return d


@pytest.fixture
def pack_dir(tmp_path):
    d = tmp_path / "pack"
    d.mkdir()
    return d
