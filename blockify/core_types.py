# blockify/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and the shared pixel counter.
"""

import threading
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
RGBATuple = Tuple[int, int, int, int]
LabTuple = Tuple[float, float, float]  # (L*, a*, b*)

U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Mask = NDArray[np.uint8]  # (H, W)
Lab = NDArray[np.float64]  # (..., 3) CIE Lab

# Value objects


@dataclass(frozen=True)
class DistinctColour:
    """
    One colour of a block image ranked by how much it stands out.

    score is the mean dE2000 from this colour to every pixel of its block;
    low means representative, high means visually unique.
    """

    score: float
    rgba: RGBATuple
    lab: LabTuple


@dataclass(frozen=True)
class BlockSignature:
    """A candidate block and its colours, most representative first."""

    path: str
    colours: Tuple[DistinctColour, ...]

    @property
    def head(self) -> DistinctColour:
        return self.colours[0]

    def rest(self) -> "BlockSignature":
        """Drop the head colour. A single remaining colour is kept."""
        if len(self.colours) <= 1:
            return self
        return BlockSignature(self.path, self.colours[1:])


Palette = Tuple[BlockSignature, ...]


class PixelCounter:
    """Running count of destination pixels written, for progress lines."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def add(self, n: int) -> int:
        with self._lock:
            self._value += int(n)
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


__all__ = [
    "RGBTuple",
    "RGBATuple",
    "LabTuple",
    "U8Image",
    "U8Mask",
    "Lab",
    "DistinctColour",
    "BlockSignature",
    "Palette",
    "PixelCounter",
]
