# blockify/resolve.py
from __future__ import annotations

"""
Closest-block lookup.

Candidates are compared by dE2000 between the query and their most
representative colour. Exact ties move on to each tied candidate's next
colour; once no tied candidate has another colour, the path that sorts
first wins. Pure function of (query, palette).
"""

from typing import List, Sequence, Tuple

from .colour_convert import delta_e2000_vec
from .core_types import BlockSignature, LabTuple


def _tied_on_head(
    lab: LabTuple, candidates: Sequence[BlockSignature]
) -> List[BlockSignature]:
    """Candidates whose head colour is exactly the minimum distance from lab."""
    heads = [sig.head.lab for sig in candidates]
    distances = delta_e2000_vec(lab, heads)
    ranked: List[Tuple[float, BlockSignature]] = sorted(
        zip(distances.tolist(), candidates), key=lambda pair: pair[0]
    )
    best = ranked[0][0]
    return [sig for d, sig in ranked if d == best]


def closest_block(lab: LabTuple, palette: Sequence[BlockSignature]) -> str:
    """
    Path of the block that best matches lab.

    Raises:
      ValueError: palette is empty
    """
    if not palette:
        raise ValueError("cannot resolve a colour against an empty palette")

    working: List[BlockSignature] = list(palette)
    while True:
        tied = _tied_on_head(lab, working)
        if len(tied) == 1:
            return tied[0].path
        if not any(len(sig.colours) > 1 for sig in tied):
            return min(sig.path for sig in tied)
        # candidates down to their last colour keep competing with it
        working = [sig.rest() for sig in tied]


__all__ = ["closest_block"]
