# blockify/colour_convert.py
from __future__ import annotations

"""
Colour conversions and metrics (D65).

Exports:
  unit_rgb_to_lab(r, g, b)
  rgb_to_lab(rgb)
  rgb_to_lab_tuple(r, g, b)
  delta_e2000_pair(lab1, lab2)
  delta_e2000_vec(src_lab, cand_lab)
"""

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .core_types import Lab, LabTuple


# sRGB to linear


def _srgb_to_linear(u: float) -> float:
    """One sRGB channel (non-linear 0..1) to linear 0..1."""
    if u <= 0.04045:
        return u / 12.92
    return ((u + 0.055) / 1.055) ** 2.4


# sRGB to Lab (D65)

# Reference white (D65)
_XN, _YN, _ZN = 0.95047, 1.00000, 1.08883
_EPS, _KAPPA = 216.0 / 24389.0, 24389.0 / 27.0


def _lab_f(t: float) -> float:
    if t > _EPS:
        return t ** (1.0 / 3.0)
    return (_KAPPA * t + 16.0) / 116.0


def unit_rgb_to_lab(r: float, g: float, b: float) -> LabTuple:
    """
    sRGB in 0..1 to CIE Lab (D65, 2 degree observer). Scalar reference.

    Every Lab value in the project is produced here, so equal colours
    always carry bit-identical coordinates whatever array they came from.
    """
    r_lin = _srgb_to_linear(r)
    g_lin = _srgb_to_linear(g)
    b_lin = _srgb_to_linear(b)

    # Linear RGB -> XYZ (D65)
    X = 0.4124564 * r_lin + 0.3575761 * g_lin + 0.1804375 * b_lin
    Y = 0.2126729 * r_lin + 0.7151522 * g_lin + 0.0721750 * b_lin
    Z = 0.0193339 * r_lin + 0.1191920 * g_lin + 0.9503041 * b_lin

    fx, fy, fz = _lab_f(X / _XN), _lab_f(Y / _YN), _lab_f(Z / _ZN)
    return (116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))


def rgb_to_lab(rgb: np.ndarray) -> Lab:
    """
    sRGB to CIE Lab (D65).
    Integer input is read as 0..255, float input as 0..1. Preserves shape (...,3).
    Returns float64.

    Unique colours are converted once with unit_rgb_to_lab and scattered
    back, so the result for a colour does not depend on the input shape.
    """
    arr = np.asarray(rgb)
    if np.issubdtype(arr.dtype, np.integer):
        rgb_f = arr.astype(np.float64) / 255.0
    else:
        rgb_f = arr.astype(np.float64, copy=False)

    flat = rgb_f.reshape(-1, 3)
    if flat.shape[0] == 0:
        return np.zeros(rgb_f.shape, dtype=np.float64)
    uniq, inverse = np.unique(flat, axis=0, return_inverse=True)
    labs = np.array(
        [unit_rgb_to_lab(r, g, b) for r, g, b in uniq.tolist()], dtype=np.float64
    )
    return labs[inverse.reshape(-1)].reshape(rgb_f.shape)


def rgb_to_lab_tuple(r: int, g: int, b: int) -> LabTuple:
    """Lab for a single 8-bit pixel as a plain (L, a, b) float tuple."""
    return unit_rgb_to_lab(int(r) / 255.0, int(g) / 255.0, int(b) / 255.0)


# CIEDE2000


def delta_e2000_pair(
    lab1: Sequence[float] | NDArray[np.floating],
    lab2: Sequence[float] | NDArray[np.floating],
) -> float:
    """
    CIEDE2000 distance between two Lab colours.
    Scalar reference implementation.
    """
    L1, a1, b1 = float(lab1[0]), float(lab1[1]), float(lab1[2])
    L2, a2, b2 = float(lab2[0]), float(lab2[1]), float(lab2[2])

    C1 = math.hypot(a1, b1)
    C2 = math.hypot(a2, b2)
    C_bar = 0.5 * (C1 + C2)
    G = 0.5 * (1.0 - math.sqrt((C_bar**7) / (C_bar**7 + 25.0**7)))

    a1p = (1.0 + G) * a1
    a2p = (1.0 + G) * a2
    C1p = math.hypot(a1p, b1)
    C2p = math.hypot(a2p, b2)

    def _hue(a_val: float, b_val: float) -> float:
        if a_val == 0.0 and b_val == 0.0:
            return 0.0
        ang = math.degrees(math.atan2(b_val, a_val))
        return ang + 360.0 if ang < 0.0 else ang

    h1p = _hue(a1p, b1)
    h2p = _hue(a2p, b2)

    dLp = L2 - L1
    dCp = C2p - C1p

    dhp = h2p - h1p
    if C1p * C2p == 0.0:
        dhp = 0.0
    elif dhp > 180.0:
        dhp -= 360.0
    elif dhp < -180.0:
        dhp += 360.0

    dHp = 2.0 * math.sqrt(C1p * C2p) * math.sin(math.radians(dhp / 2.0))

    L_bar = 0.5 * (L1 + L2)
    C_bar_p = 0.5 * (C1p + C2p)

    if C1p * C2p == 0.0:
        h_bar_p = h1p + h2p
    else:
        h_sum = h1p + h2p
        h_diff = abs(h1p - h2p)
        if h_diff <= 180.0:
            h_bar_p = 0.5 * h_sum
        elif h_sum < 360.0:
            h_bar_p = 0.5 * (h_sum + 360.0)
        else:
            h_bar_p = 0.5 * (h_sum - 360.0)

    T = (
        1.0
        - 0.17 * math.cos(math.radians(h_bar_p - 30.0))
        + 0.24 * math.cos(math.radians(2.0 * h_bar_p))
        + 0.32 * math.cos(math.radians(3.0 * h_bar_p + 6.0))
        - 0.20 * math.cos(math.radians(4.0 * h_bar_p - 63.0))
    )

    d_theta = 30.0 * math.exp(-(((h_bar_p - 275.0) / 25.0) ** 2.0))
    R_c = 2.0 * math.sqrt((C_bar_p**7) / (C_bar_p**7 + 25.0**7))

    S_l = 1.0 + (0.015 * ((L_bar - 50.0) ** 2.0)) / math.sqrt(
        20.0 + ((L_bar - 50.0) ** 2.0)
    )
    S_c = 1.0 + 0.045 * C_bar_p
    S_h = 1.0 + 0.015 * C_bar_p * T
    R_t = -math.sin(math.radians(2.0 * d_theta)) * R_c

    kL = kC = kH = 1.0
    dE_sq = (
        (dLp / (kL * S_l)) ** 2
        + (dCp / (kC * S_c)) ** 2
        + (dHp / (kH * S_h)) ** 2
        + R_t * (dCp / (kC * S_c)) * (dHp / (kH * S_h))
    )
    # rounding can leave a tiny negative when the inputs are almost equal
    return math.sqrt(max(dE_sq, 0.0))


def delta_e2000_vec(src_lab: Lab | LabTuple, cand_lab: Lab) -> NDArray[np.float64]:
    """
    Row-wise CIEDE2000 for one source Lab vs many candidate Labs.
    Uses the scalar routine per row, so every value is bit-identical to
    delta_e2000_pair on the same inputs.

    Args:
      src_lab: Lab [3]
      cand_lab: Lab [N,3]
    Returns:
      float64 array [N]
    """
    s = np.asarray(src_lab, dtype=np.float64).reshape(3)
    cands = np.asarray(cand_lab, dtype=np.float64).reshape(-1, 3)
    out = np.empty((cands.shape[0],), dtype=np.float64)
    for i in range(cands.shape[0]):
        out[i] = delta_e2000_pair(s, cands[i])
    return out


__all__ = [
    "unit_rgb_to_lab",
    "rgb_to_lab",
    "rgb_to_lab_tuple",
    "delta_e2000_pair",
    "delta_e2000_vec",
]
