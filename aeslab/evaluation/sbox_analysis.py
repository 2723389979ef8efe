"""Differential / linear analysis of the AES S-box tables.

Recomputes DDT and LAT extremes from the lookup tables with numpy and checks
that SBOX and INV_SBOX are mutual inverses. For the AES S-box the expected
values are DDT max 4 and LAT max |2^n * bias| of 32.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Sequence

import numpy as np

from aeslab.cipher.tables import INV_SBOX, SBOX


@dataclass
class SBoxAnalysisResult:
    """Structured result of S-box differential/linear analysis."""
    name: str
    sbox_size: int
    ddt_max: int                # Max DDT entry excluding dx=0 (ideal 8-bit: 4)
    lat_max_abs: int            # Max |#agree - #disagree| over non-zero masks
    is_bijective: bool
    inverse_matches: bool       # INV_SBOX[SBOX[x]] == x for every x
    differential_uniformity: str
    linearity: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        bij = "bijective" if self.is_bijective else "NOT bijective"
        inv = "inverse ok" if self.inverse_matches else "inverse MISMATCH"
        return (
            f"{self.name} ({self.sbox_size}-entry): "
            f"DDT_max={self.ddt_max} ({self.differential_uniformity}), "
            f"LAT_max={self.lat_max_abs} ({self.linearity}), {bij}, {inv}"
        )


_PARITY = np.array([bin(i).count("1") & 1 for i in range(256)], dtype=np.int8)


def sbox_ddt_max(sbox: Sequence[int]) -> int:
    """Return max entry in the difference distribution table, dx != 0."""
    s = np.asarray(sbox, dtype=np.int64)
    n = len(s)
    x = np.arange(n)
    best = 0
    for dx in range(1, n):
        counts = np.bincount(s ^ s[x ^ dx], minlength=n)
        best = max(best, int(counts.max()))
    return best


def sbox_lat_max_abs(sbox: Sequence[int]) -> int:
    """Return max |sum_x (-1)^(a.x ^ b.S(x))| for non-zero masks a, b."""
    s = np.asarray(sbox, dtype=np.int64)
    n = len(s)
    masks = np.arange(n)
    # signs_in[a, x] = (-1)^(a.x); signs_out[b, x] = (-1)^(b.S(x))
    signs_in = 1 - 2 * _PARITY[np.bitwise_and.outer(masks, masks)].astype(np.int64)
    signs_out = 1 - 2 * _PARITY[np.bitwise_and.outer(masks, s)].astype(np.int64)
    walsh = signs_in @ signs_out.T
    return int(np.abs(walsh[1:, 1:]).max())


def _rate_differential_uniformity(ddt_max: int) -> str:
    if ddt_max <= 4:
        return "good"
    elif ddt_max <= 8:
        return "fair"
    return "poor"


def _rate_linearity(lat_max: int) -> str:
    if lat_max <= 32:
        return "good"
    elif lat_max <= 64:
        return "fair"
    return "poor"


def analyze_sbox(
    sbox: Sequence[int] = SBOX,
    inv_sbox: Sequence[int] = INV_SBOX,
    *,
    name: str = "aes.sbox",
) -> SBoxAnalysisResult:
    """Analyze an 8-bit S-box and its claimed inverse."""
    if len(sbox) != 256 or len(inv_sbox) != 256:
        raise ValueError("expected 256-entry S-box tables")

    ddt = sbox_ddt_max(sbox)
    lat = sbox_lat_max_abs(sbox)

    return SBoxAnalysisResult(
        name=name,
        sbox_size=len(sbox),
        ddt_max=ddt,
        lat_max_abs=lat,
        is_bijective=len(set(sbox)) == len(sbox),
        inverse_matches=all(inv_sbox[sbox[x]] == x for x in range(256)),
        differential_uniformity=_rate_differential_uniformity(ddt),
        linearity=_rate_linearity(lat),
    )
