"""
Reinhart Sky Subdivision

Tregenza's 145-patch sky (MF=1) and Reinhart's refinement, where every
patch is split MF times in altitude and MF times in azimuth. Patch layout
matches Radiance's ``reinhart.cal``/``reinsrc.cal`` without the ground
bin: rows are counted from the horizon, patch 0 of every row is centred
on North (+Y), azimuth grows clockwise and the zenith cap comes last.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

import numpy as np

from perezsky.errors import DomainError, DomainErrorCause
from perezsky.geometry import Vector3

# Patches per Tregenza row, from the horizon to the last row below the cap.
TNAZ: Tuple[int, ...] = (30, 30, 24, 24, 18, 12, 6)


def row_height(mf: int) -> float:
    """Altitude span of a row. The cap is half a row high."""
    return (math.pi / 2.0) / (len(TNAZ) * mf + 0.5)


def bins_in_row(mf: int, row: int) -> int:
    n_rows = len(TNAZ) * mf
    if row == n_rows:
        return 1
    if not 0 <= row < n_rows:
        raise IndexError(f"Row {row} out of range for MF={mf}")
    return mf * TNAZ[int((row + 0.5) / mf)]


def patch_count(mf: int) -> int:
    """Number of sky patches (no ground): 144*MF^2 + 1."""
    return sum(TNAZ) * mf * mf + 1


@dataclass(frozen=True)
class SkyPatch:
    index: int
    row: int
    center: Vector3
    solid_angle: float
    altitude_range: Tuple[float, float]
    azimuth_range: Tuple[float, float]  # may start below 0 for patches centred on North


@dataclass(frozen=True)
class SkySubdivision:
    """Discretised upper hemisphere. Patch indices are 0..len(self)-1."""
    mf: int
    patches: Tuple[SkyPatch, ...]
    row_start: Tuple[int, ...]
    row_bins: Tuple[int, ...]
    row_upper_sines: np.ndarray  # upper bound of every row below the cap
    _directions: np.ndarray
    _solid_angles: np.ndarray

    def __len__(self) -> int:
        return len(self.patches)

    def directions(self) -> np.ndarray:
        """Patch centres as an (N, 3) array."""
        return self._directions

    def solid_angles(self) -> np.ndarray:
        return self._solid_angles

    def lookup(self, direction: Vector3) -> int:
        """Index of the patch containing ``direction``."""
        d = direction.normalize()
        if d.z < 0.0:
            raise ValueError(f"Direction {d.to_tuple()} is below the horizon")
        row = int(np.searchsorted(self.row_upper_sines, d.z, side="right"))
        n = self.row_bins[row]
        if n == 1:
            return self.row_start[row]
        width = 2.0 * math.pi / n
        k = int(math.floor((d.azimuth() + width / 2.0) / width)) % n
        return self.row_start[row] + k


@lru_cache(maxsize=8)
def _build(mf: int) -> SkySubdivision:
    h = row_height(mf)
    n_rows = len(TNAZ) * mf
    patches: List[SkyPatch] = []
    row_start: List[int] = []
    row_bins: List[int] = []
    uppers: List[float] = []

    for row in range(n_rows):
        n = bins_in_row(mf, row)
        low, top = row * h, (row + 1) * h
        alt = (low + top) / 2.0
        width = 2.0 * math.pi / n
        omega = width * (math.sin(top) - math.sin(low))
        row_start.append(len(patches))
        row_bins.append(n)
        uppers.append(math.sin(top))
        for k in range(n):
            az = k * width
            patches.append(
                SkyPatch(
                    index=len(patches),
                    row=row,
                    center=Vector3.from_altitude_azimuth(alt, az),
                    solid_angle=omega,
                    altitude_range=(low, top),
                    azimuth_range=(az - width / 2.0, az + width / 2.0),
                )
            )

    # Cap
    row_start.append(len(patches))
    row_bins.append(1)
    patches.append(
        SkyPatch(
            index=len(patches),
            row=n_rows,
            center=Vector3.up(),
            solid_angle=2.0 * math.pi * (1.0 - math.cos(h / 2.0)),
            altitude_range=(math.pi / 2.0 - h / 2.0, math.pi / 2.0),
            azimuth_range=(0.0, 2.0 * math.pi),
        )
    )

    directions = np.array([p.center.to_tuple() for p in patches], dtype=float)
    solid_angles = np.array([p.solid_angle for p in patches], dtype=float)
    upper_sines = np.asarray(uppers, dtype=float)
    for arr in (directions, solid_angles, upper_sines):
        arr.setflags(write=False)

    return SkySubdivision(
        mf=mf,
        patches=tuple(patches),
        row_start=tuple(row_start),
        row_bins=tuple(row_bins),
        row_upper_sines=upper_sines,
        _directions=directions,
        _solid_angles=solid_angles,
    )


def build_subdivision(mf: int) -> SkySubdivision:
    """
    Reinhart subdivision with multiplication factor ``mf`` (1 is Tregenza).

    Subdivisions are immutable and cached, so repeated calls share one object.
    """
    if isinstance(mf, bool) or not isinstance(mf, (int, np.integer)) or mf < 1:
        raise DomainError(
            DomainErrorCause.INVALID_SUBDIVISION_FACTOR,
            f"Subdivision factor must be an integer >= 1, got {mf!r}",
        )
    return _build(int(mf))
