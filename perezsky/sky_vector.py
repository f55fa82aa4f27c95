"""
Sky Vectors

Discretises a Perez sky over a Reinhart subdivision, either as plain
patch radiances (``build_sky_vector``) or in the daylight-coefficient
layout written by Radiance's ``gendaymtx`` (``gen_sky_vector``): element 0
is the ground, followed by the sky patches, with the sun spread over the
patches closest to it.
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from loguru import logger

from perezsky.calendar import SkyDate
from perezsky.errors import DomainError, DomainErrorCause
from perezsky.geometry import Vector3
from perezsky.perez import SkyFunction, build_sky_function, precipitable_water_content
from perezsky.perez_coefficients import WHITE_EFFICACY, SkyUnits, direct_efficacy, diffuse_efficacy
from perezsky.solar import Location, sun_position
from perezsky.subdivision import SkySubdivision, build_subdivision
from perezsky.tolerance import DEFAULT_DEW_POINT, NIGHT_IRRADIANCE

# Sun weights are 1 / (offset - cos).
_SUN_WEIGHT_OFFSET = 1.002


@dataclass(frozen=True)
class SkyVectorOptions:
    units: SkyUnits = SkyUnits.SOLAR
    albedo: float = 0.2
    add_sky: bool = True
    add_sun: bool = True
    dew_point: float = DEFAULT_DEW_POINT
    n_suns: int = 4

    def __post_init__(self):
        if not 0.0 <= float(self.albedo) <= 1.0:
            raise ValueError(f"albedo must be within [0, 1], got {self.albedo}")
        if int(self.n_suns) < 1:
            raise ValueError(f"n_suns must be >= 1, got {self.n_suns}")


def _check_non_negative(diffuse_horizontal: float, direct_normal: float) -> None:
    # Zero irradiance is a valid night-time step here.
    if not math.isfinite(diffuse_horizontal) or diffuse_horizontal < 0.0:
        raise DomainError(
            DomainErrorCause.NON_POSITIVE_DIFFUSE_HORIZONTAL,
            f"Diffuse horizontal irradiance must be a non-negative number, got {diffuse_horizontal}",
        )
    if not math.isfinite(direct_normal) or direct_normal < 0.0:
        raise DomainError(
            DomainErrorCause.NEGATIVE_DIRECT_NORMAL,
            f"Direct normal irradiance must be a non-negative number, got {direct_normal}",
        )


def build_sky_vector(
    sky_function: SkyFunction,
    subdivision: SkySubdivision,
    workers: Optional[int] = None,
) -> np.ndarray:
    """
    Sky radiance at every patch centre, ordered by patch index.

    With ``workers > 1`` the rows of the subdivision are evaluated on a
    thread pool.
    """
    directions = subdivision.directions()
    if workers is None or workers == 1:
        return sky_function.evaluate_many(directions)
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    bounds = list(subdivision.row_start) + [len(subdivision)]
    chunks = [directions[lo:hi] for lo, hi in zip(bounds[:-1], bounds[1:])]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        parts: List[np.ndarray] = list(pool.map(sky_function.evaluate_many, chunks))
    return np.concatenate(parts)


def sky_vector_index(subdivision: SkySubdivision, direction: Vector3) -> int:
    """Element of a ``gen_sky_vector`` result that receives ``direction``."""
    d = direction.normalize()
    if d.z < 0.0:
        return 0
    return subdivision.lookup(d) + 1


def gen_sky_vector(
    location: Location,
    date: SkyDate,
    diffuse_horizontal: float,
    direct_normal: float,
    mf: int = 1,
    options: SkyVectorOptions = SkyVectorOptions(),
) -> np.ndarray:
    """
    Ground + sky radiances for one time step (W/(m2 sr), or visible radiance
    for ``SkyUnits.VISIBLE``). Night-time steps return zeros.
    """
    out = np.zeros(len(build_subdivision(mf)) + 1, dtype=float)
    update_sky_vector(out, location, date, diffuse_horizontal, direct_normal, mf=mf, options=options)
    return out


def update_sky_vector(
    out: np.ndarray,
    location: Location,
    date: SkyDate,
    diffuse_horizontal: float,
    direct_normal: float,
    mf: int = 1,
    options: SkyVectorOptions = SkyVectorOptions(),
) -> np.ndarray:
    """
    In-place ``gen_sky_vector``: overwrite ``out`` with the sky of this time
    step. ``out`` must hold one ground element plus one element per patch.

    Raises:
        DomainError: negative or non-finite irradiance.
        ValueError: ``out`` has the wrong size.
    """
    subdivision = build_subdivision(mf)
    if out.shape != (len(subdivision) + 1,):
        raise ValueError(
            f"Sky vector for MF={mf} needs {len(subdivision) + 1} elements, got shape {out.shape}"
        )
    diffuse_horizontal = float(diffuse_horizontal)
    direct_normal = float(direct_normal)
    _check_non_negative(diffuse_horizontal, direct_normal)
    out[:] = 0.0

    if diffuse_horizontal + direct_normal < NIGHT_IRRADIANCE:
        logger.debug("No irradiance at {}; empty sky vector", date)
        return out

    if not sun_position(location, date).is_above_horizon:
        logger.debug("Sun below the horizon at {}; empty sky vector", date)
        return out

    sky = build_sky_function(location, date, options.dew_point, diffuse_horizontal, direct_normal, options.units)
    pos = sky.solar_position

    apwc = precipitable_water_content(options.dew_point)
    cos_zenith = pos.direction.z
    diffuse_illuminance = diffuse_horizontal * diffuse_efficacy(
        options.units, sky.clearness_bin, apwc, cos_zenith, sky.brightness
    )
    direct_illuminance = direct_normal * direct_efficacy(
        options.units, sky.clearness_bin, apwc, sky.zenith, sky.brightness
    )

    if options.albedo > 1e-8:
        horizontal = diffuse_illuminance
        if cos_zenith > 0.0:
            horizontal += direct_illuminance * cos_zenith
        out[0] = options.albedo * horizontal / math.pi / WHITE_EFFICACY

    if options.add_sky:
        out[1:] += build_sky_vector(sky, subdivision)

    if options.add_sun and direct_normal > NIGHT_IRRADIANCE:
        _add_sun(out, subdivision, pos.direction, direct_illuminance, options.n_suns)

    return out


def _add_sun(
    out: np.ndarray,
    subdivision: SkySubdivision,
    sun: Vector3,
    direct_illuminance: float,
    n_suns: int,
) -> None:
    cosines = subdivision.directions() @ sun.to_array()
    nearest = np.argsort(-cosines, kind="stable")[:n_suns]
    weights = 1.0 / (_SUN_WEIGHT_OFFSET - cosines[nearest])
    total = float(np.sum(weights))
    solid_angles = subdivision.solid_angles()
    for idx, w in zip(nearest, weights):
        out[int(idx) + 1] += w * direct_illuminance / (WHITE_EFFICACY * total) / solid_angles[idx]
