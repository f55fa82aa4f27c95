"""
Perez All-Weather Sky

Continuous sky radiance distribution calibrated against measured
diffuse-horizontal and direct-normal irradiance (Perez, Seals & Michalsky,
1993), following Radiance's ``gendaylit``/``gendaymtx`` conventions:

- the sun is never treated as closer than 3 degrees to the zenith,
- the brightness and clearness indices are clamped as in ``gendaymtx``,
- the distribution is normalised so that the horizontal diffuse
  irradiance (or illuminance) integrated over the Tregenza sky matches the
  measured value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

import numpy as np
from loguru import logger

from perezsky.calendar import SkyDate
from perezsky.errors import DomainError, DomainErrorCause
from perezsky.geometry import Vector3
from perezsky.perez_coefficients import (
    PEREZ_COEFFICIENTS,
    WHITE_EFFICACY,
    SkyUnits,
    clearness_bin,
    diffuse_efficacy,
)
from perezsky.solar import Location, SolarPosition, air_mass, normal_extraterrestrial_radiation, sun_position
from perezsky.subdivision import build_subdivision
from perezsky.tolerance import (
    MAX_SKY_CLEARNESS,
    MAX_SUN_ZENITH,
    MIN_COS_ZETA,
    MIN_NORMALISATION_INTEGRAL,
    MIN_SKY_BRIGHTNESS,
    MIN_SUN_ZENITH,
)

__all__ = [
    "PerezParameters",
    "SkyFunction",
    "SkyUnits",
    "build_sky_function",
    "model_zenith",
    "perez_parameters",
    "precipitable_water_content",
    "sky_brightness",
    "sky_clearness",
]

_KAPPA = 1.041


def model_zenith(cos_zenith: float) -> float:
    """Sun zenith as seen by the Perez model: within [3 deg, 90 deg]."""
    if cos_zenith <= 0.0:
        return MAX_SUN_ZENITH
    if cos_zenith >= math.cos(MIN_SUN_ZENITH):
        return MIN_SUN_ZENITH
    return math.acos(cos_zenith)


def precipitable_water_content(dew_point: float) -> float:
    """Atmospheric precipitable water (cm) from the surface dew point (C)."""
    return math.exp(0.07 * dew_point - 0.075)


def sky_clearness(diffuse_horizontal: float, direct_normal: float, zenith: float) -> float:
    """Perez clearness index epsilon, capped at 11.9."""
    z3 = _KAPPA * zenith**3
    eps = ((diffuse_horizontal + direct_normal) / diffuse_horizontal + z3) / (1.0 + z3)
    return min(eps, MAX_SKY_CLEARNESS)


def sky_brightness(diffuse_horizontal: float, zenith: float, n_solar: float) -> float:
    """Perez brightness index delta, floored at 0.01."""
    delta = diffuse_horizontal * air_mass(zenith) / normal_extraterrestrial_radiation(n_solar)
    return max(delta, MIN_SKY_BRIGHTNESS)


@dataclass(frozen=True)
class PerezParameters:
    a: float
    b: float
    c: float
    d: float
    e: float


def perez_parameters(zenith: float, epsilon: float, delta: float) -> PerezParameters:
    """
    Parameters a..e of the Perez luminance function.

    ``zenith`` is the model zenith (radians). The overcast bin uses the
    exponential forms of c and d; c and d are not clamped.
    """
    if 1.065 < epsilon < 2.8 and delta < 0.2:
        delta = 0.2

    index = clearness_bin(epsilon)
    rows = PEREZ_COEFFICIENTS[index]

    def linear(x) -> float:
        return x[0] + x[1] * zenith + delta * (x[2] + x[3] * zenith)

    a = linear(rows[0])
    b = linear(rows[1])
    e = linear(rows[4])
    if index == 0:
        xc, xd = rows[2], rows[3]
        c = math.exp((delta * (xc[0] + xc[1] * zenith)) ** xc[2]) - xc[3]
        d = -math.exp(delta * (xd[0] + xd[1] * zenith)) + xd[2] + delta * xd[3]
    else:
        c = linear(rows[2])
        d = linear(rows[3])
    return PerezParameters(a=a, b=b, c=c, d=d, e=e)


@dataclass(frozen=True)
class SkyFunction:
    """
    Normalised Perez sky for one instant.

    ``evaluate`` returns radiance in W/(m2 sr); for ``SkyUnits.VISIBLE`` the
    value is visible radiance (multiply by 179 for cd/m2).
    """
    sun_direction: Vector3
    parameters: PerezParameters
    normalisation: float
    units: SkyUnits
    solar_position: SolarPosition
    zenith: float
    clearness: float
    brightness: float
    clearness_bin: int
    diffuse_horizontal: float
    direct_normal: float
    dew_point: float

    def relative(self, direction: Vector3) -> float:
        """Unnormalised luminance. Never raises; negative and non-finite results become 0."""
        p = self.parameters
        d = direction.normalize()
        cos_gamma = max(-1.0, min(1.0, d.dot(self.sun_direction)))
        gamma = math.acos(cos_gamma)
        cos_zeta = max(d.z, MIN_COS_ZETA)
        try:
            gradation = 1.0 + p.a * math.exp(p.b / cos_zeta)
            indicatrix = 1.0 + p.c * math.exp(p.d * gamma) + p.e * cos_gamma * cos_gamma
            value = gradation * indicatrix
        except OverflowError:
            return 0.0
        if not math.isfinite(value):
            return 0.0
        return max(value, 0.0)

    def evaluate(self, direction: Vector3) -> float:
        return self.normalisation * self.relative(direction)

    def evaluate_many(self, directions: np.ndarray) -> np.ndarray:
        """Vectorised ``evaluate`` over an (N, 3) array of directions."""
        dirs = np.asarray(directions, dtype=float).reshape(-1, 3)
        p = self.parameters
        lengths = np.linalg.norm(dirs, axis=1)
        degenerate = lengths < 1e-10
        unit = dirs / np.where(degenerate, 1.0, lengths)[:, None]
        safe = np.where(degenerate[:, None], np.array([0.0, 0.0, 1.0]), unit)
        sun = self.sun_direction.to_array()
        cos_gamma = np.clip(safe @ sun, -1.0, 1.0)
        gamma = np.arccos(cos_gamma)
        cos_zeta = np.maximum(safe[:, 2], MIN_COS_ZETA)
        with np.errstate(over="ignore", invalid="ignore"):
            values = (1.0 + p.a * np.exp(p.b / cos_zeta)) * (
                1.0 + p.c * np.exp(p.d * gamma) + p.e * cos_gamma**2
            )
        values = np.where(np.isfinite(values), np.maximum(values, 0.0), 0.0)
        return self.normalisation * values


def _check_irradiance(diffuse_horizontal: float, direct_normal: float) -> None:
    if not math.isfinite(diffuse_horizontal) or diffuse_horizontal <= 0.0:
        raise DomainError(
            DomainErrorCause.NON_POSITIVE_DIFFUSE_HORIZONTAL,
            f"Diffuse horizontal irradiance must be a positive number, got {diffuse_horizontal}",
        )
    if not math.isfinite(direct_normal) or direct_normal < 0.0:
        raise DomainError(
            DomainErrorCause.NEGATIVE_DIRECT_NORMAL,
            f"Direct normal irradiance must be a non-negative number, got {direct_normal}",
        )


def _horizontal_integral(relative: SkyFunction) -> float:
    sky = build_subdivision(1)
    values = relative.evaluate_many(sky.directions())
    return float(np.sum(values * sky.solid_angles() * sky.directions()[:, 2]))


def build_sky_function(
    location: Location,
    date: SkyDate,
    dew_point: float,
    diffuse_horizontal: float,
    direct_normal: float,
    units: SkyUnits,
) -> SkyFunction:
    """
    Calibrate a Perez sky for ``location`` at ``date`` (standard time).

    Raises:
        DomainError: diffuse horizontal <= 0 or direct normal < 0.
        ValueError: non-finite dew point.
    """
    diffuse_horizontal = float(diffuse_horizontal)
    direct_normal = float(direct_normal)
    _check_irradiance(diffuse_horizontal, direct_normal)
    if not math.isfinite(float(dew_point)):
        raise ValueError(f"Dew point must be finite, got {dew_point}")

    pos = sun_position(location, date)
    cos_zenith = pos.direction.z
    zenith = model_zenith(cos_zenith)

    epsilon = sky_clearness(diffuse_horizontal, direct_normal, zenith)
    delta = sky_brightness(diffuse_horizontal, zenith, pos.solar_time)
    index = clearness_bin(epsilon)
    params = perez_parameters(zenith, epsilon, delta)

    unscaled = SkyFunction(
        sun_direction=pos.direction,
        parameters=params,
        normalisation=1.0,
        units=units,
        solar_position=pos,
        zenith=zenith,
        clearness=epsilon,
        brightness=delta,
        clearness_bin=index,
        diffuse_horizontal=diffuse_horizontal,
        direct_normal=direct_normal,
        dew_point=float(dew_point),
    )

    apwc = precipitable_water_content(float(dew_point))
    target = diffuse_horizontal * diffuse_efficacy(units, index, apwc, cos_zenith, delta)
    integral = _horizontal_integral(unscaled)
    if integral > MIN_NORMALISATION_INTEGRAL:
        norm = target / (integral * WHITE_EFFICACY)
    else:
        logger.debug("Perez sky integral {:.3e} too small; sky is black", integral)
        norm = 0.0

    logger.debug(
        "Perez sky: zenith={:.4f} eps={:.4f} delta={:.4f} bin={} params={} norm={:.6g}",
        zenith,
        epsilon,
        delta,
        index,
        params,
        norm,
    )
    return replace(unscaled, normalisation=norm)
