"""
Solar Position

Sun position from a site and a standard (clock) time, following Duffie &
Beckman, "Solar Engineering of Thermal Processes".

Conventions:
- Angles are in radians.
- Longitude and standard meridian are positive towards the West
  (Radiance's convention, opposite to EPW files). The standard meridian is
  ``-15 deg * timezone`` (e.g. GMT+1 is -15 deg).
- Days of the year are zero-based and fractional (see ``SkyDate.day_of_year``).
- Directions use X = East, Y = North, Z = up; azimuths are measured
  clockwise from North.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from perezsky.calendar import SkyDate
from perezsky.errors import DomainError, DomainErrorCause
from perezsky.geometry import Vector3

# W/m2
SOLAR_CONSTANT = 1367.0

MINUTES_PER_DAY = 24.0 * 60.0


def air_mass(solar_zenith: float) -> float:
    """
    Relative optical air mass (Kasten & Young form, as in Radiance).

    Differs from Duffie & Beckman eq. 1.5.1 only near the horizon.
    """
    return 1.0 / (math.cos(solar_zenith) + 0.15 * (93.885 - math.degrees(solar_zenith)) ** -1.253)


def _b(n: float) -> float:
    # Equation 1.4.2
    return (n - 1.0) * 2.0 * math.pi / 365.0


def equation_of_time(n: float) -> float:
    """Equation of time in minutes for day of year ``n``."""
    b = _b(n)
    return 229.2 * (
        0.000075
        + 0.001868 * math.cos(b)
        - 0.032077 * math.sin(b)
        - 0.014615 * math.cos(2.0 * b)
        - 0.04089 * math.sin(2.0 * b)
    )


def declination(n: float) -> float:
    """Solar declination (Equation 1.6.1b)."""
    b = _b(n)
    return (
        0.006918
        - 0.399912 * math.cos(b)
        + 0.070257 * math.sin(b)
        - 0.006758 * math.cos(2.0 * b)
        + 0.000907 * math.sin(2.0 * b)
        - 0.002697 * math.cos(3.0 * b)
        + 0.00148 * math.sin(3.0 * b)
    )


def normal_extraterrestrial_radiation(n: float) -> float:
    """Extraterrestrial irradiance on a plane normal to the sun, W/m2 (Equation 1.4.1b)."""
    b = _b(n)
    aux = (
        1.000110
        + 0.034221 * math.cos(b)
        + 0.001280 * math.sin(b)
        + 0.000719 * math.cos(2.0 * b)
        + 0.000077 * math.sin(2.0 * b)
    )
    return SOLAR_CONSTANT * aux


def _wrap_angle(angle: float) -> float:
    """Wrap to [-pi, pi)."""
    return (angle + math.pi) % (2.0 * math.pi) - math.pi


@dataclass(frozen=True)
class Location:
    """Site on Earth. Latitude is positive North; longitude and meridian positive West."""
    latitude: float
    longitude: float
    standard_meridian: float

    def __post_init__(self):
        lat = float(self.latitude)
        if not math.isfinite(lat) or abs(lat) > math.pi / 2.0:
            raise DomainError(
                DomainErrorCause.INVALID_LATITUDE,
                f"Latitude must be within [-pi/2, pi/2] radians, got {self.latitude}",
            )
        if not (math.isfinite(float(self.longitude)) and math.isfinite(float(self.standard_meridian))):
            raise ValueError("Longitude and standard meridian must be finite")

    @classmethod
    def from_degrees(cls, latitude_deg: float, longitude_deg: float, standard_meridian_deg: float) -> "Location":
        return cls(
            latitude=math.radians(latitude_deg),
            longitude=math.radians(longitude_deg),
            standard_meridian=math.radians(standard_meridian_deg),
        )


@dataclass(frozen=True)
class SolarPosition:
    """Instantaneous sun geometry."""
    zenith: float
    azimuth: float  # clockwise from North, [0, 2*pi)
    direction: Vector3  # unit vector towards the sun
    declination: float
    hour_angle: float
    solar_time: float  # day of year, solar time

    @property
    def altitude(self) -> float:
        return math.pi / 2.0 - self.zenith

    @property
    def is_above_horizon(self) -> bool:
        return self.zenith < math.pi / 2.0


@dataclass(frozen=True)
class Solar:
    """Solar geometry bound to a :class:`Location`."""
    location: Location

    def solar_standard_time_difference(self, n: float) -> float:
        """Solar time minus standard time, in minutes."""
        meridian_offset = _wrap_angle(self.location.standard_meridian - self.location.longitude)
        return 4.0 * math.degrees(meridian_offset) + equation_of_time(n)

    def solar_time(self, n_standard: float) -> float:
        """Convert a standard-time day of year into solar time."""
        return n_standard + self.solar_standard_time_difference(n_standard) / MINUTES_PER_DAY

    def standard_time(self, n_solar: float) -> float:
        """Convert a solar-time day of year into standard time."""
        return n_solar - self.solar_standard_time_difference(n_solar) / MINUTES_PER_DAY

    @staticmethod
    def hour_angle(n_solar: float) -> float:
        """Hour angle: zero at solar noon, negative in the morning, 15 deg per hour."""
        solar_hour = 24.0 * (n_solar % 1.0)
        return math.radians((solar_hour - 12.0) * 15.0)

    def sunrise_sunset(self, n_solar: float) -> Tuple[float, float]:
        """
        Sunrise and sunset of day ``n_solar``, as solar-time days of the year
        (Equation 1.6.10).

        During polar night both values collapse on solar noon; during polar
        day they span the whole day.
        """
        delta = declination(n_solar)
        cos_w = -math.tan(self.location.latitude) * math.tan(delta)
        cos_w = max(-1.0, min(1.0, cos_w))
        half_day_hours = math.degrees(math.acos(cos_w)) / 15.0
        midday = math.floor(n_solar) + 0.5
        return (midday - half_day_hours / 24.0, midday + half_day_hours / 24.0)

    def position_at_solar_time(self, n_solar: float) -> SolarPosition:
        """Sun position at solar-time day of year ``n_solar``. Valid below the horizon too."""
        phi = self.location.latitude
        delta = declination(n_solar)
        omega = self.hour_angle(n_solar)

        sin_phi, cos_phi = math.sin(phi), math.cos(phi)
        sin_delta, cos_delta = math.sin(delta), math.cos(delta)
        cos_omega = math.cos(omega)

        east = -cos_delta * math.sin(omega)
        north = cos_phi * sin_delta - sin_phi * cos_delta * cos_omega
        # Equation 1.6.5
        up = sin_phi * sin_delta + cos_phi * cos_delta * cos_omega

        direction = Vector3(east, north, up).normalize()
        zenith = math.acos(max(-1.0, min(1.0, direction.z)))
        return SolarPosition(
            zenith=zenith,
            azimuth=direction.azimuth(),
            direction=direction,
            declination=delta,
            hour_angle=omega,
            solar_time=n_solar,
        )

    def position(self, date: SkyDate) -> SolarPosition:
        """Sun position for a date given in standard (clock) time."""
        return self.position_at_solar_time(self.solar_time(date.day_of_year()))

    @staticmethod
    def beam_atmosphere_transmittance(sun_direction: Vector3, site_elevation: float = 0.0) -> float:
        """
        Hottel's clear-sky beam transmittance (Equation 2.8.1a), without
        climate-type corrections. Elevation in metres.
        """
        cos_theta = sun_direction.z
        if cos_theta <= 0.0:
            return 0.0
        km = site_elevation / 1000.0
        a0 = 0.4237 - 0.00821 * (6.0 - km) ** 2
        a1 = 0.5055 + 0.00595 * (6.5 - km) ** 2
        k = 0.2711 + 0.01858 * (2.5 - km) ** 2
        return a0 + a1 * math.exp(-k / cos_theta)

    def clear_sky_global_horizontal(self, date: SkyDate, site_elevation: float = 0.0) -> float:
        """Clear-sky global horizontal irradiance in W/m2 (Equations 2.8.1a and 2.8.6)."""
        pos = self.position(date)
        if not pos.is_above_horizon:
            return 0.0
        tb = self.beam_atmosphere_transmittance(pos.direction, site_elevation)
        td = 0.271 - 0.294 * tb
        extra = normal_extraterrestrial_radiation(pos.solar_time)
        return extra * (tb + td) * pos.direction.z


def sun_position(location: Location, date: SkyDate) -> SolarPosition:
    """Sun position at ``location`` for ``date`` in standard time."""
    return Solar(location).position(date)
