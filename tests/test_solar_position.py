from __future__ import annotations

import math

import pytest

from perezsky.calendar import SkyDate
from perezsky.errors import DomainError, DomainErrorCause
from perezsky.geometry import Vector3
from perezsky.solar import (
    Location,
    Solar,
    air_mass,
    declination,
    normal_extraterrestrial_radiation,
    sun_position,
)

# Worked examples from Duffie & Beckman, "Solar Engineering of Thermal Processes".


def test_solar_time_madison() -> None:
    madison = Solar(Location.from_degrees(43.0, 89.4, 90.0))
    n = SkyDate(2, 3, 10.5).day_of_year()
    solar = madison.solar_time(n)
    minutes = 24.0 * 60.0 * (solar % 1.0)
    assert minutes == pytest.approx(10 * 60 + 19, abs=0.5)
    assert madison.standard_time(solar) == pytest.approx(n, abs=1e-4)


@pytest.mark.parametrize(
    "month,day,expected_deg",
    [
        (1, 17, -20.9),
        (2, 16, -13.0),
        (3, 16, -2.4),
        (4, 15, 9.4),
        (5, 15, 18.8),
        (6, 11, 23.1),
        (7, 17, 21.2),
        (8, 16, 13.5),
        (9, 15, 2.2),
        (10, 15, -9.6),
        (11, 14, -18.9),
        (12, 10, -23.0),
    ],
)
def test_declination_mean_days(month: int, day: int, expected_deg: float) -> None:
    n = SkyDate(month, day).day_of_year()
    assert math.degrees(declination(n)) == pytest.approx(expected_deg, abs=1.8)


@pytest.mark.parametrize("hour,expected_deg", [(10.5, -22.5), (12.0, 0.0), (13.0, 15.0)])
def test_hour_angle(hour: float, expected_deg: float) -> None:
    n = SkyDate(2, 13).day_of_year() + hour / 24.0
    assert math.degrees(Solar.hour_angle(n)) == pytest.approx(expected_deg, abs=1e-6)


def test_sun_position_winter_morning() -> None:
    solar = Solar(Location.from_degrees(43.0, 0.0, 0.0))
    pos = solar.position_at_solar_time(SkyDate(2, 13).day_of_year() + 9.5 / 24.0)
    assert math.degrees(pos.declination) == pytest.approx(-14.0, abs=0.5)
    assert math.degrees(pos.hour_angle) == pytest.approx(-37.5, abs=1e-6)
    assert math.degrees(pos.zenith) == pytest.approx(66.5, abs=0.5)
    # 40 deg east of south
    assert math.degrees(pos.azimuth) == pytest.approx(140.0, abs=1.0)
    assert pos.direction.length() == pytest.approx(1.0)
    assert pos.is_above_horizon


def test_sun_position_summer_evening() -> None:
    solar = Solar(Location.from_degrees(43.0, 0.0, 0.0))
    pos = solar.position_at_solar_time(SkyDate(7, 1).day_of_year() + 18.5 / 24.0)
    assert math.degrees(pos.declination) == pytest.approx(23.1, abs=0.5)
    assert math.degrees(pos.hour_angle) == pytest.approx(97.5, abs=1e-6)
    assert math.degrees(pos.zenith) == pytest.approx(79.6, abs=0.5)
    # Evening sun is in the west
    assert pos.direction.x < 0.0


def test_angle_of_incidence_on_tilted_surface() -> None:
    solar = Solar(Location.from_degrees(43.0, 0.0, 0.0))
    pos = solar.position_at_solar_time(SkyDate(2, 13).day_of_year() + 10.5 / 24.0)
    beta, gamma = math.radians(45.0), math.radians(15.0)
    normal = Vector3(-math.sin(gamma) * math.sin(beta), -math.cos(gamma) * math.sin(beta), math.cos(beta))
    theta = math.degrees(math.acos(normal.dot(pos.direction)))
    assert theta == pytest.approx(35.0, abs=0.2)


def test_sun_below_horizon_is_reported_not_rejected() -> None:
    pos = sun_position(Location.from_degrees(43.0, 0.0, 0.0), SkyDate(6, 21, 0.5))
    assert pos.zenith > math.pi / 2.0
    assert not pos.is_above_horizon
    assert pos.altitude < 0.0


def test_sunrise_sunset_symmetric_around_noon() -> None:
    solar = Solar(Location.from_degrees(43.0, 0.0, 0.0))
    n = SkyDate(4, 10, 12.0).day_of_year()
    rise, set_ = solar.sunrise_sunset(n)
    assert rise < n < set_
    assert rise + set_ == pytest.approx(2.0 * (math.floor(n) + 0.5))


def test_sunrise_sunset_polar_day_and_night() -> None:
    solar = Solar(Location.from_degrees(80.0, 0.0, 0.0))
    night = SkyDate(12, 21, 12.0).day_of_year()
    rise, set_ = solar.sunrise_sunset(night)
    assert rise == pytest.approx(set_)
    day = SkyDate(6, 21, 12.0).day_of_year()
    rise, set_ = solar.sunrise_sunset(day)
    assert set_ - rise == pytest.approx(1.0)


def test_meridian_offset_wraps() -> None:
    a = Solar(Location.from_degrees(10.0, 179.0, -179.0))
    b = Solar(Location.from_degrees(10.0, -1.0, 1.0))
    assert a.solar_standard_time_difference(100.0) == pytest.approx(b.solar_standard_time_difference(100.0))


def test_invalid_latitude() -> None:
    with pytest.raises(DomainError) as exc:
        Location.from_degrees(91.0, 0.0, 0.0)
    assert exc.value.cause is DomainErrorCause.INVALID_LATITUDE
    with pytest.raises(DomainError):
        Location(float("nan"), 0.0, 0.0)


def test_extraterrestrial_radiation_range() -> None:
    values = [normal_extraterrestrial_radiation(float(n)) for n in range(365)]
    assert 1320.0 < min(values) < max(values) < 1420.0
    # Perihelion in early January
    assert values.index(max(values)) < 10 or values.index(max(values)) > 355


def test_air_mass() -> None:
    assert air_mass(0.0) == pytest.approx(1.0, abs=1e-3)
    assert air_mass(math.radians(60.0)) == pytest.approx(2.0, abs=0.01)
    assert air_mass(math.radians(89.0)) > 20.0


def test_clear_sky_global_horizontal() -> None:
    solar = Solar(Location.from_degrees(43.0, 0.0, 0.0))
    noon = solar.clear_sky_global_horizontal(SkyDate(6, 21, 12.0))
    assert 700.0 < noon < 1100.0
    assert solar.clear_sky_global_horizontal(SkyDate(6, 21, 0.0)) == 0.0
    assert Solar.beam_atmosphere_transmittance(Vector3.down()) == 0.0
