from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import numpy as np
import pytest

from perezsky.perez_coefficients import SkyUnits
from perezsky.testing import error_metrics, load_reference_cases, run_reference
from perezsky.testing.reference import default_reference_path

GOLDEN = Path(__file__).resolve().parent / "golden" / "perez_reference.json"


def test_error_metrics() -> None:
    m = error_metrics(np.array([10.0, 20.0]), np.array([11.0, 19.0]))
    assert m["max_abs"] == pytest.approx(1.0)
    assert m["mean_abs"] == pytest.approx(1.0)
    assert m["max_rel"] == pytest.approx(0.1)
    assert m["mean_rel"] == pytest.approx(0.075)


def test_error_metrics_shape_mismatch() -> None:
    with pytest.raises(ValueError):
        error_metrics(np.zeros(2), np.zeros(3))


def test_load_reference_cases_fields() -> None:
    cases = load_reference_cases(GOLDEN)
    units = {c.units for c in cases}
    assert units == {SkyUnits.SOLAR, SkyUnits.VISIBLE}
    assert all(c.dew_point == 11.0 for c in cases)
    assert all(abs(c.direction.length() - 1.0) < 1e-9 for c in cases)


def test_run_reference_reports_failures() -> None:
    cases = load_reference_cases(GOLDEN)[:3]
    report = run_reference(cases)
    assert report.passed
    assert report.failures() == []

    broken = [replace(c, expected=c.expected * 2.0) for c in cases]
    report = run_reference(broken)
    assert not report.passed
    assert len(report.failures()) == 3


def test_default_reference_path_ignores_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert default_reference_path() == GOLDEN
    assert len(load_reference_cases()) == 24
