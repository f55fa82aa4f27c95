from __future__ import annotations

from pathlib import Path

import pytest

from perezsky.testing.reference import ReferenceCase, evaluate_case, load_reference_cases

GOLDEN = Path(__file__).resolve().parent / "golden" / "perez_reference.json"
CASES = load_reference_cases(GOLDEN)


def test_reference_file_has_all_cases() -> None:
    assert len(CASES) == 24
    assert len({c.case_id for c in CASES}) == 24


@pytest.mark.parametrize("case", CASES, ids=[c.case_id for c in CASES])
def test_sky_matches_radiance_reference(case: ReferenceCase) -> None:
    actual = evaluate_case(case)
    rel = abs(actual - case.expected) / abs(case.expected)
    assert rel < 0.03, f"{case.case_id}: expected {case.expected}, got {actual}"
