"""Worked quotes from config/scenarios.yaml."""

from typing import Any

import pytest

from src.calculators.scenarios import check_scenario, load_scenarios

SCENARIOS: list[dict[str, Any]] = load_scenarios()


@pytest.mark.parametrize("scenario", SCENARIOS, ids=[s["name"] for s in SCENARIOS])
def test_scenario(scenario: dict[str, Any]) -> None:
    assert check_scenario(scenario) == []


def test_mismatch_is_reported() -> None:
    scenario = {
        "name": "wrong_breakdown",
        "input": {"annual_premium": 250000, "currency": "HKD", "has_bundle": False, "prepayment_years": 4},
        "expected": {"voucher_description": "2×HK$10,000 + 1×HK$500", "rebate_amount": 30000},
    }
    mismatches = check_scenario(scenario)
    assert len(mismatches) == 1
    assert mismatches[0].startswith("voucher_description:")
