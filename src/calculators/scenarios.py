"""Worked-quote scenarios: load them from config/ and compare against the calculator."""

from decimal import Decimal
from typing import Any

from config import load_yaml_config
from src.calculators.benefit import calculate
from src.calculators.rebate_data import Currency

SCENARIOS_FILE = "scenarios.yaml"


def load_scenarios() -> list[dict[str, Any]]:
    """Load the worked quotes from config/scenarios.yaml."""
    return load_yaml_config(SCENARIOS_FILE)["scenarios"]


def check_scenario(scenario: dict[str, Any]) -> list[str]:
    """Run one scenario and return a message per mismatched field.

    Numbers compare within 1e-6, strings and booleans exactly. An empty list
    means the calculator matches every expected field.
    """
    params = scenario["input"]
    result = calculate(
        Decimal(str(params["annual_premium"])),
        Currency(params["currency"]),
        params["has_bundle"],
        params["prepayment_years"],
    ).as_dict()

    mismatches: list[str] = []
    for field, expected in scenario["expected"].items():
        actual = result[field]
        if isinstance(expected, (int, float)) and not isinstance(expected, bool):
            ok = abs(actual - expected) < 1e-6
        else:
            ok = actual == expected
        if not ok:
            mismatches.append(f"{field}: expected {expected!r}, got {actual!r}")
    return mismatches
