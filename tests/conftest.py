"""Shared test fixtures."""

import os

# Use litellm's bundled model cost map; the network fetch at import time can deadlock offline.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.calculators.benefit import CalculationResult, calculate
from src.calculators.rebate_data import Currency
from src.llm.gateway import CompletionResult


@pytest.fixture
def mock_llm() -> AsyncMock:
    """Async mock of LLMGateway returning a simple pitch."""
    llm = AsyncMock()
    llm.configured = True
    llm.complete.return_value = CompletionResult(
        content="只差少少就升級，唔好蝕咗呢筆回贈！",
        model="gemini/gemini-2.5-flash",
    )
    return llm


@pytest.fixture
def standard_result() -> CalculationResult:
    """USD 25,000 bundle quote with 1-year prepayment (Standard tier)."""
    return calculate(Decimal("25000"), Currency.USD, True, 1)


@pytest.fixture
def top_tier_result() -> CalculationResult:
    """USD 250,000 quote at the top tier (no next tier)."""
    return calculate(Decimal("250000"), Currency.USD, True, 4)
