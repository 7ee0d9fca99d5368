"""Tests for the sales pitch advisor fallbacks and happy path."""

from unittest.mock import AsyncMock

import pytest

from src.advisor import (
    EMPTY_ANSWER_MESSAGE,
    MAX_TIER_MESSAGE,
    MISSING_KEY_MESSAGE,
    UNAVAILABLE_MESSAGE,
    SalesPitchAdvisor,
)
from src.llm.gateway import CompletionResult


@pytest.mark.asyncio
async def test_generate_happy_path(mock_llm: AsyncMock, standard_result) -> None:
    advisor = SalesPitchAdvisor(mock_llm)
    pitch = await advisor.generate(standard_result, True)

    assert pitch == "只差少少就升級，唔好蝕咗呢筆回贈！"
    mock_llm.complete.assert_awaited_once()
    messages = mock_llm.complete.call_args.args[0]
    assert "<top_up_needed>US$5,000</top_up_needed>" in messages[1]["content"]


@pytest.mark.asyncio
async def test_top_tier_short_circuits(mock_llm: AsyncMock, top_tier_result) -> None:
    advisor = SalesPitchAdvisor(mock_llm)
    assert await advisor.generate(top_tier_result, True) == MAX_TIER_MESSAGE
    mock_llm.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_key_returns_fallback(mock_llm: AsyncMock, standard_result) -> None:
    mock_llm.configured = False
    advisor = SalesPitchAdvisor(mock_llm)
    assert await advisor.generate(standard_result, True) == MISSING_KEY_MESSAGE
    mock_llm.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_empty_completion_returns_fallback(mock_llm: AsyncMock, standard_result) -> None:
    mock_llm.complete.return_value = CompletionResult(content="  ", model="m")
    advisor = SalesPitchAdvisor(mock_llm)
    assert await advisor.generate(standard_result, True) == EMPTY_ANSWER_MESSAGE


@pytest.mark.asyncio
async def test_llm_error_is_swallowed(
    mock_llm: AsyncMock, standard_result, caplog: pytest.LogCaptureFixture
) -> None:
    mock_llm.complete.side_effect = RuntimeError("quota exceeded")
    advisor = SalesPitchAdvisor(mock_llm)
    assert await advisor.generate(standard_result, True) == UNAVAILABLE_MESSAGE
    assert "LLM call failed" in caplog.text
