"""Sales pitch advisor: turn a benefit calculation into upsell copy via the LLM."""

import logging

from src.calculators.benefit import CalculationResult
from src.llm.gateway import LLMGateway
from src.llm.prompts import build_pitch_messages

logger = logging.getLogger(__name__)

MAX_TIER_MESSAGE = "恭喜！您已達到最高回贈級別。這是目前市場上最優厚的條件，建議立即鎖定優惠。"
MISSING_KEY_MESSAGE = "請配置 API Key 以獲取 AI 建議。"
EMPTY_ANSWER_MESSAGE = "無法生成建議。"
UNAVAILABLE_MESSAGE = "AI 服務暫時無法使用。"


class SalesPitchAdvisor:
    """Generates a short upsell pitch for a quote, never raising to the caller."""

    def __init__(self, llm: LLMGateway) -> None:
        self._llm = llm

    async def generate(self, result: CalculationResult, has_bundle: bool) -> str:
        """Return a pitch for ``result``, or a fixed fallback message.

        Args:
            result: Benefit calculation to pitch from.
            has_bundle: Whether the quote uses bundle rates.

        Returns:
            LLM-written pitch, or one of the module's fallback messages when
            the client is at the top tier, no API key is configured, the LLM
            returns nothing, or the call fails.
        """
        if result.next_tier is None:
            return MAX_TIER_MESSAGE

        if not self._llm.configured:
            logger.error("LLM API key is not configured; returning fallback pitch")
            return MISSING_KEY_MESSAGE

        messages = build_pitch_messages(result, has_bundle)
        try:
            completion = await self._llm.complete(messages)
        except Exception:
            logger.exception("LLM call failed while generating sales pitch")
            return UNAVAILABLE_MESSAGE

        pitch = (completion.content or "").strip()
        if not pitch:
            logger.warning("LLM model=%s returned an empty pitch", completion.model)
            return EMPTY_ANSWER_MESSAGE
        return pitch
