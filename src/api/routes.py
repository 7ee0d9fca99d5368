"""API routes for the premium rebate planner."""

import logging
from decimal import Decimal
from typing import Any, Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from src.calculators.benefit import calculate, tier_as_dict
from src.calculators.rebate_data import REBATE_TIERS, Currency
from src.calculators.schedule import build_rebate_schedule

logger = logging.getLogger(__name__)

router = APIRouter()


class CalculateRequest(BaseModel):
    """Request body for the /calculate and /pitch endpoints."""

    annual_premium: float = Field(ge=0, allow_inf_nan=False)
    currency: Currency = Currency.USD
    has_bundle: bool = True
    prepayment_years: Literal[1, 4] = 1


class ScheduleRequest(BaseModel):
    """Request body for the /schedule endpoint."""

    annual_premium: float = Field(ge=0, allow_inf_nan=False)
    currency: Currency = Currency.USD
    has_bundle: bool = True


class PitchResponse(BaseModel):
    """Response body for the /pitch endpoint."""

    pitch: str
    result: dict[str, Any]


def _premium(value: float) -> Decimal:
    return Decimal(str(value))


@router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/tiers")
async def tiers() -> list[dict[str, Any]]:
    """List the rebate tiers (USD bounds)."""
    return [tier_as_dict(tier) for tier in REBATE_TIERS]


@router.post("/calculate")
async def calculate_benefits(body: CalculateRequest) -> dict[str, Any]:
    """Calculate first-year benefits for a premium quote."""
    result = calculate(
        _premium(body.annual_premium),
        body.currency,
        body.has_bundle,
        body.prepayment_years,
    )
    return result.as_dict()


@router.post("/schedule")
async def schedule(body: ScheduleRequest) -> dict[str, Any]:
    """Return the stepped rebate-rate schedule and the premium's position on it."""
    return build_rebate_schedule(
        _premium(body.annual_premium),
        body.currency,
        body.has_bundle,
    ).as_dict()


@router.post("/pitch", response_model=PitchResponse)
async def pitch(body: CalculateRequest, request: Request) -> PitchResponse:
    """Calculate benefits and generate an upsell pitch for them."""
    result = calculate(
        _premium(body.annual_premium),
        body.currency,
        body.has_bundle,
        body.prepayment_years,
    )
    advisor = request.app.state.advisor
    logger.info(
        "Generating pitch level=%s gap=%s currency=%s",
        result.tier.level.value,
        result.gap_to_next_tier,
        result.currency.value,
    )
    text = await advisor.generate(result, body.has_bundle)
    return PitchResponse(pitch=text, result=result.as_dict())
