"""Stepped rebate-rate schedule for charting where a premium sits."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from src.calculators.benefit import find_tier, to_usd
from src.calculators.rebate_data import REBATE_TIERS, Currency

# Chart x-axis extends at least this far (USD), or 15% past the premium
_MIN_DOMAIN_USD = Decimal("250000")
_DOMAIN_HEADROOM = Decimal("1.15")


class SchedulePoint(BaseModel):
    """A step in the rate curve: the rate applies from ``premium_usd`` onwards."""

    premium_usd: Decimal
    rate_percent: Decimal
    label: str


class RebateSchedule(BaseModel):
    """Rate steps for every tier plus the caller's current position."""

    points: list[SchedulePoint]
    current_premium_usd: Decimal
    current_rate_percent: Decimal
    current_level: str
    max_domain_usd: Decimal

    def as_dict(self) -> dict[str, Any]:
        return {
            "points": [
                {
                    "premium_usd": float(p.premium_usd),
                    "rate_percent": float(p.rate_percent),
                    "label": p.label,
                }
                for p in self.points
            ],
            "current_premium_usd": float(self.current_premium_usd),
            "current_rate_percent": float(self.current_rate_percent),
            "current_level": self.current_level,
            "max_domain_usd": float(self.max_domain_usd),
        }


def build_rebate_schedule(
    annual_premium: Decimal,
    currency: Currency = Currency.USD,
    has_bundle: bool = False,
) -> RebateSchedule:
    """Build the step-after rate series and locate the premium on it.

    Args:
        annual_premium: Annual premium in ``currency`` units (must be >= 0).
        currency: Currency of ``annual_premium``.
        has_bundle: Use bundle rates instead of basic rates.

    Returns:
        RebateSchedule with one point per tier, a closing "Max" point, and
        the current premium's USD position and rate.
    """
    premium_usd = to_usd(annual_premium, currency)
    points = [
        SchedulePoint(
            premium_usd=tier.min,
            rate_percent=tier.rate(has_bundle) * 100,
            label=tier.level.value,
        )
        for tier in REBATE_TIERS
    ]

    max_domain = max(premium_usd * _DOMAIN_HEADROOM, _MIN_DOMAIN_USD)
    points.append(
        SchedulePoint(
            premium_usd=max_domain,
            rate_percent=points[-1].rate_percent,
            label="Max",
        )
    )

    current = find_tier(premium_usd)
    return RebateSchedule(
        points=points,
        current_premium_usd=premium_usd,
        current_rate_percent=current.rate(has_bundle) * 100,
        current_level=current.level.value,
        max_domain_usd=max_domain,
    )
