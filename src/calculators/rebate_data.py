"""Rebate plan constants — tiers, prepayment rates, voucher rules.

Hardcoded Python constants (not DB-driven). Tier bounds are in USD; voucher
rules are stated in HKD. Everything here is fixed for the life of the process.
"""

from decimal import Decimal
from enum import Enum
from typing import NamedTuple


class Currency(str, Enum):
    """Currencies a premium can be quoted in."""

    USD = "USD"
    HKD = "HKD"


class TierLevel(str, Enum):
    """Named rebate levels, lowest first."""

    LOW = "Low"
    STANDARD = "Standard"
    MIDDLE = "Middle"
    HIGH = "High"
    VIP = "VIP"
    VVIP = "VVIP"


class RebateTier(NamedTuple):
    """A single premium bracket with its rebate rates."""

    min: Decimal  # inclusive, USD
    max: Decimal | None  # inclusive, USD; None = no cap
    rate_basic: Decimal
    rate_bundle: Decimal
    level: TierLevel

    def rate(self, has_bundle: bool) -> Decimal:
        """Return the rebate rate for the given bundle flag."""
        return self.rate_bundle if has_bundle else self.rate_basic


REBATE_TIERS: tuple[RebateTier, ...] = (
    RebateTier(Decimal("0"), Decimal("9999"), Decimal("0.05"), Decimal("0.08"), TierLevel.LOW),
    RebateTier(Decimal("10000"), Decimal("29999"), Decimal("0.10"), Decimal("0.13"), TierLevel.STANDARD),
    RebateTier(Decimal("30000"), Decimal("49999"), Decimal("0.12"), Decimal("0.15"), TierLevel.MIDDLE),
    RebateTier(Decimal("50000"), Decimal("99999"), Decimal("0.14"), Decimal("0.17"), TierLevel.HIGH),
    RebateTier(Decimal("100000"), Decimal("199999"), Decimal("0.16"), Decimal("0.19"), TierLevel.VIP),
    RebateTier(Decimal("200000"), None, Decimal("0.18"), Decimal("0.21"), TierLevel.VVIP),
)

# 1 USD = 8 HKD
EXCHANGE_RATE_HKD_USD = Decimal("8.0")

# Prepay 1 year: interest on one premium at 4.3%.
# Prepay 4 years: interest on 4, 3, 2, 1 premiums = 10 units of annual interest.
PREPAYMENT_RATE_1YEAR = Decimal("0.043")
PREPAYMENT_RATE_4YEAR_LOW = Decimal("0.038")
PREPAYMENT_RATE_4YEAR_HIGH = Decimal("0.040")
PREPAYMENT_THRESHOLD_USD = Decimal("200000")
PREPAYMENT_FACTOR_1YEAR = 1
PREPAYMENT_FACTOR_4YEAR = 10

# HK$500 voucher per full HK$5,000 of premium, capped at HK$22,500
VOUCHER_UNIT_HKD = Decimal("5000")
VOUCHER_VALUE_HKD = Decimal("500")
VOUCHER_CAP_HKD = Decimal("22500")
VOUCHER_DENOMINATIONS_HKD: tuple[Decimal, ...] = (Decimal("10000"), Decimal("500"))

# Gaps below this (input currency) are flagged as close to the next tier
CLOSE_GAP_THRESHOLD = Decimal("5000")


def validate_tiers(tiers: tuple[RebateTier, ...] = REBATE_TIERS) -> None:
    """Check that a tier table covers 0 to unbounded without gaps or overlaps.

    Raises:
        ValueError: If the table is empty, does not start at 0, has a gap or
            overlap between neighbours, has inverted bounds, or caps the top tier.
    """
    if not tiers:
        raise ValueError("Tier table is empty.")
    if tiers[0].min != 0:
        raise ValueError(f"Lowest tier must start at 0, got {tiers[0].min}.")

    for current, following in zip(tiers, tiers[1:]):
        if current.max is None:
            raise ValueError(f"Only the last tier may be unbounded ({current.level.value}).")
        if current.max < current.min:
            raise ValueError(f"Tier {current.level.value} has max below min.")
        if following.min != current.max + 1:
            raise ValueError(
                f"Tiers {current.level.value} and {following.level.value} are not contiguous."
            )

    if tiers[-1].max is not None:
        raise ValueError("Top tier must be unbounded.")
