"""First-year benefit calculator — rebate, prepayment interest, vouchers, tier gap."""

import logging
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from src.calculators.rebate_data import (
    CLOSE_GAP_THRESHOLD,
    EXCHANGE_RATE_HKD_USD,
    PREPAYMENT_FACTOR_1YEAR,
    PREPAYMENT_FACTOR_4YEAR,
    PREPAYMENT_RATE_1YEAR,
    PREPAYMENT_RATE_4YEAR_HIGH,
    PREPAYMENT_RATE_4YEAR_LOW,
    PREPAYMENT_THRESHOLD_USD,
    REBATE_TIERS,
    VOUCHER_CAP_HKD,
    VOUCHER_DENOMINATIONS_HKD,
    VOUCHER_UNIT_HKD,
    VOUCHER_VALUE_HKD,
    Currency,
    RebateTier,
)

logger = logging.getLogger(__name__)

# Premium (HKD) from which the voucher is always capped
_VOUCHER_CAP_PREMIUM_HKD = VOUCHER_CAP_HKD / VOUCHER_VALUE_HKD * VOUCHER_UNIT_HKD

PrepaymentYears = Literal[1, 4]


class CalculationResult(BaseModel):
    """Benefit breakdown for one premium quote. All amounts in the input currency."""

    model_config = ConfigDict(frozen=True)

    annual_premium: Decimal
    currency: Currency
    tier: RebateTier
    rebate_rate: Decimal
    rebate_amount: Decimal
    prepayment_years: PrepaymentYears
    prepayment_interest: Decimal
    effective_prepayment_rate: Decimal
    voucher_value: Decimal
    voucher_value_hkd: Decimal
    voucher_description: str
    voucher_capped: bool
    total_first_year_benefit: Decimal
    benefit_ratio: Decimal
    next_tier: RebateTier | None = None
    gap_to_next_tier: Decimal = Decimal("0")
    potential_extra_rebate: Decimal = Decimal("0")
    close_to_next_tier: bool = False

    def as_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON types, amounts as floats."""
        return {
            "annual_premium": float(self.annual_premium),
            "currency": self.currency.value,
            "level": self.tier.level.value,
            "rebate_rate": float(self.rebate_rate),
            "rebate_amount": float(self.rebate_amount),
            "prepayment_years": self.prepayment_years,
            "prepayment_interest": float(self.prepayment_interest),
            "effective_prepayment_rate": float(self.effective_prepayment_rate),
            "voucher_value": float(self.voucher_value),
            "voucher_value_hkd": float(self.voucher_value_hkd),
            "voucher_description": self.voucher_description,
            "voucher_capped": self.voucher_capped,
            "total_first_year_benefit": float(self.total_first_year_benefit),
            "benefit_ratio": float(self.benefit_ratio),
            "next_tier": tier_as_dict(self.next_tier) if self.next_tier else None,
            "gap_to_next_tier": float(self.gap_to_next_tier),
            "potential_extra_rebate": float(self.potential_extra_rebate),
            "close_to_next_tier": self.close_to_next_tier,
        }


def tier_as_dict(tier: RebateTier) -> dict[str, Any]:
    """Serialize a tier with float bounds and rates."""
    return {
        "level": tier.level.value,
        "min": float(tier.min),
        "max": float(tier.max) if tier.max is not None else None,
        "rate_basic": float(tier.rate_basic),
        "rate_bundle": float(tier.rate_bundle),
    }


def to_usd(amount: Decimal, currency: Currency) -> Decimal:
    return amount if currency is Currency.USD else amount / EXCHANGE_RATE_HKD_USD


def to_hkd(amount: Decimal, currency: Currency) -> Decimal:
    return amount if currency is Currency.HKD else amount * EXCHANGE_RATE_HKD_USD


def from_usd(amount_usd: Decimal, currency: Currency) -> Decimal:
    return amount_usd if currency is Currency.USD else amount_usd * EXCHANGE_RATE_HKD_USD


def from_hkd(amount_hkd: Decimal, currency: Currency) -> Decimal:
    return amount_hkd if currency is Currency.HKD else amount_hkd / EXCHANGE_RATE_HKD_USD


def find_tier(
    premium_usd: Decimal,
    tiers: tuple[RebateTier, ...] = REBATE_TIERS,
) -> RebateTier:
    """Return the tier a USD premium falls in.

    A premium belongs to the last tier whose ``min`` it reaches, so amounts
    between one tier's ``max`` and the next tier's ``min`` (e.g. 9999.875 USD
    from an HKD quote) stay in the lower tier.
    """
    for i, tier in enumerate(tiers):
        following = tiers[i + 1] if i + 1 < len(tiers) else None
        if premium_usd >= tier.min and (following is None or premium_usd < following.min):
            return tier

    logger.warning("No rebate tier matches premium_usd=%s; falling back to lowest tier", premium_usd)
    return tiers[0]


def next_tier_after(
    tier: RebateTier,
    tiers: tuple[RebateTier, ...] = REBATE_TIERS,
) -> RebateTier | None:
    """Return the tier above ``tier``, or None at the top."""
    index = tiers.index(tier)
    return tiers[index + 1] if index + 1 < len(tiers) else None


def calculate_voucher(premium: Decimal, currency: Currency) -> tuple[Decimal, Decimal, str]:
    """Work out the premium voucher for a quote.

    One HK$500 voucher per full HK$5,000 of premium, capped at HK$22,500,
    issued greedily as HK$10,000 and HK$500 coupons.

    Returns:
        (value in input currency, capped HKD value, breakdown text).
    """
    premium_hkd = to_hkd(premium, currency)
    if premium_hkd >= _VOUCHER_CAP_PREMIUM_HKD:
        # Huge quotients overflow the decimal context; the cap applies anyway.
        capped_value_hkd = VOUCHER_CAP_HKD
    else:
        voucher_count = int(premium_hkd // VOUCHER_UNIT_HKD)
        capped_value_hkd = min(voucher_count * VOUCHER_VALUE_HKD, VOUCHER_CAP_HKD)

    parts: list[str] = []
    remaining = capped_value_hkd
    for denomination in VOUCHER_DENOMINATIONS_HKD:
        count = int(remaining // denomination)
        remaining -= count * denomination
        if count > 0:
            parts.append(f"{count}×HK${denomination:,.0f}")

    return from_hkd(capped_value_hkd, currency), capped_value_hkd, " + ".join(parts)


def prepayment_rate(premium_usd: Decimal, prepayment_years: PrepaymentYears) -> Decimal:
    """Interest rate p.a. earned on prepaid premium."""
    if prepayment_years == 4:
        if premium_usd >= PREPAYMENT_THRESHOLD_USD:
            return PREPAYMENT_RATE_4YEAR_HIGH
        return PREPAYMENT_RATE_4YEAR_LOW
    return PREPAYMENT_RATE_1YEAR


def calculate(
    annual_premium: Decimal,
    currency: Currency = Currency.USD,
    has_bundle: bool = False,
    prepayment_years: PrepaymentYears = 1,
) -> CalculationResult:
    """Calculate first-year benefits and the gap to the next rebate tier.

    Tier lookup and the 4-year prepayment threshold use the USD equivalent;
    every returned amount is in ``currency``. No rounding is applied.

    Preconditions (not checked): ``annual_premium`` is finite and >= 0,
    ``prepayment_years`` is 1 or 4. Callers validate input first.

    Args:
        annual_premium: Annual premium in ``currency`` units.
        currency: Currency of the premium and of all results.
        has_bundle: Whether a designated companion product was bought.
        prepayment_years: Years of premium paid up front (1 or 4).

    Returns:
        CalculationResult with rebate, interest, voucher and gap figures.
    """
    premium_usd = to_usd(annual_premium, currency)
    tier = find_tier(premium_usd)

    rebate_rate = tier.rate(has_bundle)
    rebate_amount = annual_premium * rebate_rate

    factor = PREPAYMENT_FACTOR_4YEAR if prepayment_years == 4 else PREPAYMENT_FACTOR_1YEAR
    effective_rate = prepayment_rate(premium_usd, prepayment_years)
    prepayment_interest = annual_premium * effective_rate * factor

    voucher_value, voucher_value_hkd, voucher_description = calculate_voucher(annual_premium, currency)

    total = rebate_amount + prepayment_interest + voucher_value
    benefit_ratio = total / annual_premium if annual_premium > 0 else Decimal("0")

    next_tier = next_tier_after(tier)
    gap = Decimal("0")
    extra = Decimal("0")
    if next_tier is not None:
        gap = from_usd(next_tier.min - premium_usd, currency)

        # Upsell is rebate + voucher only; prepayment interest is left out.
        next_min = from_usd(next_tier.min, currency)
        rebate_at_next = next_min * next_tier.rate(has_bundle)
        voucher_at_next, _, _ = calculate_voucher(next_min, currency)
        extra = (rebate_at_next + voucher_at_next) - (rebate_amount + voucher_value)

    return CalculationResult(
        annual_premium=annual_premium,
        currency=currency,
        tier=tier,
        rebate_rate=rebate_rate,
        rebate_amount=rebate_amount,
        prepayment_years=prepayment_years,
        prepayment_interest=prepayment_interest,
        effective_prepayment_rate=effective_rate,
        voucher_value=voucher_value,
        voucher_value_hkd=voucher_value_hkd,
        voucher_description=voucher_description,
        voucher_capped=voucher_value_hkd >= VOUCHER_CAP_HKD,
        total_first_year_benefit=total,
        benefit_ratio=benefit_ratio,
        next_tier=next_tier,
        gap_to_next_tier=gap,
        potential_extra_rebate=extra,
        close_to_next_tier=next_tier is not None and gap < CLOSE_GAP_THRESHOLD,
    )
