"""Prompt and message builder for upsell sales pitches."""

from decimal import Decimal

from src.calculators.benefit import CalculationResult, from_usd
from src.calculators.rebate_data import VOUCHER_UNIT_HKD, Currency

_SYSTEM_PROMPT = """\
You are a top-performing Hong Kong financial planner (MDRT/TOT level) who \
specialises in a multi-currency savings insurance plan. Its strengths are \
competitive long-term returns, flexible currency switching and suitability \
for wealth legacy planning.

<hard_rules>
1. Use ONLY the figures given in the <quote> block. Never invent rates, \
amounts or deadlines.
2. Write a short, confident upsell pitch that uses loss aversion: make the \
client feel that not topping up now means leaving the extra rebate on the \
table.
3. Tone: professional, confident, approachable.
4. Language: Traditional Chinese in Hong Kong colloquial style.
5. Keep it under 100 Chinese characters.
</hard_rules>\
"""


def _money(amount: Decimal, currency: Currency) -> str:
    symbol = "US$" if currency is Currency.USD else "HK$"
    return f"{symbol}{amount:,.0f}"


def _percent(rate: Decimal) -> str:
    return f"{rate * 100:.0f}%"


def format_quote_message(result: CalculationResult, has_bundle: bool) -> str:
    """Format a calculation into an XML quote block for the LLM.

    Args:
        result: Calculation that has a next tier.
        has_bundle: Whether the quote uses bundle rates.

    Returns:
        XML-formatted quote string.
    """
    currency = result.currency
    next_tier = result.next_tier
    if next_tier is None:
        raise ValueError("Quote message needs a result with a next tier.")

    if result.voucher_value > 0:
        voucher = (
            f"Client already receives HK${result.voucher_value_hkd:,.0f} of premium "
            f"vouchers ({result.voucher_description})."
        )
    else:
        voucher = (
            f"Premium is below the HK${VOUCHER_UNIT_HKD:,.0f} minimum for premium vouchers."
        )

    if result.prepayment_years == 4:
        prepay = (
            "Client prepays 4 years and locks in "
            f"{_money(result.prepayment_interest, currency)} of interest."
        )
    else:
        prepay = (
            "Client prepays 1 year, earning "
            f"{_money(result.prepayment_interest, currency)} of interest."
        )

    next_min = from_usd(next_tier.min, currency)

    lines = [
        "<quote>",
        f"  <annual_premium>{_money(result.annual_premium, currency)}</annual_premium>",
        f"  <rebate_rate>{_percent(result.rebate_rate)}</rebate_rate>",
        f"  <rebate_amount>{_money(result.rebate_amount, currency)}</rebate_amount>",
        f"  <voucher>{voucher}</voucher>",
        f"  <prepayment>{prepay}</prepayment>",
        "  <gap>",
        f"    <top_up_needed>{_money(result.gap_to_next_tier, currency)}</top_up_needed>",
        f"    <next_tier_minimum>{_money(next_min, currency)}</next_tier_minimum>",
        f"    <next_tier_rate>{_percent(next_tier.rate(has_bundle))}</next_tier_rate>",
        f"    <extra_rebate>{_money(result.potential_extra_rebate, currency)}</extra_rebate>",
        "  </gap>",
        "</quote>",
    ]
    return "\n".join(lines)


def build_pitch_messages(result: CalculationResult, has_bundle: bool) -> list[dict[str, str]]:
    """Build the message list for a sales pitch LLM call.

    Produces two messages: system prompt and the quote (user).
    """
    return [
        {"role": "system", "content": _SYSTEM_PROMPT},
        {"role": "user", "content": format_quote_message(result, has_bundle)},
    ]
