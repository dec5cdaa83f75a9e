from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..domain.enums import MarginMethod
from ..domain.money import Money, round_half_up, to_decimal

D = Decimal


@dataclass(frozen=True)
class DualMargin:
    percentage_margin: Money
    minimum_margin: Money
    margin_amount: Money
    applied_method: MarginMethod
    effective_percentage: D


def calc_dual_margin(
    revenue: Money,
    margin_percentage: D,
    minimum_margin_amount: Money,
    *,
    places: int = 2,
) -> DualMargin:
    """
    Dual margin: the higher of `revenue * pct / 100` and the flat minimum.
    Ties go to percentage. Amounts are rounded half-up to `places`.

    The effective percentage (margin / revenue * 100) is for display only;
    with zero revenue it falls back to the configured rate.
    """
    revenue.ensure_same_currency(minimum_margin_amount)

    pct = to_decimal(margin_percentage)
    percentage_margin = Money(
        round_half_up(revenue.amount * pct / D("100"), places),
        revenue.currency_code,
    )
    minimum_margin = minimum_margin_amount.quantized(places)

    if percentage_margin >= minimum_margin:
        method = MarginMethod.PERCENTAGE
        margin_amount = percentage_margin
    else:
        method = MarginMethod.MINIMUM
        margin_amount = minimum_margin

    if revenue.amount == 0:
        effective = round_half_up(pct, places)
    else:
        effective = round_half_up(margin_amount.amount / revenue.amount * D("100"), places)

    return DualMargin(
        percentage_margin=percentage_margin,
        minimum_margin=minimum_margin,
        margin_amount=margin_amount,
        applied_method=method,
        effective_percentage=effective,
    )
