from __future__ import annotations

from typing import Iterable, List

import structlog

from ..domain.models import DunningActions, DunningConfiguration, OverdueStatus
from ..domain.money import Money, ensure_same_currency, sum_money
from ..explain.breakdown_builder import Breakdown

logger = structlog.get_logger(__name__)

MAX_DUNNING_LEVEL = 3


def determine_dunning_level(config: DunningConfiguration, days_overdue: int) -> int:
    """
    Highest level whose threshold is reached (0 = none), ignoring autoSend.
    This is the level the customer is "at", not what gets sent automatically.
    """
    if days_overdue <= 0:
        return 0
    for number, level in reversed(config.levels):
        if days_overdue >= level.days_overdue:
            return number
    return 0


def determine_dunning_actions(config: DunningConfiguration, overdue: OverdueStatus) -> DunningActions:
    """
    Which automatic reminder levels fire for this invoice, and whether service gets suspended.

    - skipDunningProcess (VIP) short-circuits everything
    - level N fires when days overdue >= its threshold AND autoSend is on
    - levels are cumulative; callers apply the fees of levels not applied before
    """
    breakdown = Breakdown()

    if config.skip_dunning_process:
        breakdown.add_skip("VIP_EXEMPTION", "dunning skipped for this customer")
        logger.debug("dunning_evaluated", customer_id=config.customer_id, exempt=True)
        return DunningActions(triggered_levels=(), should_suspend=False, current_level=0, steps=breakdown.as_tuple())

    triggered: List[int] = []
    if overdue.is_overdue:
        for number, level in config.levels:
            code = f"LEVEL_{number}"
            if overdue.days_overdue < level.days_overdue:
                breakdown.add_skip(code, f"level {number}: {overdue.days_overdue} < {level.days_overdue} days")
            elif not level.auto_send:
                breakdown.add_skip(code, f"level {number}: threshold reached, manual send")
            else:
                breakdown.add_check(code, f"level {number}: {overdue.days_overdue} >= {level.days_overdue} days", status="OK")
                triggered.append(number)
    else:
        breakdown.add_skip("NOT_OVERDUE", "invoice is not overdue")

    level3_triggered = MAX_DUNNING_LEVEL in triggered
    should_suspend = (
        level3_triggered
        and config.level3.suspend_service
        and not config.allow_service_when_overdue
    )
    if should_suspend:
        breakdown.add_step("SUSPEND_SERVICE", "level 3 reached: suspend service")

    actions = DunningActions(
        triggered_levels=tuple(triggered),
        should_suspend=should_suspend,
        current_level=determine_dunning_level(config, overdue.days_overdue),
        steps=breakdown.as_tuple(),
    )
    logger.debug(
        "dunning_evaluated",
        customer_id=config.customer_id,
        triggered_levels=list(actions.triggered_levels),
        should_suspend=should_suspend,
    )
    return actions


def should_reactivate(config: DunningConfiguration, all_invoices_paid: bool) -> bool:
    """Only full payment reactivates; partial payment never does."""
    return bool(config.auto_reactivate_on_payment and all_invoices_paid)


def dunning_fee_total(config: DunningConfiguration, levels: Iterable[int]) -> Money:
    """Sum of the fees for the given levels (e.g. DunningActions.pending_levels(...))."""
    fees = [config.level(n).fee_amount for n in levels]
    currency = ensure_same_currency(
        [config.level1.fee_amount, config.level2.fee_amount, config.level3.fee_amount]
    )
    return sum_money(fees, currency)
