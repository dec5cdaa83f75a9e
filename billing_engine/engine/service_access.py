from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..calculators.days import add_days
from ..core.settings import get_settings
from ..domain.models import DunningConfiguration, ServiceAccessCheck
from ..domain.money import Money


def check_service_access(
    config: DunningConfiguration,
    days_overdue: int,
    total_overdue: Optional[Money] = None,
) -> ServiceAccessCheck:
    """
    May this customer place new orders right now?
    Order: already suspended > prepayment required > overdue while not allowed > ok.
    """
    if config.service_suspended:
        return ServiceAccessCheck(
            is_suspended=True,
            can_create_orders=False,
            requires_prepayment=config.require_prepayment,
            suspension_reason="Service suspended due to payment issues",
            outstanding_amount=total_overdue,
        )

    if config.require_prepayment:
        return ServiceAccessCheck(is_suspended=False, can_create_orders=True, requires_prepayment=True)

    if not config.allow_service_when_overdue and days_overdue > 0:
        return ServiceAccessCheck(
            is_suspended=False,
            can_create_orders=False,
            requires_prepayment=False,
            suspension_reason="New orders not allowed while invoices are overdue",
            outstanding_amount=total_overdue,
        )

    return ServiceAccessCheck(is_suspended=False, can_create_orders=True, requires_prepayment=False)


def effective_payment_terms_days(config: Optional[DunningConfiguration], default_days: Optional[int] = None) -> int:
    if config is not None and config.custom_payment_terms_days is not None:
        return int(config.custom_payment_terms_days)
    if default_days is None:
        default_days = get_settings().default_payment_terms_days
    return int(default_days)


def compute_due_date(
    issue_date: datetime,
    config: Optional[DunningConfiguration],
    default_days: Optional[int] = None,
) -> datetime:
    return add_days(issue_date, effective_payment_terms_days(config, default_days))
