from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog

from ..calculators.days import ceil_days
from ..core.settings import BillingSettings, get_settings
from ..domain.enums import CLOSED_STATUSES, InvoiceStatus, Severity
from ..domain.models import Invoice, OverdueStatus

logger = structlog.get_logger(__name__)

NOT_OVERDUE = OverdueStatus(is_overdue=False, days_overdue=0, severity=None)


@dataclass(frozen=True)
class OverduePolicy:
    due_soon_window_days: int = 3
    severe_overdue_days: int = 30

    @classmethod
    def from_settings(cls, settings: Optional[BillingSettings] = None) -> "OverduePolicy":
        s = settings or get_settings()
        return cls(due_soon_window_days=s.due_soon_window_days, severe_overdue_days=s.severe_overdue_days)


def classify_overdue(
    due_date: datetime,
    status: InvoiceStatus | str,
    now: datetime,
    *,
    policy: Optional[OverduePolicy] = None,
) -> OverdueStatus:
    """
    Total function: every (due_date, status, now) maps to exactly one OverdueStatus.

    Bands, most urgent check first with early return:
      warning   0 < days_until_due <= 3
      critical  0 <= days_overdue < 30
      severe    days_overdue >= 30
      None      otherwise
    Paid and cancelled invoices are never overdue.
    """
    if InvoiceStatus(status) in CLOSED_STATUSES:
        return NOT_OVERDUE

    p = policy or OverduePolicy.from_settings()

    days_until_due = ceil_days(due_date, now)
    days_overdue = -days_until_due

    if 0 < days_until_due <= p.due_soon_window_days:
        severity: Optional[Severity] = Severity.WARNING
    elif 0 <= days_overdue < p.severe_overdue_days:
        severity = Severity.CRITICAL
    elif days_overdue >= p.severe_overdue_days:
        severity = Severity.SEVERE
    else:
        severity = None

    out = OverdueStatus(
        is_overdue=days_overdue > 0,
        days_overdue=max(0, days_overdue),
        severity=severity,
    )
    logger.debug(
        "overdue_classified",
        days_until_due=days_until_due,
        severity=severity.value if severity else None,
    )
    return out


def classify_invoice(invoice: Invoice, now: datetime, *, policy: Optional[OverduePolicy] = None) -> OverdueStatus:
    return classify_overdue(invoice.due_date, invoice.status, now, policy=policy)
