from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from .enums import InvoiceStatus, MarginMethod, RiskLevel, RuleKind, Severity
from .money import Money

D = Decimal


# -----------------------------
# Margin configuration
# -----------------------------


@dataclass(frozen=True)
class ServiceMargin:
    service_type: str
    margin_percentage: D
    minimum_margin_amount: Money
    description: Optional[str] = None


@dataclass(frozen=True)
class RouteMargin:
    origin: str
    destination: str
    margin_percentage: D
    minimum_margin_amount: Money
    description: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.origin, self.destination)


@dataclass(frozen=True)
class VolumeTier:
    min_shipments_per_month: int
    max_shipments_per_month: Optional[int]  # None = open-ended
    margin_percentage: D
    minimum_margin_amount: Money
    description: Optional[str] = None

    def contains(self, count: int) -> bool:
        if count < self.min_shipments_per_month:
            return False
        return self.max_shipments_per_month is None or count <= self.max_shipments_per_month


@dataclass(frozen=True)
class MarginConfiguration:
    default_margin_percentage: D
    default_minimum_margin_amount: Money
    service_margins: Tuple[ServiceMargin, ...] = ()
    route_margins: Tuple[RouteMargin, ...] = ()
    volume_tiers: Tuple[VolumeTier, ...] = ()  # declaration order is kept
    customer_id: Optional[str] = None
    next_review_date: Optional[datetime] = None

    def all_amounts(self) -> List[Money]:
        out = [self.default_minimum_margin_amount]
        out.extend(m.minimum_margin_amount for m in self.service_margins)
        out.extend(m.minimum_margin_amount for m in self.route_margins)
        out.extend(t.minimum_margin_amount for t in self.volume_tiers)
        return out


def replace_margin_lists(
    config: MarginConfiguration,
    *,
    service_margins: Optional[Iterable[ServiceMargin]] = None,
    route_margins: Optional[Iterable[RouteMargin]] = None,
    volume_tiers: Optional[Iterable[VolumeTier]] = None,
) -> MarginConfiguration:
    """
    Save semantics: every category passed in replaces the stored list as a whole.
    Categories left as None stay untouched. Entries are never merged.
    """
    changes = {}
    if service_margins is not None:
        changes["service_margins"] = tuple(service_margins)
    if route_margins is not None:
        changes["route_margins"] = tuple(route_margins)
    if volume_tiers is not None:
        changes["volume_tiers"] = tuple(volume_tiers)
    return replace(config, **changes)


@dataclass(frozen=True)
class MarginQuery:
    revenue: Money
    service_type: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    monthly_shipment_count: Optional[int] = None


@dataclass(frozen=True)
class MarginDecision:
    margin_amount: Money
    margin_percentage: D  # effective rate, display only
    applied_rule_kind: RuleKind
    applied_method: MarginMethod
    percentage_margin: Money
    minimum_margin: Money
    configured_percentage: D
    rule_description: Optional[str] = None
    steps: Tuple[str, ...] = ()


# -----------------------------
# Dunning configuration
# -----------------------------


@dataclass(frozen=True)
class DunningLevel:
    days_overdue: int
    fee_amount: Money
    auto_send: bool = True
    suspend_service: bool = False  # only honoured on level 3


@dataclass(frozen=True)
class DunningConfiguration:
    level1: DunningLevel
    level2: DunningLevel
    level3: DunningLevel
    skip_dunning_process: bool = False
    allow_service_when_overdue: bool = False
    auto_reactivate_on_payment: bool = True
    require_prepayment: bool = False
    custom_payment_terms_days: Optional[int] = None
    service_suspended: bool = False
    customer_id: Optional[str] = None

    @property
    def levels(self) -> Tuple[Tuple[int, DunningLevel], ...]:
        return ((1, self.level1), (2, self.level2), (3, self.level3))

    def level(self, number: int) -> DunningLevel:
        for n, lvl in self.levels:
            if n == number:
                return lvl
        raise ValueError(f"unknown dunning level: {number}")


# -----------------------------
# Invoices
# -----------------------------


@dataclass(frozen=True)
class CollectionAttempt:
    method: str
    date: datetime
    result: Optional[str] = None


@dataclass(frozen=True)
class Invoice:
    due_date: datetime
    status: InvoiceStatus
    collection_attempts: Tuple[CollectionAttempt, ...] = ()
    invoice_id: Optional[str] = None
    total_amount: Optional[Money] = None


@dataclass(frozen=True)
class OverdueStatus:
    is_overdue: bool
    days_overdue: int
    severity: Optional[Severity]


@dataclass(frozen=True)
class DunningActions:
    triggered_levels: Tuple[int, ...]
    should_suspend: bool
    current_level: int = 0
    steps: Tuple[str, ...] = ()

    def pending_levels(self, already_applied: Iterable[int]) -> Tuple[int, ...]:
        done = set(already_applied)
        return tuple(n for n in self.triggered_levels if n not in done)


@dataclass(frozen=True)
class ServiceAccessCheck:
    is_suspended: bool
    can_create_orders: bool
    requires_prepayment: bool
    suspension_reason: Optional[str] = None
    outstanding_amount: Optional[Money] = None


# -----------------------------
# Customer risk
# -----------------------------


@dataclass(frozen=True)
class CustomerAnalytics:
    average_payment_days: D
    total_outstanding: D
    overdue_invoice_count: int
    dunning_level3_count: int
    complaint_count: int
    total_revenue: D
    days_since_last_contact: Optional[int] = None


@dataclass(frozen=True)
class CustomerRiskAssessment:
    risk_level: RiskLevel
    risk_score: int
    factors: Dict[str, int] = field(default_factory=dict)
    recommendations: Tuple[str, ...] = ()
