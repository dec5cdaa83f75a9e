from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

import structlog

from ..calculators.days import floor_days
from ..core.settings import BillingSettings, get_settings
from ..domain.enums import RiskLevel
from ..domain.models import CustomerAnalytics, CustomerRiskAssessment

D = Decimal

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RiskPolicy:
    acceptable_payment_days: int = 30
    late_payment_days: int = 45
    critical_payment_days: int = 60
    contact_alert_threshold_days: int = 30

    @classmethod
    def from_settings(cls, settings: Optional[BillingSettings] = None) -> "RiskPolicy":
        s = settings or get_settings()
        return cls(
            acceptable_payment_days=s.acceptable_payment_days,
            late_payment_days=s.late_payment_days,
            critical_payment_days=s.critical_payment_days,
            contact_alert_threshold_days=s.contact_alert_threshold_days,
        )


def days_since_last_contact(last_contact: Optional[datetime], now: datetime) -> Optional[int]:
    if last_contact is None:
        return None
    return floor_days(now, last_contact)


def needs_follow_up_alert(days_since_contact: Optional[int], *, policy: Optional[RiskPolicy] = None) -> bool:
    # no contact ever = needs alert
    if days_since_contact is None:
        return True
    p = policy or RiskPolicy.from_settings()
    return days_since_contact > p.contact_alert_threshold_days


def _payment_behaviour_points(avg_days: D, p: RiskPolicy) -> int:
    if avg_days > p.critical_payment_days:
        return 30
    if avg_days > p.late_payment_days:
        return 20
    if avg_days > p.acceptable_payment_days:
        return 10
    return 0


def _outstanding_points(outstanding: D) -> int:
    if outstanding > 10000:
        return 25
    if outstanding > 5000:
        return 15
    if outstanding > 1000:
        return 5
    return 0


def _contact_points(days: Optional[int], p: RiskPolicy) -> int:
    if days is None:
        return 0
    if days > p.contact_alert_threshold_days * 2:
        return 10
    if days > p.contact_alert_threshold_days:
        return 5
    return 0


def _complaint_points(complaints: int, revenue: D) -> int:
    # complaints per 10k revenue
    rate = (D(complaints) / revenue * D("10000")) if revenue > 0 else D("0")
    if rate > 5:
        return 10
    if rate > 2:
        return 5
    return 0


def _level_for(score: int) -> RiskLevel:
    if score >= 70:
        return RiskLevel.CRITICAL
    if score >= 45:
        return RiskLevel.HIGH
    if score >= 25:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def assess_customer_risk(
    analytics: CustomerAnalytics,
    *,
    policy: Optional[RiskPolicy] = None,
) -> CustomerRiskAssessment:
    """
    Score 0-100 from five factors:
      payment behaviour 0-30, outstanding amount 0-25, level-3 dunnings 0-25,
      contact gap 0-10, complaint rate 0-10.
    """
    p = policy or RiskPolicy.from_settings()

    factors: Dict[str, int] = {
        "paymentBehavior": _payment_behaviour_points(D(str(analytics.average_payment_days)), p),
        "overdueAmount": _outstanding_points(D(str(analytics.total_outstanding))),
        "dunningLevel": min(analytics.dunning_level3_count * 10, 25),
        "contactFrequency": _contact_points(analytics.days_since_last_contact, p),
        "complaintRate": _complaint_points(analytics.complaint_count, D(str(analytics.total_revenue))),
    }
    score = sum(factors.values())

    recommendations: List[str] = []
    if factors["paymentBehavior"] > 15:
        recommendations.append("Review payment terms and consider requiring prepayment")
    if factors["overdueAmount"] > 15:
        recommendations.append("Escalate dunning process and consider service suspension")
    if factors["dunningLevel"] > 10:
        recommendations.append("Consider legal action or debt collection")
    if factors["contactFrequency"] > 5:
        recommendations.append("Schedule immediate customer contact to maintain relationship")
    if factors["complaintRate"] > 5:
        recommendations.append("Investigate service quality issues and improve customer satisfaction")

    assessment = CustomerRiskAssessment(
        risk_level=_level_for(score),
        risk_score=score,
        factors=factors,
        recommendations=tuple(recommendations),
    )
    logger.debug("risk_assessed", risk_score=score, risk_level=assessment.risk_level.value)
    return assessment
