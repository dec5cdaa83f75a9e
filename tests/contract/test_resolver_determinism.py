import itertools
from datetime import datetime, timedelta, timezone

import pytest

from billing_engine.domain.enums import InvoiceStatus, RuleKind, Severity
from billing_engine.domain.models import MarginQuery
from billing_engine.domain.money import Money
from billing_engine.engine import classify_overdue, determine_dunning_actions, resolve_margin

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

QUERIES = [
    dict(origin="Berlin", destination="Munich", service_type="express", monthly_shipment_count=10),
    dict(origin="Hamburg", destination="Berlin", monthly_shipment_count=3),
    dict(service_type="freight", monthly_shipment_count=50),
    dict(monthly_shipment_count=12),
    dict(),
]


@pytest.mark.parametrize("kw", QUERIES)
@pytest.mark.parametrize("revenue", ["0", "199.99", "333.33", "1000", "98765.43"])
def test_resolution_is_idempotent(full_config, kw, revenue):
    q = MarginQuery(revenue=Money.of(revenue, "EUR"), **kw)

    first = resolve_margin(full_config, q)
    second = resolve_margin(full_config, q)

    assert first == second
    assert first.margin_amount >= first.minimum_margin
    assert first.margin_amount >= first.percentage_margin


@pytest.mark.parametrize("kw", QUERIES[:2])
def test_route_always_beats_service(full_config, kw):
    q = MarginQuery(revenue=Money.of("1000", "EUR"), **{**kw, "service_type": "express"})

    assert resolve_margin(full_config, q).applied_rule_kind == RuleKind.ROUTE


@pytest.mark.parametrize(
    "offset_hours, status",
    itertools.product(range(-24 * 40, 24 * 10, 7), list(InvoiceStatus)),
)
def test_overdue_is_total(offset_hours, status):
    out = classify_overdue(NOW + timedelta(hours=offset_hours), status, NOW)

    assert out.severity in (None, Severity.WARNING, Severity.CRITICAL, Severity.SEVERE)
    assert out.days_overdue >= 0
    assert out.is_overdue == (out.days_overdue > 0)
    if status in (InvoiceStatus.PAID, InvoiceStatus.CANCELLED):
        assert out.severity is None
        assert out.is_overdue is False


@pytest.mark.parametrize("days", range(0, 60))
def test_level3_implies_lower_levels(dunning_config, days):
    status = classify_overdue(NOW - timedelta(days=days), "sent", NOW)

    out = determine_dunning_actions(dunning_config, status)

    if 3 in out.triggered_levels:
        assert out.triggered_levels == (1, 2, 3)
    assert list(out.triggered_levels) == sorted(out.triggered_levels)
