from dataclasses import replace
from datetime import datetime, timedelta, timezone

from billing_engine.core.settings import reset_settings_cache
from billing_engine.domain.money import Money
from billing_engine.engine.review_schedule import needs_review, next_review_date
from billing_engine.engine.service_access import (
    check_service_access,
    compute_due_date,
    effective_payment_terms_days,
)


def eur(x):
    return Money.of(x, "EUR")


def test_current_customer_can_order(dunning_config):
    out = check_service_access(dunning_config, days_overdue=0)

    assert out.can_create_orders is True
    assert out.is_suspended is False
    assert out.suspension_reason is None


def test_suspended_customer_blocked(dunning_config):
    cfg = replace(dunning_config, service_suspended=True)

    out = check_service_access(cfg, days_overdue=40, total_overdue=eur("1200"))

    assert out.is_suspended is True
    assert out.can_create_orders is False
    assert out.outstanding_amount == eur("1200")
    assert "suspended" in out.suspension_reason


def test_prepayment_customer_may_order_even_when_overdue(dunning_config):
    cfg = replace(dunning_config, require_prepayment=True)

    out = check_service_access(cfg, days_overdue=12)

    assert out.can_create_orders is True
    assert out.requires_prepayment is True


def test_overdue_blocks_new_orders_unless_allowed(dunning_config):
    blocked = check_service_access(dunning_config, days_overdue=1)
    allowed = check_service_access(replace(dunning_config, allow_service_when_overdue=True), days_overdue=1)

    assert blocked.can_create_orders is False
    assert blocked.is_suspended is False
    assert allowed.can_create_orders is True


def test_payment_terms_custom_wins(dunning_config):
    assert effective_payment_terms_days(replace(dunning_config, custom_payment_terms_days=14)) == 14


def test_payment_terms_default_from_settings(monkeypatch, dunning_config):
    assert effective_payment_terms_days(dunning_config) == 30
    assert effective_payment_terms_days(None, default_days=45) == 45

    monkeypatch.setenv("BILLING_DEFAULT_PAYMENT_TERMS_DAYS", "21")
    reset_settings_cache()
    assert effective_payment_terms_days(None) == 21


def test_compute_due_date(dunning_config):
    issued = datetime(2025, 3, 1, tzinfo=timezone.utc)

    assert compute_due_date(issued, dunning_config) == issued + timedelta(days=30)
    assert compute_due_date(issued, replace(dunning_config, custom_payment_terms_days=10)) == datetime(
        2025, 3, 11, tzinfo=timezone.utc
    )


def test_next_review_defaults_to_90_days(fixed_now):
    assert next_review_date(fixed_now) == fixed_now + timedelta(days=90)
    assert next_review_date(fixed_now, 30) == fixed_now + timedelta(days=30)


def test_needs_review(fixed_now):
    assert needs_review(None, fixed_now) is False
    assert needs_review(fixed_now, fixed_now) is True
    assert needs_review(fixed_now + timedelta(days=1), fixed_now) is False
    # naive review dates compare as UTC
    assert needs_review(datetime(2024, 12, 1), fixed_now) is True
