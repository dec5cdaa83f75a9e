from __future__ import annotations

import os
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

import billing_engine.rule_types  # noqa: F401 (register all rules)

from billing_engine.core.settings import reset_settings_cache
from billing_engine.domain.models import (
    DunningConfiguration,
    DunningLevel,
    MarginConfiguration,
    MarginQuery,
    RouteMargin,
    ServiceMargin,
    VolumeTier,
)
from billing_engine.domain.money import Money


def eur(amount) -> Money:
    return Money.of(amount, "EUR")


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    # geen .env of BILLING_* uit de shell tijdens tests
    for key in list(os.environ):
        if key.startswith("BILLING_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(Path(__file__).resolve().parent)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def fixed_now():
    return datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def default_only_config():
    # 15%, minimum €50
    return MarginConfiguration(
        default_margin_percentage=Decimal("15"),
        default_minimum_margin_amount=eur("50"),
        customer_id="C-1001",
    )


@pytest.fixture
def full_config():
    return MarginConfiguration(
        default_margin_percentage=Decimal("15"),
        default_minimum_margin_amount=eur("50"),
        service_margins=(
            ServiceMargin("express", Decimal("20"), eur("80"), "Express surcharge"),
            ServiceMargin("freight", Decimal("8"), eur("30")),
        ),
        route_margins=(
            RouteMargin("Berlin", "Munich", Decimal("10"), eur("40"), "BER-MUC lane"),
            RouteMargin("Hamburg", "Berlin", Decimal("12"), eur("45")),
        ),
        volume_tiers=(
            VolumeTier(1, 9, Decimal("18"), eur("60")),
            VolumeTier(10, 24, Decimal("12"), eur("45")),
            VolumeTier(25, None, Decimal("9"), eur("35")),
        ),
        customer_id="C-2002",
    )


@pytest.fixture
def query():
    def _make(revenue="1000", **kw) -> MarginQuery:
        return MarginQuery(revenue=eur(revenue), **kw)

    return _make


@pytest.fixture
def dunning_config():
    return DunningConfiguration(
        level1=DunningLevel(7, eur("5"), auto_send=True),
        level2=DunningLevel(14, eur("10"), auto_send=True),
        level3=DunningLevel(21, eur("15"), auto_send=True, suspend_service=True),
        allow_service_when_overdue=False,
        auto_reactivate_on_payment=True,
        customer_id="C-1001",
    )
