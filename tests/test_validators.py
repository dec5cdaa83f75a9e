from dataclasses import replace
from decimal import Decimal

import pytest

from billing_engine.data_validators import (
    ensure_valid_dunning_configuration,
    ensure_valid_margin_configuration,
    validate_dunning_configuration,
    validate_margin_configuration,
)
from billing_engine.domain.errors import InvalidConfiguration
from billing_engine.domain.models import DunningLevel, RouteMargin, ServiceMargin, VolumeTier, replace_margin_lists
from billing_engine.domain.money import Money


def eur(x):
    return Money.of(x, "EUR")


def codes(result):
    return [e.errorCode for e in result.errors]


def test_full_config_is_valid(full_config):
    res = validate_margin_configuration(full_config)

    assert res.ok is True
    assert res.errors == []
    assert ensure_valid_margin_configuration(full_config) is full_config


def test_duplicate_service_rejected(full_config):
    cfg = replace(
        full_config,
        service_margins=full_config.service_margins + (ServiceMargin("express", Decimal("5"), eur("10")),),
    )

    res = validate_margin_configuration(cfg)

    assert codes(res) == ["DUPLICATE_SERVICE"]
    assert res.errors[0].index == 2


def test_duplicate_route_rejected(full_config):
    cfg = replace(
        full_config,
        route_margins=full_config.route_margins + (RouteMargin("Berlin", "Munich", Decimal("11"), eur("41")),),
    )

    assert codes(validate_margin_configuration(cfg)) == ["DUPLICATE_ROUTE"]


def test_reverse_route_is_not_a_duplicate(full_config):
    cfg = replace(
        full_config,
        route_margins=full_config.route_margins + (RouteMargin("Munich", "Berlin", Decimal("11"), eur("41")),),
    )

    assert validate_margin_configuration(cfg).ok is True


def test_route_whitespace_is_a_warning(full_config):
    cfg = replace(full_config, route_margins=(RouteMargin(" Berlin", "Munich", Decimal("10"), eur("40")),))

    res = validate_margin_configuration(cfg)

    assert res.ok is True
    assert [w.warningCode for w in res.warnings] == ["WHITESPACE"]


def test_overlapping_tiers_rejected(full_config):
    cfg = replace(
        full_config,
        volume_tiers=(
            VolumeTier(1, 10, Decimal("18"), eur("60")),
            VolumeTier(10, 24, Decimal("12"), eur("45")),
        ),
    )

    res = validate_margin_configuration(cfg)

    assert codes(res) == ["OVERLAP"]
    assert res.errors[0].index == 1


def test_tier_gaps_are_allowed(full_config):
    cfg = replace(
        full_config,
        volume_tiers=(
            VolumeTier(1, 5, Decimal("18"), eur("60")),
            VolumeTier(20, None, Decimal("9"), eur("35")),
        ),
    )

    assert validate_margin_configuration(cfg).ok is True


def test_open_ended_tier_must_be_last(full_config):
    cfg = replace(
        full_config,
        volume_tiers=(
            VolumeTier(1, None, Decimal("18"), eur("60")),
            VolumeTier(30, 40, Decimal("12"), eur("45")),
        ),
    )

    assert codes(validate_margin_configuration(cfg)) == ["OPEN_ENDED_NOT_LAST"]


def test_inverted_tier_range(full_config):
    cfg = replace(full_config, volume_tiers=(VolumeTier(10, 5, Decimal("18"), eur("60")),))

    assert codes(validate_margin_configuration(cfg)) == ["INVALID_RANGE"]


def test_percentage_out_of_range(default_only_config):
    cfg = replace(default_only_config, default_margin_percentage=Decimal("120"))

    assert codes(validate_margin_configuration(cfg)) == ["OUT_OF_RANGE"]
    assert validate_margin_configuration(cfg, max_percentage=200).ok is True


def test_negative_minimum_rejected(default_only_config):
    cfg = replace(default_only_config, default_minimum_margin_amount=eur("-1"))

    assert codes(validate_margin_configuration(cfg)) == ["OUT_OF_RANGE"]


def test_mixed_currency_rejected(full_config):
    cfg = replace(
        full_config,
        service_margins=(ServiceMargin("express", Decimal("20"), Money.of("80", "USD")),),
    )

    assert codes(validate_margin_configuration(cfg)) == ["MIXED_CURRENCY"]


def test_ensure_valid_raises_with_every_error(default_only_config):
    cfg = replace(
        default_only_config,
        default_margin_percentage=Decimal("-5"),
        service_margins=(
            ServiceMargin("express", Decimal("20"), eur("80")),
            ServiceMargin("express", Decimal("25"), eur("80")),
        ),
    )

    with pytest.raises(InvalidConfiguration) as exc:
        ensure_valid_margin_configuration(cfg)

    assert exc.value.code == "INVALID_CONFIGURATION"
    assert exc.value.meta["errorCodes"] == ["DUPLICATE_SERVICE", "OUT_OF_RANGE"]
    assert len(exc.value.errors) == 2


def test_dunning_config_valid(dunning_config):
    res = validate_dunning_configuration(dunning_config)

    assert res.ok is True
    assert res.warnings == []


def test_dunning_thresholds_must_increase(dunning_config):
    cfg = replace(dunning_config, level2=DunningLevel(7, eur("10")))

    assert codes(validate_dunning_configuration(cfg)) == ["NON_MONOTONIC"]


def test_dunning_negative_values(dunning_config):
    cfg = replace(
        dunning_config,
        level1=DunningLevel(-1, eur("-5")),
        custom_payment_terms_days=-3,
    )

    assert sorted(codes(validate_dunning_configuration(cfg))) == [
        "INVALID_PAYMENT_TERMS",
        "OUT_OF_RANGE",
        "OUT_OF_RANGE",
    ]


def test_dunning_mixed_fee_currency(dunning_config):
    cfg = replace(dunning_config, level3=DunningLevel(21, Money.of("15", "USD"), suspend_service=True))

    with pytest.raises(InvalidConfiguration):
        ensure_valid_dunning_configuration(cfg)


def test_suspend_flag_below_level3_is_a_warning(dunning_config):
    cfg = replace(dunning_config, level1=DunningLevel(7, eur("5"), suspend_service=True))

    res = validate_dunning_configuration(cfg)

    assert res.ok is True
    assert [w.warningCode for w in res.warnings] == ["IGNORED"]


def test_save_replaces_whole_list_then_validates(full_config):
    saved = replace_margin_lists(
        full_config,
        route_margins=[RouteMargin("Hamburg", "Munich", Decimal("9"), eur("30"))],
    )

    assert [rm.key for rm in saved.route_margins] == [("Hamburg", "Munich")]
    # untouched categories stay as they were
    assert saved.service_margins == full_config.service_margins
    assert saved.volume_tiers == full_config.volume_tiers
    assert ensure_valid_margin_configuration(saved) is saved


def test_save_with_empty_list_clears_category(full_config):
    saved = replace_margin_lists(full_config, volume_tiers=[])

    assert saved.volume_tiers == ()
    assert saved.route_margins == full_config.route_margins
