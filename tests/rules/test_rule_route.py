from decimal import Decimal

from billing_engine.domain.enums import RuleKind
from billing_engine.rule_types.route import RouteMarginRule


def test_route_rule_happy_exact_match(full_config, query):
    out = RouteMarginRule().match(full_config, query(origin="Berlin", destination="Munich"))

    assert out.decision == "APPLIED"
    assert out.selected.kind == RuleKind.ROUTE
    assert out.selected.margin_percentage == Decimal("10")
    assert out.selected.description == "BER-MUC lane"


def test_route_rule_is_directional(full_config, query):
    out = RouteMarginRule().match(full_config, query(origin="Munich", destination="Berlin"))

    assert out.decision == "SKIPPED"
    assert out.meta["reason"] == "no_matching_route"


def test_route_rule_is_case_sensitive(full_config, query):
    out = RouteMarginRule().match(full_config, query(origin="berlin", destination="munich"))

    assert out.decision == "SKIPPED"


def test_route_rule_skipped_without_destination(full_config, query):
    out = RouteMarginRule().match(full_config, query(origin="Berlin"))

    assert out.decision == "SKIPPED"
    assert out.meta["reason"] == "missing_route"
