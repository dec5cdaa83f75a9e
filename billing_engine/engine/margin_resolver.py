from __future__ import annotations

from typing import List, Optional, Sequence, Type

import structlog

from ..calculators.dual_margin import calc_dual_margin
from ..core.settings import get_settings
from ..domain.errors import CurrencyMismatch, NoApplicableRule
from ..domain.models import MarginConfiguration, MarginDecision, MarginQuery
from ..explain.breakdown_builder import Breakdown
from ..rule_types.base import DECISION_APPLIED, MarginRule, RuleResult, rule_registry

logger = structlog.get_logger(__name__)

# Highest specificity first; first match wins
EXECUTION_ORDER: tuple[str, ...] = ("route", "service", "volume_tier", "default")


def _code(type_name: str) -> str:
    return f"{type_name.upper()}_MARGIN"


def _describe_skip(type_name: str, result: RuleResult) -> str:
    reason = str(result.meta.get("reason", "not applicable")).replace("_", " ")
    return f"{type_name} rule: {reason}"


class MarginResolver:
    """
    Deterministic margin resolver.

    - walks the rule tiers in execution order; the first APPLIED tier wins
    - the chosen tier's rate and minimum go through the dual margin calculation
    - pure: no I/O, no clock, no shared mutable state
    """

    def __init__(self, execution_order: Sequence[str] = EXECUTION_ORDER, *, places: Optional[int] = None):
        unknown = [t for t in execution_order if t not in rule_registry]
        if unknown:
            raise ValueError(f"executionOrder references unknown rule types: {unknown}")
        if not execution_order or execution_order[-1] != "default":
            raise ValueError("executionOrder must end with the 'default' rule")
        if len(set(execution_order)) != len(execution_order):
            raise ValueError(f"Duplicate rule types in executionOrder: {list(execution_order)}")

        self.execution_order = tuple(execution_order)
        self.places = get_settings().money_decimal_places if places is None else int(places)
        self._rules: List[MarginRule] = [self._instantiate(rule_registry[t]) for t in self.execution_order]

    @staticmethod
    def _instantiate(rule_cls: Type[MarginRule]) -> MarginRule:
        return rule_cls()

    def resolve(self, config: Optional[MarginConfiguration], query: MarginQuery) -> MarginDecision:
        if config is None:
            logger.warning("no_applicable_rule", reason="missing_margin_configuration")
            raise NoApplicableRule(
                "No margin configuration for this customer; please configure a margin rule first."
            )

        breakdown = Breakdown()
        breakdown.add_meta("MARGIN_INPUT", f"revenue={query.revenue}")

        selected = None
        for rule in self._rules:
            result = rule.match(config, query)
            if result.decision == DECISION_APPLIED:
                selected = result.selected
                breakdown.add_check(_code(rule.type_name), f"{rule.type_name} rule applies", status="OK")
                break
            breakdown.add_skip(_code(rule.type_name), _describe_skip(rule.type_name, result))

        # default always applies; the constructor guarantees it is last
        assert selected is not None

        try:
            dual = calc_dual_margin(
                query.revenue,
                selected.margin_percentage,
                selected.minimum_margin_amount,
                places=self.places,
            )
        except CurrencyMismatch:
            logger.warning(
                "currency_mismatch",
                revenue_currency=query.revenue.currency_code,
                rule_currency=selected.minimum_margin_amount.currency_code,
                rule_kind=selected.kind.value,
            )
            raise

        breakdown.add_step(
            "DUAL_MARGIN",
            f"{selected.margin_percentage}% = {dual.percentage_margin.amount}, "
            f"minimum = {dual.minimum_margin.amount}: {dual.applied_method.value} wins",
        )

        decision = MarginDecision(
            margin_amount=dual.margin_amount,
            margin_percentage=dual.effective_percentage,
            applied_rule_kind=selected.kind,
            applied_method=dual.applied_method,
            percentage_margin=dual.percentage_margin,
            minimum_margin=dual.minimum_margin,
            configured_percentage=selected.margin_percentage,
            rule_description=selected.description,
            steps=breakdown.as_tuple(),
        )

        logger.debug(
            "margin_resolved",
            customer_id=config.customer_id,
            rule_kind=decision.applied_rule_kind.value,
            method=decision.applied_method.value,
            margin_amount=str(decision.margin_amount.amount),
        )
        return decision


def resolve_margin(config: Optional[MarginConfiguration], query: MarginQuery) -> MarginDecision:
    """Resolve the single applicable margin rule and compute the margin amount."""
    return MarginResolver().resolve(config, query)
