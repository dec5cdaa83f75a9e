from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Type

from ..domain.enums import RuleKind
from ..domain.models import MarginConfiguration, MarginQuery
from ..domain.money import Money

D = Decimal

# Decisions (avoid string typos)
DECISION_APPLIED = "APPLIED"
DECISION_SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class SelectedRule:
    kind: RuleKind
    margin_percentage: D
    minimum_margin_amount: Money
    description: Optional[str] = None


@dataclass(frozen=True)
class RuleResult:
    """
    Result of matching one rule tier against a query.
    - decision: APPLIED / SKIPPED
    - selected: the matched rule (only when APPLIED)
    - meta: explainability payload for the breakdown
    """

    decision: str
    selected: Optional[SelectedRule]
    meta: Dict[str, Any]

    @staticmethod
    def applied(selected: SelectedRule, meta: Optional[Dict[str, Any]] = None) -> "RuleResult":
        return RuleResult(decision=DECISION_APPLIED, selected=selected, meta=meta or {})

    @staticmethod
    def skipped(meta: Optional[Dict[str, Any]] = None) -> "RuleResult":
        return RuleResult(decision=DECISION_SKIPPED, selected=None, meta=meta or {})


class MarginRule:
    """
    Base class for margin rule tiers. Every tier implements match(config, query).
    Tiers never raise on valid input; a tier that doesn't apply returns skipped().
    """

    type_name: str = "base"
    kind: RuleKind

    def match(self, config: MarginConfiguration, query: MarginQuery) -> RuleResult:
        raise NotImplementedError


# Registry: rule_type -> MarginRule class
rule_registry: Dict[str, Type[MarginRule]] = {}


def register(rule_cls: Type[MarginRule]) -> Type[MarginRule]:
    """
    Decorator to register a rule tier by its type_name.
    Fails fast on duplicate registrations.
    """
    key = getattr(rule_cls, "type_name", None)
    if not key or key == "base":
        raise ValueError(f"Rule class {rule_cls.__name__} has no type_name")

    if key in rule_registry and rule_registry[key] is not rule_cls:
        raise ValueError(
            f"Duplicate rule registration for type '{key}': "
            f"{rule_registry[key].__name__} vs {rule_cls.__name__}"
        )

    rule_registry[key] = rule_cls
    return rule_cls
