"""
Billing rules engine for the freight back office.

Pure functions over already-fetched configuration and invoice records:
margin resolution, overdue classification, dunning escalation and
collection advice. Callers fetch, persist and send; the engine decides.
"""
from __future__ import annotations

from .domain import (  # noqa
    CollectionAction,
    CurrencyMismatch,
    DunningActions,
    DunningConfiguration,
    InvalidConfiguration,
    MarginConfiguration,
    MarginDecision,
    MarginQuery,
    Money,
    NoApplicableRule,
    OverdueStatus,
)
from .engine import (  # noqa
    classify_overdue,
    determine_dunning_actions,
    next_collection_action,
    resolve_margin,
    should_reactivate,
)

__version__ = "0.1.0"
