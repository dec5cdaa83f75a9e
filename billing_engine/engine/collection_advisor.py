from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Sequence, Tuple

import structlog

from ..calculators.days import floor_days
from ..core.settings import BillingSettings, get_settings
from ..domain.enums import CollectionAction, CollectionMethod
from ..domain.models import CollectionAttempt

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CollectionPolicy:
    email_followup_days: int = 7
    escalation_days: int = 14

    @classmethod
    def from_settings(cls, settings: Optional[BillingSettings] = None) -> "CollectionPolicy":
        s = settings or get_settings()
        return cls(email_followup_days=s.email_followup_days, escalation_days=s.collection_escalation_days)

    def ladder(self) -> Dict[str, Tuple[int, CollectionAction]]:
        """last method -> (min days since it, next action)"""
        return {
            CollectionMethod.EMAIL.value: (self.email_followup_days, CollectionAction.PHONE),
            CollectionMethod.PHONE.value: (self.escalation_days, CollectionAction.LETTER),
            CollectionMethod.LETTER.value: (self.escalation_days, CollectionAction.LEGAL_NOTICE),
            CollectionMethod.LEGAL_NOTICE.value: (self.escalation_days, CollectionAction.DEBT_COLLECTION),
        }


def next_collection_action(
    attempts: Sequence[CollectionAttempt],
    now: datetime,
    *,
    policy: Optional[CollectionPolicy] = None,
) -> CollectionAction:
    """
    Advisory only. Looks at the most recent attempt (last in the list) and the
    whole days elapsed since it. No attempts yet -> email. Debt collection,
    unknown methods and attempts that are too recent -> WAIT.
    """
    if not attempts:
        return CollectionAction.EMAIL

    p = policy or CollectionPolicy.from_settings()
    last = attempts[-1]
    method = getattr(last.method, "value", last.method)
    elapsed = floor_days(now, last.date)

    step = p.ladder().get(method)
    if step is None:
        advice = CollectionAction.WAIT
    else:
        min_days, action = step
        advice = action if elapsed >= min_days else CollectionAction.WAIT

    logger.debug("collection_advice", last_method=method, elapsed_days=elapsed, advice=advice.value)
    return advice
