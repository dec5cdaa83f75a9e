from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..data_validators.common import ValidationError


class BillingEngineError(Exception):
    """
    Base error for the billing rules engine.
    - code: stable UPPER_SNAKE code callers can switch on
    - message: human readable
    - meta: explainability payload (strings only, render-safe)
    """

    code: str = "BILLING_ENGINE_ERROR"

    def __init__(self, message: str, meta: Optional[Dict[str, Any]] = None, *, code: Optional[str] = None):
        if code is not None:
            self.code = str(code)
        self.message = str(message)
        self.meta = meta or {}
        super().__init__(f"{self.code}: {self.message}")


class NoApplicableRule(BillingEngineError):
    """Raised when a margin is requested for a customer without a margin configuration."""

    code = "NO_APPLICABLE_RULE"


class CurrencyMismatch(BillingEngineError):
    """Raised before any arithmetic on amounts with different currency codes."""

    code = "CURRENCY_MISMATCH"

    def __init__(self, left: str, right: str, meta: Optional[Dict[str, Any]] = None):
        self.left = left
        self.right = right
        super().__init__(
            f"Amounts use different currencies: {left} vs {right}",
            {"left": left, "right": right, **(meta or {})},
        )


class InvalidConfiguration(BillingEngineError):
    """
    Raised at configuration-save time when an invariant is violated.
    `errors` holds every ValidationError found, not only the first.
    """

    code = "INVALID_CONFIGURATION"

    def __init__(self, errors: Sequence["ValidationError"], message: Optional[str] = None):
        self.errors: List["ValidationError"] = list(errors)
        codes = sorted({e.errorCode for e in self.errors})
        super().__init__(
            message or f"Configuration has {len(self.errors)} error(s): {codes}",
            {"errorCodes": codes},
        )
