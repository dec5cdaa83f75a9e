from __future__ import annotations

from enum import Enum
from typing import Dict


class ServiceType(str, Enum):
    STANDARD = "standard"
    EXPRESS = "express"
    OVERNIGHT = "overnight"
    INTERNATIONAL = "international"
    FREIGHT = "freight"
    OTHER = "other"


class CurrencyCode(str, Enum):
    EUR = "EUR"
    USD = "USD"


CURRENCY_SYMBOLS: Dict[str, str] = {
    CurrencyCode.EUR.value: "€",
    CurrencyCode.USD.value: "$",
}


def currency_symbol(code: str) -> str:
    """Falls back to the ISO code for currencies without a symbol entry."""
    return CURRENCY_SYMBOLS.get(str(code).upper(), str(code).upper())


class RuleKind(str, Enum):
    ROUTE = "route"
    SERVICE = "service"
    VOLUME_TIER = "volume_tier"
    DEFAULT = "default"


class MarginMethod(str, Enum):
    PERCENTAGE = "percentage"
    MINIMUM = "minimum"


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


# Closed invoices never count as overdue
CLOSED_STATUSES = frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED})


class Severity(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"
    SEVERE = "severe"


class CollectionMethod(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    LETTER = "letter"
    LEGAL_NOTICE = "legal_notice"
    DEBT_COLLECTION = "debt_collection"


class CollectionAction(str, Enum):
    """Advice returned by the collection advisor: the next method, or WAIT."""

    EMAIL = "email"
    PHONE = "phone"
    LETTER = "letter"
    LEGAL_NOTICE = "legal_notice"
    DEBT_COLLECTION = "debt_collection"
    WAIT = "wait"

    @property
    def label(self) -> str:
        return COLLECTION_ACTION_LABELS[self]


COLLECTION_ACTION_LABELS: Dict[CollectionAction, str] = {
    CollectionAction.EMAIL: "Send email reminder",
    CollectionAction.PHONE: "Make phone call",
    CollectionAction.LETTER: "Send formal letter",
    CollectionAction.LEGAL_NOTICE: "Send legal notice",
    CollectionAction.DEBT_COLLECTION: "Transfer to debt collection",
    CollectionAction.WAIT: "Wait before next action",
}


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
