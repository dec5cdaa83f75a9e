# billing_engine/schemas/dunning_config_v1.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from ..data_validators.dunning import ensure_valid_dunning_configuration
from ..domain.enums import InvoiceStatus
from ..domain.models import CollectionAttempt, DunningConfiguration, DunningLevel, Invoice
from .common_v1 import MoneyV1, WireModel


class DunningLevelV1(WireModel):
    days_overdue: int
    fee_amount: MoneyV1
    auto_send: bool = True

    def to_domain(self) -> DunningLevel:
        return DunningLevel(
            days_overdue=self.days_overdue,
            fee_amount=self.fee_amount.to_domain(),
            auto_send=self.auto_send,
        )


class DunningLevel3V1(DunningLevelV1):
    suspend_service: bool = False

    def to_domain(self) -> DunningLevel:
        return DunningLevel(
            days_overdue=self.days_overdue,
            fee_amount=self.fee_amount.to_domain(),
            auto_send=self.auto_send,
            suspend_service=self.suspend_service,
        )


class DunningConfigurationV1(WireModel):
    """Saved wholesale: every save carries all three levels and all flags."""

    customer_id: Optional[str] = None
    level1: DunningLevelV1
    level2: DunningLevelV1
    level3: DunningLevel3V1
    skip_dunning_process: bool = False
    allow_service_when_overdue: bool = False
    auto_reactivate_on_payment: bool = True
    require_prepayment: bool = False
    custom_payment_terms_days: Optional[int] = None
    service_suspended: bool = False

    def to_domain(self, *, validate: bool = True) -> DunningConfiguration:
        config = DunningConfiguration(
            level1=self.level1.to_domain(),
            level2=self.level2.to_domain(),
            level3=self.level3.to_domain(),
            skip_dunning_process=self.skip_dunning_process,
            allow_service_when_overdue=self.allow_service_when_overdue,
            auto_reactivate_on_payment=self.auto_reactivate_on_payment,
            require_prepayment=self.require_prepayment,
            custom_payment_terms_days=self.custom_payment_terms_days,
            service_suspended=self.service_suspended,
            customer_id=self.customer_id,
        )
        if validate:
            ensure_valid_dunning_configuration(config)
        return config


class CollectionAttemptV1(WireModel):
    method: str
    date: datetime
    result: Optional[str] = None

    def to_domain(self) -> CollectionAttempt:
        return CollectionAttempt(method=self.method, date=self.date, result=self.result)


class InvoiceV1(WireModel):
    """Subset of the invoice record the engine reads. Epoch timestamps are accepted."""

    model_config = ConfigDict(extra="ignore")

    invoice_id: Optional[str] = None
    due_date: datetime
    status: InvoiceStatus
    collection_attempts: List[CollectionAttemptV1] = Field(default_factory=list)
    total_amount: Optional[MoneyV1] = None

    def to_domain(self) -> Invoice:
        return Invoice(
            due_date=self.due_date,
            status=self.status,
            collection_attempts=tuple(a.to_domain() for a in self.collection_attempts),
            invoice_id=self.invoice_id,
            total_amount=self.total_amount.to_domain() if self.total_amount else None,
        )
