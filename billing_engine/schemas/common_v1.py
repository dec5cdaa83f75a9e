# billing_engine/schemas/common_v1.py
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..domain.money import Money


class WireModel(BaseModel):
    """
    Base for payloads coming from the remote store.
    camelCase on the wire, snake_case in Python; unknown fields are rejected.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class MoneyV1(WireModel):
    amount: Decimal
    currency_code: str = Field(pattern=r"^[A-Z]{3}$")

    def to_domain(self) -> Money:
        return Money(self.amount, self.currency_code)

    @classmethod
    def from_domain(cls, m: Money) -> "MoneyV1":
        return cls(amount=m.amount, currency_code=m.currency_code)
