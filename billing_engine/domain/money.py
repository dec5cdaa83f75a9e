from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from .errors import CurrencyMismatch

D = Decimal

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")  # ISO-4217, e.g. EUR, USD


def to_decimal(value: Any) -> D:
    """str() first so floats from the store don't drag binary noise along."""
    if isinstance(value, D):
        return value
    return D(str(value))


def quantum(places: int) -> D:
    return D(1).scaleb(-int(places))


def round_half_up(value: D, places: int = 2) -> D:
    return value.quantize(quantum(places), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    amount: D
    currency_code: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        code = str(self.currency_code).strip().upper()
        if not _CURRENCY_RE.match(code):
            raise ValueError(f"invalid ISO-4217 currency code: {self.currency_code!r}")
        object.__setattr__(self, "currency_code", code)

    @classmethod
    def of(cls, amount: Any, currency_code: str = "EUR") -> "Money":
        return cls(to_decimal(amount), currency_code)

    @classmethod
    def zero(cls, currency_code: str) -> "Money":
        return cls(D("0"), currency_code)

    def quantized(self, places: int = 2) -> "Money":
        return Money(round_half_up(self.amount, places), self.currency_code)

    def ensure_same_currency(self, other: "Money") -> None:
        if self.currency_code != other.currency_code:
            raise CurrencyMismatch(self.currency_code, other.currency_code)

    def __add__(self, other: "Money") -> "Money":
        self.ensure_same_currency(other)
        return Money(self.amount + other.amount, self.currency_code)

    def __sub__(self, other: "Money") -> "Money":
        self.ensure_same_currency(other)
        return Money(self.amount - other.amount, self.currency_code)

    def __lt__(self, other: "Money") -> bool:
        self.ensure_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        self.ensure_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        self.ensure_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        self.ensure_same_currency(other)
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.currency_code} {self.amount}"


def ensure_same_currency(amounts: Iterable[Money]) -> str:
    """Return the shared currency code, or raise CurrencyMismatch."""
    code = None
    for m in amounts:
        if code is None:
            code = m.currency_code
        elif m.currency_code != code:
            raise CurrencyMismatch(code, m.currency_code)
    if code is None:
        raise ValueError("ensure_same_currency needs at least one amount")
    return code


def sum_money(amounts: Iterable[Money], currency_code: str) -> Money:
    total = Money.zero(currency_code)
    for m in amounts:
        total = total + m
    return total
