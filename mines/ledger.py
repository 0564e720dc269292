"""Player balance bookkeeping."""

from __future__ import annotations

import math

from .board import MinesError


class InsufficientFunds(MinesError):
    """Raised when a debit exceeds the available balance."""


class InvalidAmount(MinesError):
    """Raised for non-positive or non-finite ledger amounts."""


def _check_amount(amount: float) -> float:
    value = float(amount)
    if not math.isfinite(value) or value <= 0:
        raise InvalidAmount(f"Amount must be positive, got {amount!r}.")
    return value


class BalanceLedger:
    """In-memory balance that never goes negative."""

    def __init__(self, starting_balance: float = 1000.0) -> None:
        if starting_balance < 0:
            raise InvalidAmount("Starting balance cannot be negative.")
        self.starting_balance = float(starting_balance)
        self._balance = self.starting_balance

    def current_balance(self) -> float:
        return self._balance

    def can_afford(self, amount: float) -> bool:
        return amount <= self._balance

    def debit(self, amount: float) -> float:
        value = _check_amount(amount)
        if value > self._balance:
            raise InsufficientFunds(f"Balance {self._balance:.2f} is below {value:.2f}.")
        self._balance -= value
        return self._balance

    def credit(self, amount: float) -> float:
        # Lost games settle with a zero payout.
        value = float(amount)
        if not math.isfinite(value) or value < 0:
            raise InvalidAmount(f"Credit must be non-negative, got {amount!r}.")
        self._balance += value
        return self._balance

    def deposit(self, amount: float) -> float:
        return self.credit(_check_amount(amount))

    def reset(self, amount: float | None = None) -> float:
        if amount is None:
            amount = self.starting_balance
        value = float(amount)
        if not math.isfinite(value) or value < 0:
            raise InvalidAmount(f"Balance cannot be reset to {amount!r}.")
        self._balance = value
        return self._balance
