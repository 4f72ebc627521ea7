"""
Account Management Module

Per-client account state: available, held and total balances, the lock
flag set by chargebacks, and the deposits that may still be disputed.
Every operation either applies completely or raises without touching state.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional, Union
from enum import Enum

from .amount import Amount
from .errors import (
    AccountLocked, DepositNotFound, DuplicateTransaction,
    InsufficientFunds, InvalidDepositState, PaymentsError
)


class DepositState(Enum):
    """Dispute lifecycle of a deposit"""
    NORMAL = "normal"              # Settled, may be disputed
    DISPUTED = "disputed"          # Funds held pending resolve or chargeback
    CHARGED_BACK = "charged_back"  # Reversed; terminal
    
    @property
    def label(self) -> str:
        return self.name.title().replace("_", "")


@dataclass
class Deposit:
    """
    Historical deposit still tracked for possible dispute.
    Charged back deposits are kept so later references keep failing.
    """
    amount: Amount
    state: DepositState = DepositState.NORMAL
    
    def ensure_state(self, tx_id: int, expected: DepositState) -> None:
        if self.state != expected:
            raise InvalidDepositState(tx_id, self.state, expected)


@dataclass
class Account:
    """
    Client account

    Invariants after every successful operation:
    total == available + held, and no balance below zero.
    """
    client_id: Optional[int] = None
    available: Amount = field(default_factory=Amount.zero)
    held: Amount = field(default_factory=Amount.zero)
    total: Amount = field(default_factory=Amount.zero)
    locked: bool = False
    replace_duplicate_deposits: bool = False
    deposits: Dict[int, Deposit] = field(default_factory=dict, repr=False)
    
    def can_debit(self) -> bool:
        """Check if account can be debited"""
        return not self.locked
    
    def get_deposit(self, tx_id: int) -> Optional[Deposit]:
        return self.deposits.get(tx_id)
    
    def deposit(self, tx_id: int, amount: Union[Amount, Decimal]) -> None:
        """
        Credit funds and remember the deposit for later disputes.

        Allowed on locked accounts. A repeated tx_id is rejected with
        DuplicateTransaction unless replace_duplicate_deposits is set, in
        which case the new deposit replaces the tracked one.
        """
        amount = self._to_amount(amount)
        if tx_id in self.deposits and not self.replace_duplicate_deposits:
            raise DuplicateTransaction(self.client_id, tx_id)
        
        available = self.available + amount
        total = self.total + amount
        
        self.deposits[tx_id] = Deposit(amount=amount)
        self.available = available
        self.total = total
    
    def withdraw(self, amount: Union[Amount, Decimal]) -> None:
        """Debit available funds; blocked once the account is locked"""
        amount = self._to_amount(amount)
        self._ensure_unlocked()
        if self.available < amount:
            raise InsufficientFunds(self.client_id, "available", amount, self.available)
        
        self.available -= amount
        self.total -= amount
    
    def dispute(self, tx_id: int) -> None:
        """Move a deposit's funds from available to held"""
        deposit = self._find_deposit(tx_id)
        deposit.ensure_state(tx_id, DepositState.NORMAL)
        # Funds may already have been withdrawn after the deposit
        if self.available < deposit.amount:
            raise InsufficientFunds(self.client_id, "available", deposit.amount, self.available)
        
        self.available -= deposit.amount
        self.held += deposit.amount
        deposit.state = DepositState.DISPUTED
    
    def resolve(self, tx_id: int) -> None:
        """Release held funds of a disputed deposit back to available"""
        deposit = self._find_deposit(tx_id)
        deposit.ensure_state(tx_id, DepositState.DISPUTED)
        
        self.held -= deposit.amount
        self.available += deposit.amount
        deposit.state = DepositState.NORMAL
    
    def chargeback(self, tx_id: int) -> None:
        """Remove held funds of a disputed deposit and lock the account"""
        self._ensure_unlocked()
        deposit = self._find_deposit(tx_id)
        deposit.ensure_state(tx_id, DepositState.DISPUTED)
        if self.total < deposit.amount:
            raise InsufficientFunds(self.client_id, "in total", deposit.amount, self.total)
        if self.held < deposit.amount:
            raise InsufficientFunds(self.client_id, "held", deposit.amount, self.held)
        
        self.held -= deposit.amount
        self.total -= deposit.amount
        deposit.state = DepositState.CHARGED_BACK
        self.locked = True
    
    def check_invariants(self) -> None:
        """Raise PaymentsError if the balances no longer add up"""
        if self.available + self.held != self.total:
            raise PaymentsError(
                f"Account {self.client_id}: total {self.total} != "
                f"available {self.available} + held {self.held}"
            )
    
    def _find_deposit(self, tx_id: int) -> Deposit:
        deposit = self.deposits.get(tx_id)
        if deposit is None:
            raise DepositNotFound(tx_id)
        return deposit
    
    def _ensure_unlocked(self) -> None:
        if self.locked:
            raise AccountLocked(self.client_id)
    
    @staticmethod
    def _to_amount(amount: Union[Amount, Decimal]) -> Amount:
        # Raises NegativeAmount for values below zero
        if isinstance(amount, Amount):
            return amount
        return Amount.from_decimal(amount)
