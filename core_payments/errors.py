"""
Error kinds raised while applying transactions.

Every error is scoped to a single record: the stream processor logs it and
moves on to the next row. All of them are ValueErrors so callers that only
care about "this record was rejected" can catch the base class.
"""

from typing import Optional


class PaymentsError(ValueError):
    """Base class for record-level failures"""


class ParseError(PaymentsError):
    """Malformed record or field"""


class InvalidAmount(PaymentsError):
    """Text or value that cannot be represented as an Amount"""


class NegativeAmount(InvalidAmount):
    """Amount below zero"""
    
    def __init__(self, value):
        self.value = value
        super().__init__(f"Negative amount {value}")


class InsufficientFunds(PaymentsError):
    """Balance too small for the requested debit"""
    
    def __init__(self, client_id: Optional[int], balance: str, requested, present):
        self.client_id = client_id
        self.balance = balance
        self.requested = requested
        self.present = present
        super().__init__(
            f"Account {client_id}: Not enough funds {balance}: {requested} > {present}"
        )


class AccountLocked(PaymentsError):
    def __init__(self, client_id: Optional[int]):
        self.client_id = client_id
        super().__init__(f"Account {client_id} is locked")


class AccountNotFound(PaymentsError):
    def __init__(self, client_id: int):
        self.client_id = client_id
        super().__init__(f"Account {client_id} not found")


class DepositNotFound(PaymentsError):
    def __init__(self, tx_id: int):
        self.tx_id = tx_id
        super().__init__(f"Deposit not found {tx_id}")


class InvalidDepositState(PaymentsError):
    """Deposit is not in the state the transition requires"""
    
    def __init__(self, tx_id: int, actual, expected):
        self.tx_id = tx_id
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Deposit {tx_id} in state {actual.label} != {expected.label}"
        )


class DuplicateTransaction(PaymentsError):
    def __init__(self, client_id: Optional[int], tx_id: int):
        self.client_id = client_id
        self.tx_id = tx_id
        super().__init__(f"Account {client_id}: deposit {tx_id} already recorded")
