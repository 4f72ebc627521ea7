"""
Transaction Module

Typed transactions decoded from the input feed and their application to
client accounts through the ledger.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum

from .amount import Amount
from .errors import ParseError

CLIENT_ID_MAX = 2 ** 16 - 1
TX_ID_MAX = 2 ** 32 - 1


class TransactionType(Enum):
    """Types of feed transactions"""
    DEPOSIT = "deposit"          # Credit to the client
    WITHDRAWAL = "withdrawal"    # Debit from available funds
    DISPUTE = "dispute"          # Claim against an earlier deposit
    RESOLVE = "resolve"          # Dispute closed in the client's favour
    CHARGEBACK = "chargeback"    # Dispute closed by reversing the deposit
    
    @property
    def carries_amount(self) -> bool:
        """Only deposits and withdrawals have an amount column"""
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


@dataclass(frozen=True)
class Transaction:
    """
    One decoded feed record.
    Dispute, resolve and chargeback reference the deposit's tx_id.
    """
    transaction_type: TransactionType
    client_id: int
    tx_id: int
    amount: Optional[Amount] = None
    
    def __post_init__(self):
        if not 0 <= self.client_id <= CLIENT_ID_MAX:
            raise ParseError(f"Client id {self.client_id} out of range")
        if not 0 <= self.tx_id <= TX_ID_MAX:
            raise ParseError(f"Transaction id {self.tx_id} out of range")
        
        if self.transaction_type.carries_amount and self.amount is None:
            raise ParseError(f"{self.transaction_type.value} requires an amount")
        if not self.transaction_type.carries_amount and self.amount is not None:
            raise ParseError(f"{self.transaction_type.value} does not take an amount")
    
    @property
    def label(self) -> str:
        return f"{self.transaction_type.value}({self.tx_id})"
    
    def apply(self, ledger) -> None:
        """
        Route to the client's account and run the matching operation

        Raises:
            PaymentsError: Any rule violation; the account is left unchanged
        """
        account = ledger.route(self.client_id, self.transaction_type)
        
        if self.transaction_type == TransactionType.DEPOSIT:
            account.deposit(self.tx_id, self.amount)
        elif self.transaction_type == TransactionType.WITHDRAWAL:
            account.withdraw(self.amount)
        elif self.transaction_type == TransactionType.DISPUTE:
            account.dispute(self.tx_id)
        elif self.transaction_type == TransactionType.RESOLVE:
            account.resolve(self.tx_id)
        elif self.transaction_type == TransactionType.CHARGEBACK:
            account.chargeback(self.tx_id)
