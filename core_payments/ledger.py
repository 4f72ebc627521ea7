"""
Client Ledger

Registry of client accounts for a single run. Accounts are opened lazily
by a client's first deposit and are never removed.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List

from .accounts import Account
from .amount import Amount
from .errors import AccountNotFound
from .transactions import TransactionType


@dataclass(frozen=True)
class AccountSnapshot:
    """Final state of one client account"""
    client_id: int
    available: Amount
    held: Amount
    total: Amount
    locked: bool
    
    def to_row(self) -> List[str]:
        return [
            str(self.client_id),
            self.available.to_string(),
            self.held.to_string(),
            self.total.to_string(),
            "true" if self.locked else "false",
        ]


class Ledger:
    """
    Maps client ids to accounts and routes transactions to them
    """
    
    def __init__(self, replace_duplicate_deposits: bool = False):
        self.replace_duplicate_deposits = replace_duplicate_deposits
        self._accounts: Dict[int, Account] = {}
    
    def route(self, client_id: int, transaction_type: TransactionType) -> Account:
        """
        Get the account a transaction applies to

        Args:
            client_id: Client the transaction belongs to
            transaction_type: Deposits open the account if needed

        Returns:
            The client's Account

        Raises:
            AccountNotFound: If a non-deposit references an unknown client
        """
        account = self._accounts.get(client_id)
        if account is not None:
            return account
        
        if transaction_type != TransactionType.DEPOSIT:
            raise AccountNotFound(client_id)
        
        account = Account(
            client_id=client_id,
            replace_duplicate_deposits=self.replace_duplicate_deposits
        )
        self._accounts[client_id] = account
        return account
    
    def get_account(self, client_id: int) -> Account:
        account = self._accounts.get(client_id)
        if account is None:
            raise AccountNotFound(client_id)
        return account
    
    def accounts(self) -> Iterator[Account]:
        return iter(self._accounts.values())
    
    def snapshot(self) -> List[AccountSnapshot]:
        """Current balances of every known client, ordered by client id"""
        return [
            AccountSnapshot(
                client_id=client_id,
                available=account.available,
                held=account.held,
                total=account.total,
                locked=account.locked
            )
            for client_id, account in sorted(self._accounts.items())
        ]
    
    def __len__(self) -> int:
        return len(self._accounts)
    
    def __contains__(self, client_id: int) -> bool:
        return client_id in self._accounts
