"""
Test suite for ledger module

Tests lazy account creation, transaction routing and balance snapshots.
"""

import pytest

from core_payments.accounts import Account
from core_payments.amount import Amount
from core_payments.errors import AccountNotFound
from core_payments.ledger import AccountSnapshot, Ledger
from core_payments.transactions import TransactionType


class TestLedgerRouting:
    """Test routing transactions to accounts"""
    
    def setup_method(self):
        self.ledger = Ledger()
    
    def test_deposit_creates_account(self):
        account = self.ledger.route(1, TransactionType.DEPOSIT)
        assert isinstance(account, Account)
        assert account.client_id == 1
        assert account.available.is_zero()
        assert not account.locked
        assert 1 in self.ledger
        assert len(self.ledger) == 1
    
    def test_same_account_returned(self):
        first = self.ledger.route(7, TransactionType.DEPOSIT)
        assert self.ledger.route(7, TransactionType.DEPOSIT) is first
        assert self.ledger.route(7, TransactionType.WITHDRAWAL) is first
        assert self.ledger.get_account(7) is first
    
    @pytest.mark.parametrize("transaction_type", [
        TransactionType.WITHDRAWAL,
        TransactionType.DISPUTE,
        TransactionType.RESOLVE,
        TransactionType.CHARGEBACK,
    ])
    def test_unknown_client_not_created(self, transaction_type):
        with pytest.raises(AccountNotFound) as exc_info:
            self.ledger.route(2, transaction_type)
        assert str(exc_info.value) == "Account 2 not found"
        assert 2 not in self.ledger
        assert len(self.ledger) == 0
    
    def test_get_account_unknown(self):
        with pytest.raises(AccountNotFound):
            self.ledger.get_account(3)
    
    def test_duplicate_policy_passed_to_accounts(self):
        ledger = Ledger(replace_duplicate_deposits=True)
        account = ledger.route(1, TransactionType.DEPOSIT)
        assert account.replace_duplicate_deposits
        assert not self.ledger.route(1, TransactionType.DEPOSIT).replace_duplicate_deposits


class TestLedgerSnapshot:
    """Test the final balance report"""
    
    def test_empty_snapshot(self):
        assert Ledger().snapshot() == []
    
    def test_snapshot_ordered_by_client(self):
        ledger = Ledger()
        for client_id in (3, 1, 2):
            ledger.route(client_id, TransactionType.DEPOSIT).deposit(client_id, Amount.parse("1.5"))
        
        snapshot = ledger.snapshot()
        assert [row.client_id for row in snapshot] == [1, 2, 3]
        assert [account.client_id for account in ledger.accounts()] == [3, 1, 2]
    
    def test_snapshot_values(self):
        ledger = Ledger()
        account = ledger.route(1, TransactionType.DEPOSIT)
        account.deposit(1, Amount.parse("3"))
        account.dispute(1)
        account.chargeback(1)
        account.deposit(2, Amount.parse("1.25"))
        
        assert ledger.snapshot() == [
            AccountSnapshot(
                client_id=1,
                available=Amount.parse("1.25"),
                held=Amount.zero(),
                total=Amount.parse("1.25"),
                locked=True
            )
        ]
    
    def test_snapshot_row(self):
        row = AccountSnapshot(
            client_id=2,
            available=Amount.parse("2"),
            held=Amount.parse("0.5"),
            total=Amount.parse("2.5"),
            locked=False
        ).to_row()
        assert row == ["2", "2.0000", "0.5000", "2.5000", "false"]
    
    def test_snapshot_is_a_copy(self):
        ledger = Ledger()
        account = ledger.route(1, TransactionType.DEPOSIT)
        account.deposit(1, Amount.parse("1"))
        snapshot = ledger.snapshot()
        account.deposit(2, Amount.parse("1"))
        assert snapshot[0].total == Amount.parse("1")
