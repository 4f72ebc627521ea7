"""
Pydantic schemas for input feed rows
"""

from typing import Any, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .amount import Amount
from .errors import ParseError
from .transactions import CLIENT_ID_MAX, TX_ID_MAX, Transaction, TransactionType


class TransactionRecord(BaseModel):
    """Raw feed row: type, client, tx, amount"""
    model_config = ConfigDict(extra="ignore")
    
    type: TransactionType = Field(..., description="Transaction type")
    client: int = Field(..., ge=0, le=CLIENT_ID_MAX, description="Client id (u16)")
    tx: int = Field(..., ge=0, le=TX_ID_MAX, description="Transaction id (u32)")
    amount: Optional[str] = Field(None, description="Decimal amount as string")
    
    @field_validator("type", mode="before")
    @classmethod
    def lower_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v
    
    @field_validator("client", "tx", mode="before")
    @classmethod
    def integer_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not (v.isascii() and v.isdigit()):
                raise ValueError("must be an unsigned integer")
        return v
    
    @field_validator("amount", mode="before")
    @classmethod
    def empty_amount(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v
    
    def to_transaction(self) -> Transaction:
        """
        Build the typed transaction.

        Amounts of dispute, resolve and chargeback rows are ignored.

        Raises:
            ParseError: If a deposit or withdrawal has no amount
            InvalidAmount: If the amount text is not a non-negative decimal
        """
        amount = None
        if self.type.carries_amount:
            if self.amount is None:
                raise ParseError(f"{self.type.value} requires an amount")
            amount = Amount.parse(self.amount)
        
        return Transaction(
            transaction_type=self.type,
            client_id=self.client,
            tx_id=self.tx,
            amount=amount
        )


def decode_record(row: Mapping[str, Optional[str]]) -> Transaction:
    """
    Decode one feed row into a Transaction

    Raises:
        ParseError: If the row is malformed
        InvalidAmount: If the amount cannot be represented
    """
    overflow = row.get(None)
    if overflow and any(str(value).strip() for value in overflow):
        raise ParseError(f"Unexpected extra fields {overflow!r}")
    try:
        fields = {key: value for key, value in row.items() if isinstance(key, str)}
        record = TransactionRecord.model_validate(fields)
    except ValidationError as e:
        raise ParseError(_describe(e)) from None
    return record.to_transaction()


def record_label(row: Mapping[str, Optional[str]]) -> str:
    """Best-effort "type(tx)" label for a row that may not decode"""
    tx_type = (row.get("type") or "?").strip() or "?"
    tx_id = (row.get("tx") or "?").strip() or "?"
    return f"{tx_type}({tx_id})"


def _describe(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "row"
        parts.append(f"{location}: {detail.get('msg')}")
    return "; ".join(parts)
