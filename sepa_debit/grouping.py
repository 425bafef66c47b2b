"""Partition transactions into payment-information batches.

Transactions sharing collection date, sequence type, batch booking flag and
creditor account end up in one batch. Batches are numbered in order of the
first transaction that opened them; the local instrument is deliberately not
part of the key since it has to be uniform across the whole message.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, NamedTuple

from .identifiers import batch_identifier
from .models import CreditorAccount, Transaction

__all__ = ["BatchKey", "Batch", "batch_key", "group"]


class BatchKey(NamedTuple):
    requested_date: date
    sequence_type: str
    batch_booking: bool
    account: CreditorAccount


@dataclass
class Batch:
    """Transactions rendered together as one ``PmtInf`` block."""

    sequence: int
    key: BatchKey
    transactions: List[Transaction] = field(default_factory=list)

    @property
    def account(self) -> CreditorAccount:
        return self.key.account

    @property
    def local_instrument(self) -> str:
        return self.transactions[0].local_instrument

    @property
    def control_sum(self) -> Decimal:
        return sum((t.amount for t in self.transactions), Decimal("0.00"))

    def identifier(self, message_id: str) -> str:
        return batch_identifier(message_id, self.sequence)


def batch_key(transaction: Transaction, default_account: CreditorAccount) -> BatchKey:
    return BatchKey(
        requested_date=transaction.requested_date,
        sequence_type=transaction.sequence_type,
        batch_booking=transaction.batch_booking,
        account=transaction.creditor_account or default_account,
    )


def group(transactions: Iterable[Transaction], default_account: CreditorAccount) -> List[Batch]:
    """Return batches in order of first appearance of their key."""
    batches: Dict[BatchKey, Batch] = {}
    for transaction in transactions:
        key = batch_key(transaction, default_account)
        batch = batches.get(key)
        if batch is None:
            batch = batches[key] = Batch(sequence=len(batches) + 1, key=key)
        batch.transactions.append(transaction)
    return list(batches.values())
