"""Whole-message checks run right before a document is rendered."""
from __future__ import annotations

from typing import List, Sequence

from .errors import FieldValidationError, MixedInstrumentError, SchemaCompatibilityError
from .grouping import Batch
from .identifiers import check_identifier_length
from .models import CreditorAccount, Transaction
from .schemas import SchemaProfile

__all__ = ["compatibility_errors", "validate_message"]


def compatibility_errors(
    profile: SchemaProfile, account: CreditorAccount, transactions: Sequence[Transaction]
) -> List[str]:
    """Return the reasons *profile* cannot represent this message (empty if it can)."""
    reasons: List[str] = []
    accounts = [account] + [t.creditor_account for t in transactions if t.creditor_account]
    if profile.creditor_bic_required and any(a.bic is None for a in accounts):
        reasons.append("BIC is required for the creditor agent")

    for transaction in transactions:
        label = f"transaction {transaction.reference}"
        if profile.debtor_bic_required and transaction.bic is None:
            reasons.append(f"BIC is required for the debtor agent ({label})")
        if not profile.accepts_currency(transaction.currency):
            reasons.append(f"currency {transaction.currency} is not allowed ({label})")
        if transaction.local_instrument not in profile.local_instruments:
            reasons.append(f"local instrument {transaction.local_instrument} is not allowed ({label})")
        address = transaction.debtor_address
        if address is not None and address.structured and not profile.structured_address:
            reasons.append(f"structured debtor address is not supported ({label})")
        if transaction.has_amendment and not profile.amendments:
            reasons.append(f"mandate amendments are not supported ({label})")
    return reasons


def validate_message(
    message_id: str,
    account: CreditorAccount,
    transactions: Sequence[Transaction],
    batches: Sequence[Batch],
    profile: SchemaProfile,
) -> None:
    """Raise the first failing check; return ``None`` when the message is renderable.

    Order: creditor and message fields, local instrument uniformity, schema
    compatibility, identifier lengths.
    """
    errors = account.field_errors()
    if not transactions:
        errors.append("Transactions can't be blank")
    if errors:
        raise FieldValidationError(errors)

    instruments = {t.local_instrument for t in transactions}
    if len(instruments) > 1:
        raise MixedInstrumentError(instruments)

    reasons = compatibility_errors(profile, account, transactions)
    if reasons:
        raise SchemaCompatibilityError(profile.name, reasons)

    check_identifier_length(message_id, profile.max_identifier_length)
    for batch in batches:
        check_identifier_length(batch.identifier(message_id), profile.max_identifier_length)
