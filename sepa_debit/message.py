"""The direct debit message: collects transactions and renders pain.008."""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from common.metrics import (
    messages_rendered_total,
    render_failures_total,
    transactions_added_total,
    transactions_rejected_total,
)

from . import config
from .errors import FieldValidationError, ReferenceNotFoundError, SepaError
from .grouping import Batch, group
from .identifiers import IdentifierSource, RandomIdentifierSource
from .iso20022 import Clock, SystemClock, build_pain008
from .models import CreditorAccount, Transaction
from .schemas import get_profile
from .validation import validate_message
from .validators import valid_message_identifier

__all__ = ["DirectDebit"]

logger = logging.getLogger(__name__)


def _pydantic_errors(exc: ValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "transaction"
        messages.append(f"{location}: {error['msg']}")
    return messages


class DirectDebit:
    """A pain.008 message for one creditor.

    Transactions are validated when added and rejected with
    :class:`FieldValidationError` if anything is wrong with them. The creditor
    account, local instrument uniformity, schema compatibility and identifier
    lengths are only checked by :meth:`to_xml`, since they depend on the
    complete message and the chosen schema.

    The message id is generated on first use and then kept, so ids returned
    by :meth:`batch_id` and :meth:`batch_ids` match the rendered document.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        iban: Optional[str] = None,
        bic: Optional[str] = None,
        creditor_identifier: Optional[str] = None,
        *,
        message_identification: Optional[str] = None,
        identifier_source: Optional[IdentifierSource] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        try:
            self.account = CreditorAccount(
                name=name, iban=iban, bic=bic, creditor_identifier=creditor_identifier
            )
        except ValidationError as exc:
            raise FieldValidationError(_pydantic_errors(exc)) from exc
        self.transactions: List[Transaction] = []
        self._identifier_source = identifier_source or RandomIdentifierSource()
        self._clock = clock or SystemClock()
        self._message_identification: Optional[str] = None
        if message_identification is not None:
            self.message_identification = message_identification

    # ------------------------------------------------------------------
    @property
    def message_identification(self) -> str:
        if self._message_identification is None:
            self._message_identification = self._identifier_source.new()
        return self._message_identification

    @message_identification.setter
    def message_identification(self, value: str) -> None:
        if not isinstance(value, str) or not valid_message_identifier(value):
            raise FieldValidationError(f"Message identification {value!r} is invalid")
        self._message_identification = value

    # ------------------------------------------------------------------
    def add_transaction(
        self, transaction: Union[Transaction, Mapping[str, Any], None] = None, **options: Any
    ) -> Transaction:
        """Validate and append a transaction; return the stored value.

        Accepts a ready :class:`Transaction`, a mapping of its fields, or the
        fields as keyword options. Nothing is stored if validation fails.
        """
        if transaction is not None and options:
            raise TypeError("pass either a transaction or keyword options, not both")
        if isinstance(transaction, Mapping):
            options, transaction = dict(transaction), None
        elif transaction is not None and not isinstance(transaction, Transaction):
            raise TypeError(f"expected a Transaction or a mapping, got {type(transaction).__name__}")

        if transaction is None:
            try:
                transaction = Transaction(**options)
            except ValidationError as exc:
                raise self._rejection(_pydantic_errors(exc), options.get("reference")) from exc

        errors = transaction.field_errors()
        if errors:
            raise self._rejection(errors, transaction.reference)

        self.transactions.append(transaction)
        transactions_added_total.inc()
        logger.debug(
            "transaction added",
            extra={"message_id": self._message_identification, "reference": transaction.reference},
        )
        return transaction

    def _rejection(self, errors: List[str], reference: Any) -> FieldValidationError:
        transactions_rejected_total.inc()
        logger.warning(
            "transaction rejected: %s",
            "; ".join(errors),
            extra={"reference": reference},
        )
        return FieldValidationError(errors)

    # ------------------------------------------------------------------
    @property
    def batches(self) -> List[Batch]:
        return group(self.transactions, self.account)

    def batch_id(self, reference: str) -> str:
        """Return the payment information id of the batch holding *reference*."""
        message_id = self.message_identification
        for batch in self.batches:
            if any(t.reference == reference for t in batch.transactions):
                return batch.identifier(message_id)
        raise ReferenceNotFoundError(reference)

    def batch_ids(self) -> List[str]:
        message_id = self.message_identification
        return [batch.identifier(message_id) for batch in self.batches]

    # ------------------------------------------------------------------
    def to_xml(self, schema_name: Optional[str] = None) -> str:
        """Validate the whole message against *schema_name* and render it."""
        profile = get_profile(schema_name or config.DEFAULT_SCHEMA)
        message_id = self.message_identification
        batches = self.batches
        log_extra = {"message_id": message_id, "schema": profile.name}

        try:
            validate_message(message_id, self.account, self.transactions, batches, profile)
        except SepaError as exc:
            render_failures_total.labels(schema=profile.name, reason=type(exc).__name__).inc()
            logger.warning("render aborted: %s", exc, extra=log_extra)
            raise

        xml = build_pain008(
            message_id=message_id,
            account=self.account,
            batches=batches,
            profile=profile,
            clock=self._clock,
        )
        messages_rendered_total.labels(schema=profile.name).inc()
        logger.info(
            "rendered %d transaction(s) in %d batch(es)",
            len(self.transactions),
            len(batches),
            extra=log_extra,
        )
        return xml
