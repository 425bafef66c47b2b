"""Value objects for creditors, debtors and direct debit transactions.

Models coerce their input (text conversion, amount rounding, date parsing)
but do not reject semantically invalid values on construction. Each one
reports its problems through ``field_errors()``; :class:`DirectDebit`
decides when those become a :class:`FieldValidationError`.
"""
from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from common.datetime import parse_iso_date

from .converter import convert_decimal, convert_text
from .validators import (
    valid_bic,
    valid_creditor_identifier,
    valid_iban,
    valid_mandate_identifier,
)

__all__ = [
    "DEFAULT_REQUESTED_DATE",
    "LOCAL_INSTRUMENTS",
    "SEQUENCE_TYPES",
    "Account",
    "CreditorAccount",
    "DebtorAddress",
    "Transaction",
]

# Sentinel collection date, rendered as-is; banks read it as "earliest possible".
DEFAULT_REQUESTED_DATE = date(1999, 1, 1)

LOCAL_INSTRUMENTS = ("CORE", "COR1", "B2B")
SEQUENCE_TYPES = ("FRST", "OOFF", "RCUR", "FNAL")

MAX_AMOUNT = Decimal("999999999.99")


def _length_errors(label: str, value: Optional[str], minimum: int, maximum: int) -> List[str]:
    if value is None or len(value) < minimum:
        return [f"{label} is too short (minimum is {minimum} character{'s' if minimum > 1 else ''})"]
    if len(value) > maximum:
        return [f"{label} is too long (maximum is {maximum} characters)"]
    return []


def _coerce_date(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, (str, date)):
        return parse_iso_date(value)
    return value


class DebtorAddress(BaseModel):
    """Postal address of a debtor, either free-form lines or structured fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    country_code: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    street_name: Optional[str] = None
    building_number: Optional[str] = None
    post_code: Optional[str] = None
    town_name: Optional[str] = None

    @field_validator(
        "address_line1",
        "address_line2",
        "street_name",
        "building_number",
        "post_code",
        "town_name",
        mode="before",
    )
    @classmethod
    def convert_address_text(cls, value: Any) -> Optional[str]:
        return convert_text(value)

    @property
    def structured(self) -> bool:
        return any((self.street_name, self.building_number, self.post_code, self.town_name))

    @property
    def address_lines(self) -> List[str]:
        return [line for line in (self.address_line1, self.address_line2) if line]

    def field_errors(self) -> List[str]:
        errors: List[str] = []
        if self.country_code is not None and not (
            len(self.country_code) == 2 and self.country_code.isalpha() and self.country_code.isupper()
        ):
            errors.append("Country code is invalid")
        if self.structured and self.address_lines:
            errors.append("Address lines must not be combined with structured address fields")
        for label, value in (("Address line 1", self.address_line1), ("Address line 2", self.address_line2)):
            if value is not None and len(value) > 70:
                errors.append(f"{label} is too long (maximum is 70 characters)")
        for label, value, maximum in (
            ("Street name", self.street_name, 70),
            ("Building number", self.building_number, 16),
            ("Post code", self.post_code, 16),
            ("Town name", self.town_name, 35),
        ):
            if value is not None and len(value) > maximum:
                errors.append(f"{label} is too long (maximum is {maximum} characters)")
        return errors


class Account(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Optional[str] = None
    iban: Optional[str] = None
    bic: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def convert_name(cls, value: Any) -> Optional[str]:
        return convert_text(value)

    @field_validator("bic", mode="before")
    @classmethod
    def blank_bic(cls, value: Any) -> Any:
        return value or None

    def field_errors(self) -> List[str]:
        errors = _length_errors("Name", self.name, 1, 70)
        if not valid_iban(self.iban):
            errors.append(f"IBAN {self.iban} is invalid")
        if self.bic is not None and not valid_bic(self.bic):
            errors.append(f"BIC {self.bic} is invalid")
        return errors


class CreditorAccount(Account):
    """Account the direct debits are collected to, plus the SEPA creditor id."""

    creditor_identifier: Optional[str] = None

    def field_errors(self) -> List[str]:
        errors = super().field_errors()
        if not valid_creditor_identifier(self.creditor_identifier):
            errors.append(f"Creditor identifier {self.creditor_identifier} is invalid")
        return errors

    def scheme_errors(self) -> List[str]:
        """Checks for an account used only as original creditor scheme (amendments)."""
        errors: List[str] = []
        if self.name is None and self.creditor_identifier is None:
            errors.append("Original creditor account needs a name or a creditor identifier")
        if self.name is not None:
            errors.extend(_length_errors("Original creditor name", self.name, 1, 70))
        if self.creditor_identifier is not None and not valid_creditor_identifier(self.creditor_identifier):
            errors.append(f"Original creditor identifier {self.creditor_identifier} is invalid")
        return errors


class Transaction(BaseModel):
    """A single direct debit instruction against one debtor."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Optional[str] = None
    iban: Optional[str] = None
    bic: Optional[str] = None
    amount: Optional[Decimal] = None
    currency: str = "EUR"
    instruction: Optional[str] = None
    reference: str = "NOTPROVIDED"
    remittance_information: Optional[str] = None
    mandate_id: Optional[str] = None
    mandate_date_of_signature: Optional[date] = None
    local_instrument: str = "CORE"
    sequence_type: str = "OOFF"
    batch_booking: bool = True
    requested_date: date = DEFAULT_REQUESTED_DATE
    debtor_address: Optional[DebtorAddress] = None
    creditor_account: Optional[CreditorAccount] = None
    original_debtor_account: Optional[str] = None
    same_mandate_new_debtor_agent: bool = False
    original_creditor_account: Optional[CreditorAccount] = None

    @field_validator("name", "instruction", "reference", "remittance_information", mode="before")
    @classmethod
    def convert_free_text(cls, value: Any) -> Optional[str]:
        return convert_text(value)

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount(cls, value: Any) -> Optional[Decimal]:
        return convert_decimal(value)

    @field_validator("bic", "original_debtor_account", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return value or None

    @field_validator("mandate_date_of_signature", mode="before")
    @classmethod
    def parse_signature_date(cls, value: Any) -> Any:
        return _coerce_date(value)

    @field_validator("requested_date", mode="before")
    @classmethod
    def parse_requested_date(cls, value: Any) -> Any:
        value = _coerce_date(value)
        return DEFAULT_REQUESTED_DATE if value is None else value

    @property
    def has_amendment(self) -> bool:
        return bool(
            self.original_debtor_account
            or self.same_mandate_new_debtor_agent
            or self.original_creditor_account is not None
        )

    def field_errors(self, today: Optional[date] = None) -> List[str]:
        today = today or date.today()
        errors = _length_errors("Name", self.name, 1, 70)

        if not valid_iban(self.iban):
            errors.append(f"IBAN {self.iban} is invalid")
        if self.bic is not None and not valid_bic(self.bic):
            errors.append(f"BIC {self.bic} is invalid")

        if self.amount is None or self.amount <= 0:
            errors.append("Amount must be a number greater than 0")
        elif self.amount > MAX_AMOUNT:
            errors.append(f"Amount must be less than or equal to {MAX_AMOUNT}")

        if not (len(self.currency) == 3 and self.currency.isalpha() and self.currency.isupper()):
            errors.append(f"Currency {self.currency} is invalid")
        if self.instruction is not None:
            errors.extend(_length_errors("Instruction", self.instruction, 1, 35))
        errors.extend(_length_errors("Reference", self.reference, 1, 35))
        if self.remittance_information is not None:
            errors.extend(_length_errors("Remittance information", self.remittance_information, 1, 140))

        if not valid_mandate_identifier(self.mandate_id):
            errors.append(f"Mandate id {self.mandate_id} is invalid")
        if self.mandate_date_of_signature is None:
            errors.append("Mandate date of signature can't be blank")
        elif self.mandate_date_of_signature > today:
            errors.append("Mandate date of signature is in the future")

        if self.local_instrument not in LOCAL_INSTRUMENTS:
            errors.append(f"Local instrument {self.local_instrument} is not included in the list")
        if self.sequence_type not in SEQUENCE_TYPES:
            errors.append(f"Sequence type {self.sequence_type} is not included in the list")

        earliest = today + timedelta(days=1)
        if self.requested_date != DEFAULT_REQUESTED_DATE and self.requested_date < earliest:
            errors.append(f"Requested date must be greater or equal to {earliest.isoformat()}, or nil")

        if self.debtor_address is not None:
            errors.extend(self.debtor_address.field_errors())
        if self.creditor_account is not None:
            errors.extend(f"Creditor account: {e}" for e in self.creditor_account.field_errors())
        if self.original_debtor_account is not None and not valid_iban(self.original_debtor_account):
            errors.append(f"Original debtor account {self.original_debtor_account} is invalid")
        if self.original_creditor_account is not None:
            errors.extend(self.original_creditor_account.scheme_errors())
        return errors
