"""Field level validation of accounts, addresses and transactions."""
import datetime as _dt
from decimal import Decimal

import pytest
from pydantic import ValidationError

from sepa_debit.models import (
    DEFAULT_REQUESTED_DATE,
    CreditorAccount,
    DebtorAddress,
    Transaction,
)
from sepa_fixtures import CREDITOR, in_days, transaction_options


def test_creditor_account_accepts_missing_options():
    account = CreditorAccount()
    assert account.name is None
    assert "Name is too short (minimum is 1 character)" in account.field_errors()


def test_valid_creditor_account_has_no_errors():
    assert CreditorAccount(**CREDITOR).field_errors() == []


def test_creditor_account_without_bic_is_valid():
    account = CreditorAccount(**{**CREDITOR, "bic": ""})
    assert account.bic is None
    assert account.field_errors() == []


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": "x" * 71}, "Name is too long (maximum is 70 characters)"),
        ({"iban": "DE00123"}, "IBAN DE00123 is invalid"),
        ({"bic": "NOPE"}, "BIC NOPE is invalid"),
        ({"creditor_identifier": "123"}, "Creditor identifier 123 is invalid"),
    ],
)
def test_creditor_account_errors(overrides, message):
    assert message in CreditorAccount(**{**CREDITOR, **overrides}).field_errors()


def test_accounts_with_same_fields_are_equal_and_hashable():
    a = CreditorAccount(**CREDITOR)
    b = CreditorAccount(**CREDITOR)
    assert a == b
    assert hash(a) == hash(b)


def test_unknown_option_is_rejected():
    with pytest.raises(ValidationError):
        Transaction(**transaction_options(colour="blue"))


def test_transaction_defaults():
    transaction = Transaction(**transaction_options())
    assert transaction.currency == "EUR"
    assert transaction.local_instrument == "CORE"
    assert transaction.sequence_type == "OOFF"
    assert transaction.batch_booking is True
    assert transaction.requested_date == DEFAULT_REQUESTED_DATE == _dt.date(1999, 1, 1)
    assert transaction.amount == Decimal("39.99")
    assert transaction.field_errors() == []


def test_transaction_reference_defaults_to_notprovided():
    options = transaction_options()
    del options["reference"]
    assert Transaction(**options).reference == "NOTPROVIDED"


def test_transaction_parses_date_strings():
    transaction = Transaction(
        **transaction_options(mandate_date_of_signature="2011-01-25", requested_date=None)
    )
    assert transaction.mandate_date_of_signature == _dt.date(2011, 1, 25)
    assert transaction.requested_date == DEFAULT_REQUESTED_DATE


def test_transaction_rejects_unparsable_date():
    with pytest.raises(ValidationError):
        Transaction(**transaction_options(mandate_date_of_signature="not a date"))


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": ""}, "Name is too short (minimum is 1 character)"),
        ({"iban": "DE21500500009876543211"}, "IBAN DE21500500009876543211 is invalid"),
        ({"bic": "SPUEDE"}, "BIC SPUEDE is invalid"),
        ({"amount": 0}, "Amount must be a number greater than 0"),
        ({"amount": "0.001"}, "Amount must be a number greater than 0"),
        ({"amount": "1000000000"}, "Amount must be less than or equal to 999999999.99"),
        ({"amount": "1e30"}, "Amount must be less than or equal to 999999999.99"),
        ({"currency": "eur"}, "Currency eur is invalid"),
        ({"instruction": "x" * 36}, "Instruction is too long (maximum is 35 characters)"),
        ({"reference": "x" * 36}, "Reference is too long (maximum is 35 characters)"),
        ({"remittance_information": "x" * 141}, "Remittance information is too long (maximum is 140 characters)"),
        ({"mandate_id": "with space"}, "Mandate id with space is invalid"),
        ({"mandate_date_of_signature": None}, "Mandate date of signature can't be blank"),
        ({"mandate_date_of_signature": in_days(1)}, "Mandate date of signature is in the future"),
        ({"local_instrument": "FOO"}, "Local instrument FOO is not included in the list"),
        ({"sequence_type": "LAST"}, "Sequence type LAST is not included in the list"),
        ({"original_debtor_account": "NL00RABO"}, "Original debtor account NL00RABO is invalid"),
    ],
)
def test_transaction_field_errors(overrides, message):
    assert message in Transaction(**transaction_options(**overrides)).field_errors()


def test_requested_date_must_be_after_today():
    today = Transaction(**transaction_options(requested_date=in_days(0)))
    tomorrow = Transaction(**transaction_options(requested_date=in_days(1)))
    assert any(e.startswith("Requested date must be greater or equal to") for e in today.field_errors())
    assert tomorrow.field_errors() == []


def test_creditor_account_override_is_validated():
    transaction = Transaction(
        **transaction_options(creditor_account=CreditorAccount(name="Creditor Inc.", iban="NL08RABO0135742099"))
    )
    assert "Creditor account: Creditor identifier None is invalid" in transaction.field_errors()


def test_original_creditor_account_needs_only_scheme_fields():
    original = CreditorAccount(creditor_identifier="NL53ZZZ091734220000", name="Creditor Inc.")
    transaction = Transaction(**transaction_options(original_creditor_account=original))
    assert transaction.has_amendment
    assert transaction.field_errors() == []


def test_amendment_flags():
    assert not Transaction(**transaction_options()).has_amendment
    assert Transaction(**transaction_options(same_mandate_new_debtor_agent=True)).has_amendment
    assert Transaction(**transaction_options(original_debtor_account="NL08RABO0135742099")).has_amendment


def test_debtor_address_kinds():
    lines = DebtorAddress(country_code="CH", address_line1="Mustergasse 123", address_line2="1234 Musterstadt")
    structured = DebtorAddress(
        country_code="CH", street_name="Mustergasse", building_number="123", post_code="1234", town_name="Musterstadt"
    )
    assert not lines.structured
    assert lines.address_lines == ["Mustergasse 123", "1234 Musterstadt"]
    assert structured.structured
    assert lines.field_errors() == [] and structured.field_errors() == []


def test_debtor_address_rejects_mixed_representations():
    address = DebtorAddress(country_code="CH", address_line1="Mustergasse 123", town_name="Musterstadt")
    assert "Address lines must not be combined with structured address fields" in address.field_errors()


def test_debtor_address_country_code():
    assert "Country code is invalid" in DebtorAddress(country_code="Schweiz").field_errors()


def test_debtor_address_text_is_converted():
    address = DebtorAddress(
        country_code="CH", address_line1="Hof_1 @ Nord!\nEG", address_line2="Zürich € Süd"
    )
    assert address.address_lines == ["Hof-1 (at) Nord EG", "Zürich E Süd"]
    structured = DebtorAddress(street_name="Muster_gasse!", building_number="12a#", town_name="Bern\r\n")
    assert (structured.street_name, structured.building_number, structured.town_name) == (
        "Muster-gasse",
        "12a",
        "Bern",
    )


def test_transaction_accepts_address_as_mapping():
    transaction = Transaction(**transaction_options(debtor_address={"country_code": "CH", "address_line1": "Street 1"}))
    assert isinstance(transaction.debtor_address, DebtorAddress)
