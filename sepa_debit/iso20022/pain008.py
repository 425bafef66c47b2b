"""Build ISO 20022 pain.008 (SEPA Direct Debit initiation) XML.

Covers pain.008.001.02, .001.08, .002.02 and .003.02. Uses stdlib ElementTree;
namespaces are written as plain attributes on ``Document`` so nothing is
registered process-wide.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from common.datetime import utc_now_iso

from ..grouping import Batch
from ..models import CreditorAccount, DebtorAddress, Transaction
from ..schemas import XSI_NAMESPACE, SchemaProfile

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
NOT_PROVIDED = "NOTPROVIDED"
SAME_MANDATE_NEW_DEBTOR_AGENT = "SMNDA"


class Clock(Protocol):
    """Abstract clock used for deterministic testing."""

    def now_iso(self) -> str:  # pragma: no cover – protocol stub
        """Return current timestamp in ISO-8601 format."""


class SystemClock:
    def now_iso(self) -> str:
        return utc_now_iso()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _indent(elem: ET.Element, level: int = 0) -> None:
    """Pretty-print helper (in-place)."""

    pad = "\n" + level * "  "
    if len(elem):
        if not elem.text or not elem.text.strip():
            elem.text = pad + "  "
        for child in elem:
            _indent(child, level + 1)
        if not child.tail or not child.tail.strip():  # type: ignore[name-defined]
            child.tail = pad
    if level and (not elem.tail or not elem.tail.strip()):
        elem.tail = pad


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    elem = ET.SubElement(parent, tag)
    elem.text = value
    return elem


def _amount(value: Decimal) -> str:
    return f"{value:.2f}"


def _date(value: date) -> str:
    return value.isoformat()


def _agent(parent: ET.Element, tag: str, bic: Optional[str], profile: SchemaProfile) -> None:
    fin_instn_id = ET.SubElement(ET.SubElement(parent, tag), "FinInstnId")
    if bic:
        _text(fin_instn_id, profile.bic_tag, bic)
    else:
        _text(ET.SubElement(fin_instn_id, "Othr"), "Id", NOT_PROVIDED)


def _iban_account(parent: ET.Element, tag: str, iban: str) -> None:
    _text(ET.SubElement(ET.SubElement(parent, tag), "Id"), "IBAN", iban)


def _scheme_id(parent: ET.Element, creditor_identifier: str) -> None:
    othr = ET.SubElement(ET.SubElement(ET.SubElement(parent, "Id"), "PrvtId"), "Othr")
    _text(othr, "Id", creditor_identifier)
    _text(ET.SubElement(othr, "SchmeNm"), "Prtry", "SEPA")


def _postal_address(parent: ET.Element, address: DebtorAddress) -> None:
    pstl_adr = ET.SubElement(parent, "PstlAdr")
    for tag, value in (
        ("StrtNm", address.street_name),
        ("BldgNb", address.building_number),
        ("PstCd", address.post_code),
        ("TwnNm", address.town_name),
        ("Ctry", address.country_code),
    ):
        if value:
            _text(pstl_adr, tag, value)
    for line in address.address_lines:
        _text(pstl_adr, "AdrLine", line)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def _group_header(
    parent: ET.Element,
    message_id: str,
    account: CreditorAccount,
    batches: Sequence[Batch],
    clock: Clock,
) -> None:
    grp_hdr = ET.SubElement(parent, "GrpHdr")
    _text(grp_hdr, "MsgId", message_id)
    _text(grp_hdr, "CreDtTm", clock.now_iso())
    _text(grp_hdr, "NbOfTxs", str(sum(len(b.transactions) for b in batches)))
    _text(grp_hdr, "CtrlSum", _amount(sum((b.control_sum for b in batches), Decimal("0.00"))))

    initg_pty = ET.SubElement(grp_hdr, "InitgPty")
    _text(initg_pty, "Nm", account.name or "")
    org_id = ET.SubElement(ET.SubElement(initg_pty, "Id"), "OrgId")
    _text(ET.SubElement(org_id, "Othr"), "Id", account.creditor_identifier or "")


def _amendment(parent: ET.Element, transaction: Transaction) -> None:
    _text(parent, "AmdmntInd", "true")
    details = ET.SubElement(parent, "AmdmntInfDtls")

    if transaction.original_debtor_account:
        _iban_account(details, "OrgnlDbtrAcct", transaction.original_debtor_account)
    elif transaction.same_mandate_new_debtor_agent:
        fin_instn_id = ET.SubElement(ET.SubElement(details, "OrgnlDbtrAgt"), "FinInstnId")
        _text(ET.SubElement(fin_instn_id, "Othr"), "Id", SAME_MANDATE_NEW_DEBTOR_AGENT)

    original = transaction.original_creditor_account
    if original is not None:
        scheme = ET.SubElement(details, "OrgnlCdtrSchmeId")
        if original.name:
            _text(scheme, "Nm", original.name)
        if original.creditor_identifier:
            _scheme_id(scheme, original.creditor_identifier)


def _transaction(parent: ET.Element, transaction: Transaction, profile: SchemaProfile) -> None:
    tx_inf = ET.SubElement(parent, "DrctDbtTxInf")

    pmt_id = ET.SubElement(tx_inf, "PmtId")
    if transaction.instruction:
        _text(pmt_id, "InstrId", transaction.instruction)
    _text(pmt_id, "EndToEndId", transaction.reference)

    instd_amt = _text(tx_inf, "InstdAmt", _amount(transaction.amount))
    instd_amt.set("Ccy", transaction.currency)

    mndt = ET.SubElement(ET.SubElement(tx_inf, "DrctDbtTx"), "MndtRltdInf")
    _text(mndt, "MndtId", transaction.mandate_id)
    _text(mndt, "DtOfSgntr", _date(transaction.mandate_date_of_signature))
    if transaction.has_amendment:
        _amendment(mndt, transaction)

    _agent(tx_inf, "DbtrAgt", transaction.bic, profile)

    dbtr = ET.SubElement(tx_inf, "Dbtr")
    _text(dbtr, "Nm", transaction.name)
    if transaction.debtor_address is not None:
        _postal_address(dbtr, transaction.debtor_address)

    _iban_account(tx_inf, "DbtrAcct", transaction.iban)

    if transaction.remittance_information:
        _text(ET.SubElement(tx_inf, "RmtInf"), "Ustrd", transaction.remittance_information)


def _payment_information(
    parent: ET.Element, message_id: str, batch: Batch, profile: SchemaProfile
) -> None:
    account = batch.account
    pmt_inf = ET.SubElement(parent, "PmtInf")
    _text(pmt_inf, "PmtInfId", batch.identifier(message_id))
    _text(pmt_inf, "PmtMtd", "DD")
    _text(pmt_inf, "BtchBookg", "true" if batch.key.batch_booking else "false")
    _text(pmt_inf, "NbOfTxs", str(len(batch.transactions)))
    _text(pmt_inf, "CtrlSum", _amount(batch.control_sum))

    pmt_tp_inf = ET.SubElement(pmt_inf, "PmtTpInf")
    _text(ET.SubElement(pmt_tp_inf, "SvcLvl"), "Cd", "SEPA")
    _text(ET.SubElement(pmt_tp_inf, "LclInstrm"), "Cd", batch.local_instrument)
    _text(pmt_tp_inf, "SeqTp", batch.key.sequence_type)

    _text(pmt_inf, "ReqdColltnDt", _date(batch.key.requested_date))
    _text(ET.SubElement(pmt_inf, "Cdtr"), "Nm", account.name)
    _iban_account(pmt_inf, "CdtrAcct", account.iban)
    _agent(pmt_inf, "CdtrAgt", account.bic, profile)
    _text(pmt_inf, "ChrgBr", "SLEV")
    _scheme_id(ET.SubElement(pmt_inf, "CdtrSchmeId"), account.creditor_identifier)

    for transaction in batch.transactions:
        _transaction(pmt_inf, transaction, profile)


def build_pain008(
    *,
    message_id: str,
    account: CreditorAccount,
    batches: Sequence[Batch],
    profile: SchemaProfile,
    clock: Clock,
) -> str:
    """Return the pain.008 document for already validated input.

    Arguments:
        message_id: ``GrpHdr/MsgId``; batch ids are derived from it
        account: message creditor, used as initiating party
        batches: payment informations in sequence order
        profile: schema revision to render
        clock: injectable clock for ``CreDtTm``
    """

    doc = ET.Element(
        "Document",
        {
            "xmlns": profile.namespace,
            "xmlns:xsi": XSI_NAMESPACE,
            "xsi:schemaLocation": profile.schema_location,
        },
    )
    initn = ET.SubElement(doc, "CstmrDrctDbtInitn")

    _group_header(initn, message_id, account, batches, clock)
    for batch in batches:
        _payment_information(initn, message_id, batch, profile)

    _indent(doc)
    return XML_DECLARATION + ET.tostring(doc, encoding="unicode")
