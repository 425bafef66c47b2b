"""Shared builders for the direct debit test-suite."""
from __future__ import annotations

import datetime as _dt
import xml.etree.ElementTree as ET
from typing import Any, Dict

CREDITOR = {
    "name": "Gläubiger GmbH",
    "bic": "BANKDEFFXXX",
    "iban": "DE87200500001234567890",
    "creditor_identifier": "DE98ZZZ09999999999",
}


class FixedClock:
    def now_iso(self) -> str:  # type: ignore[override]
        return "2025-08-06T10:37:01+00:00"


class SequentialIds:
    """Message ids shaped like the random ones: ``SEPA-DD/`` + 22 characters."""

    def __init__(self) -> None:
        self.i = 0

    def new(self) -> str:  # type: ignore[override]
        self.i += 1
        return f"SEPA-DD/{self.i:022d}"


def transaction_options(**overrides: Any) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "name": "Zahlemann & Söhne GbR",
        "bic": "SPUEDE2UXXX",
        "iban": "DE21500500009876543210",
        "amount": 39.99,
        "reference": "XYZ-2013-08-ABO-12345",
        "remittance_information": "Unsere Rechnung vom 10.08.2013",
        "mandate_id": "K-02-2011-12345",
        "mandate_date_of_signature": _dt.date(2011, 1, 25),
    }
    options.update(overrides)
    return options


def in_days(days: int) -> _dt.date:
    return _dt.date.today() + _dt.timedelta(days=days)


def parse(xml: str) -> ET.Element:
    """Parse a rendered document and strip namespaces from every tag."""
    root = ET.fromstring(xml.encode("utf-8"))
    for elem in root.iter():
        if "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]
    return root


