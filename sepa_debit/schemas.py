"""Supported pain.008 schema revisions and what each of them can express.

All version specific behaviour of validation and rendering is read from
:data:`SCHEMA_PROFILES`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from .errors import UnknownSchemaError

__all__ = [
    "PAIN_008_001_02",
    "PAIN_008_001_08",
    "PAIN_008_002_02",
    "PAIN_008_003_02",
    "SchemaProfile",
    "SCHEMA_PROFILES",
    "get_profile",
]

PAIN_008_001_02 = "pain.008.001.02"
PAIN_008_001_08 = "pain.008.001.08"
PAIN_008_002_02 = "pain.008.002.02"
PAIN_008_003_02 = "pain.008.003.02"

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
ALL_INSTRUMENTS = frozenset({"CORE", "COR1", "B2B"})


@dataclass(frozen=True, slots=True)
class SchemaProfile:
    """Constraints of one schema revision.

    Attributes
    ----------
    name
        Version string, e.g. ``pain.008.001.02``.
    creditor_bic_required / debtor_bic_required
        Whether the agent BIC is mandatory. When optional and missing, the
        agent is rendered as ``Othr/Id = NOTPROVIDED``.
    currencies
        Accepted ``InstdAmt/@Ccy`` values, ``None`` for any ISO code.
    local_instruments
        Accepted ``LclInstrm/Cd`` values.
    structured_address
        Whether ``StrtNm``/``BldgNb``/``PstCd``/``TwnNm`` exist in ``PstlAdr``.
    amendments
        Whether ``AmdmntInfDtls`` can be expressed.
    bic_tag
        Element name of the BIC inside ``FinInstnId`` (``BICFI`` since 2019).
    max_identifier_length
        Upper bound for ``MsgId``/``PmtInfId``.
    """

    name: str
    creditor_bic_required: bool = False
    debtor_bic_required: bool = False
    currencies: Optional[FrozenSet[str]] = None
    local_instruments: FrozenSet[str] = ALL_INSTRUMENTS
    structured_address: bool = True
    amendments: bool = True
    bic_tag: str = "BIC"
    max_identifier_length: int = 35

    @property
    def namespace(self) -> str:
        return f"urn:iso:std:iso:20022:tech:xsd:{self.name}"

    @property
    def schema_location(self) -> str:
        return f"{self.namespace} {self.name}.xsd"

    def accepts_currency(self, currency: str) -> bool:
        return self.currencies is None or currency in self.currencies


SCHEMA_PROFILES: Dict[str, SchemaProfile] = {
    PAIN_008_001_02: SchemaProfile(name=PAIN_008_001_02),
    PAIN_008_001_08: SchemaProfile(name=PAIN_008_001_08, bic_tag="BICFI"),
    PAIN_008_002_02: SchemaProfile(
        name=PAIN_008_002_02,
        creditor_bic_required=True,
        debtor_bic_required=True,
        currencies=frozenset({"EUR"}),
        local_instruments=frozenset({"CORE", "B2B"}),
        structured_address=False,
    ),
    PAIN_008_003_02: SchemaProfile(
        name=PAIN_008_003_02,
        currencies=frozenset({"EUR"}),
        structured_address=False,
    ),
}


def get_profile(schema_name: str) -> SchemaProfile:
    try:
        return SCHEMA_PROFILES[schema_name]
    except KeyError:
        raise UnknownSchemaError(schema_name) from None
