"""Format and checksum primitives for SEPA identifiers.

Every helper returns a plain ``bool``; callers turn a ``False`` into a field
error message.
"""
from __future__ import annotations

import re
import string
from typing import Optional

__all__ = [
    "valid_iban",
    "valid_bic",
    "valid_creditor_identifier",
    "valid_mandate_identifier",
    "valid_message_identifier",
]

IBAN_REGEX = re.compile(r"\A[A-Z]{2}[0-9]{2}[a-zA-Z0-9]{1,30}\Z")
BIC_REGEX = re.compile(r"\A[A-Z]{6}[A-Z2-9][A-NP-Z0-9]([A-Z0-9]{3})?\Z")
CREDITOR_IDENTIFIER_REGEX = re.compile(
    r"\A[a-zA-Z]{2}[0-9]{2}[A-Za-z0-9+?/\-:().,']{3}[A-Za-z0-9+?/\-:().,']{1,28}\Z"
)
# SEPA "restricted" identifier set; MsgId additionally allows spaces
MANDATE_IDENTIFIER_REGEX = re.compile(r"\A[A-Za-z0-9+?/\-:().,']{1,35}\Z")
MESSAGE_IDENTIFIER_REGEX = re.compile(r"\A[A-Za-z0-9+?/\-:().,' ]{1,35}\Z")

_LETTER_VALUES = {letter: str(index) for index, letter in enumerate(string.ascii_uppercase, start=10)}


def _mod97(iban: str) -> int:
    rearranged = iban[4:] + iban[:4]
    digits = "".join(_LETTER_VALUES.get(char, char) for char in rearranged.upper())
    return int(digits) % 97


def valid_iban(iban: Optional[str]) -> bool:
    """Check IBAN shape and its ISO 7064 mod 97-10 check digits."""
    if not iban or not IBAN_REGEX.match(iban):
        return False
    return _mod97(iban) == 1


def valid_bic(bic: Optional[str]) -> bool:
    return bool(bic) and BIC_REGEX.match(bic) is not None


def valid_creditor_identifier(creditor_identifier: Optional[str]) -> bool:
    if not creditor_identifier or not CREDITOR_IDENTIFIER_REGEX.match(creditor_identifier):
        return False
    # German identifiers are always 18 characters long
    if creditor_identifier[:2].upper() == "DE":
        return len(creditor_identifier) == 18
    return True


def valid_mandate_identifier(mandate_id: Optional[str]) -> bool:
    return bool(mandate_id) and MANDATE_IDENTIFIER_REGEX.match(mandate_id) is not None


def valid_message_identifier(message_id: Optional[str]) -> bool:
    return bool(message_id) and MESSAGE_IDENTIFIER_REGEX.match(message_id) is not None
