"""Input normalisation for free text and amounts.

SEPA files only accept a restricted Latin character set. Text is converted
the way most German banks recommend: a handful of characters get a readable
replacement, line breaks collapse to a space and everything else outside the
set is dropped.
"""
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

__all__ = ["convert_text", "convert_decimal"]

_REPLACEMENTS = (("€", "E"), ("@", "(at)"), ("_", "-"))
_LINEBREAKS = re.compile(r"[\r\n]+")
_INVALID = re.compile(r"[^a-zA-Z0-9ÄÖÜäöüß&*$% ':?,\-(+.)/]")

_CENT = Decimal("0.01")


def convert_text(value: Any) -> Optional[str]:
    """Return *value* reduced to the SEPA character set (``None`` passes through)."""
    if value is None:
        return None

    text = str(value)
    for old, new in _REPLACEMENTS:
        text = text.replace(old, new)
    text = _LINEBREAKS.sub(" ", text)
    text = _INVALID.sub("", text)
    return text.strip()


def convert_decimal(value: Any) -> Optional[Decimal]:
    """Parse *value* into a positive amount rounded to cents.

    Returns ``None`` for missing, unparsable, non-finite or non-positive input
    so that validation can report it. Amounts too large to round are returned
    unrounded.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        return None

    if not amount.is_finite() or amount <= 0:
        return None
    try:
        return amount.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # too many digits to round; left as is for the upper bound check
        return amount
