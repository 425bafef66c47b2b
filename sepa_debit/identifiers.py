"""Message and payment-information identifiers.

A message id is either supplied by the caller or drawn from an
:class:`IdentifierSource`. Batch ids are derived from it as
``<message_id>/<sequence>``; nothing else feeds into them, so they can be
looked up before the document is rendered.
"""
from __future__ import annotations

import secrets
import string
from typing import Protocol

from . import config
from .errors import LengthConstraintError

__all__ = [
    "IdentifierSource",
    "RandomIdentifierSource",
    "batch_identifier",
    "check_identifier_length",
]

ALPHABET = string.ascii_lowercase + string.digits + "_"
RANDOM_PART_LENGTH = 22


class IdentifierSource(Protocol):
    """Abstract message id factory for deterministic testing."""

    def new(self) -> str:  # pragma: no cover – protocol stub
        """Return a fresh message identifier."""


class RandomIdentifierSource:
    """``PREFIX/`` followed by 22 random characters of ``[0-9a-z_]``.

    Uses :mod:`secrets`, so concurrent callers never share generator state.
    """

    def __init__(self, prefix: str | None = None) -> None:
        self.prefix = prefix or config.MESSAGE_ID_PREFIX

    def new(self) -> str:
        suffix = "".join(secrets.choice(ALPHABET) for _ in range(RANDOM_PART_LENGTH))
        return f"{self.prefix}/{suffix}"


def batch_identifier(message_id: str, sequence: int) -> str:
    return f"{message_id}/{sequence}"


def check_identifier_length(value: str, maximum: int) -> None:
    """Raise :class:`LengthConstraintError` if *value* exceeds *maximum* characters."""
    if len(value) > maximum:
        raise LengthConstraintError(value, maximum)
