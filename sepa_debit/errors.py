"""Exception hierarchy for building pain.008 messages."""
from __future__ import annotations

from typing import Iterable, List

__all__ = [
    "SepaError",
    "FieldValidationError",
    "MixedInstrumentError",
    "SchemaCompatibilityError",
    "LengthConstraintError",
    "ReferenceNotFoundError",
    "UnknownSchemaError",
]


class SepaError(Exception):
    """Base class for every error raised by :mod:`sepa_debit`."""


class FieldValidationError(SepaError, ValueError):
    """One or more fields of an entry are missing or malformed."""

    def __init__(self, errors: Iterable[str] | str) -> None:
        self.errors: List[str] = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("\n".join(self.errors))


class MixedInstrumentError(SepaError):
    """Transactions of one message use different local instruments."""

    def __init__(self, instruments: Iterable[str]) -> None:
        self.instruments = sorted(set(instruments))
        super().__init__(
            "CORE, COR1 AND B2B must not be mixed in one message! "
            f"(found: {', '.join(self.instruments)})"
        )


class SchemaCompatibilityError(SepaError):
    """The message uses a value the selected schema cannot represent."""

    def __init__(self, schema_name: str, reasons: Iterable[str]) -> None:
        self.schema_name = schema_name
        self.reasons = list(reasons)
        super().__init__(f"Incompatible with schema {schema_name}: {'; '.join(self.reasons)}")


class LengthConstraintError(SepaError):
    """A generated identifier is longer than the schema allows."""

    def __init__(self, value: str, maximum: int) -> None:
        self.value = value
        self.actual = len(value)
        self.maximum = maximum
        super().__init__(
            f"Identifier '{value}' is invalid: The value has a length of '{self.actual}'; "
            f"this exceeds the allowed maximum length of '{maximum}'"
        )


class ReferenceNotFoundError(SepaError, LookupError):
    """No transaction carries the requested end-to-end reference."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"No transaction with reference '{reference}'")


class UnknownSchemaError(SepaError, ValueError):
    def __init__(self, schema_name: str) -> None:
        self.schema_name = schema_name
        super().__init__(f"Schema {schema_name} is unknown!")
