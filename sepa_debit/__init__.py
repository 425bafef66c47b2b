"""SEPA Direct Debit (ISO 20022 pain.008) message builder."""
from .errors import (  # noqa: F401
    FieldValidationError,
    LengthConstraintError,
    MixedInstrumentError,
    ReferenceNotFoundError,
    SchemaCompatibilityError,
    SepaError,
    UnknownSchemaError,
)
from .message import DirectDebit  # noqa: F401
from .models import CreditorAccount, DebtorAddress, Transaction  # noqa: F401
from .schemas import (  # noqa: F401
    PAIN_008_001_02,
    PAIN_008_001_08,
    PAIN_008_002_02,
    PAIN_008_003_02,
)
