"""Environment driven settings."""
from __future__ import annotations

import os

MESSAGE_ID_PREFIX = os.getenv("SEPA_MESSAGE_ID_PREFIX", "SEPA-DD")
DEFAULT_SCHEMA = os.getenv("SEPA_DEFAULT_SCHEMA", "pain.008.001.02")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
