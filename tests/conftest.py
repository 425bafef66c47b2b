from __future__ import annotations

import logging

import pytest

from sepa_debit import DirectDebit
from sepa_fixtures import CREDITOR, FixedClock, SequentialIds


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def direct_debit(clock) -> DirectDebit:
    return DirectDebit(**CREDITOR, identifier_source=SequentialIds(), clock=clock)


@pytest.fixture
def root_logger():
    """Restore root handlers after a test reconfigures logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
