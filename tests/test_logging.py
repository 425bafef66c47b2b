import io
import json
import logging

import pytest

from common.logging import JsonFormatter, configure_logging
from sepa_debit import DirectDebit, MixedInstrumentError
from sepa_fixtures import CREDITOR, transaction_options


def test_json_formatter_promotes_extras():
    record = logging.LogRecord("sepa_debit.message", logging.INFO, __file__, 1, "rendered %d", (2,), None)
    record.message_id = "MSG-1"
    record.schema = "pain.008.001.02"
    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "rendered 2"
    assert payload["level"] == "INFO"
    assert payload["message_id"] == "MSG-1"
    assert payload["schema"] == "pain.008.001.02"
    assert "batch_id" not in payload


def test_render_failure_is_logged_as_json(root_logger):
    stream = io.StringIO()
    configure_logging("json", level="INFO", service_name="sepa_debit", stream=stream)

    sdd = DirectDebit(**CREDITOR, message_identification="MSG-2")
    sdd.add_transaction(**transaction_options(local_instrument="CORE"))
    sdd.add_transaction(**transaction_options(local_instrument="B2B"))
    with pytest.raises(MixedInstrumentError):
        sdd.to_xml()

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    failure = next(line for line in lines if line["message"].startswith("render aborted"))
    assert failure["level"] == "WARNING"
    assert failure["message_id"] == "MSG-2"
    assert failure["service"] == "sepa_debit"


def test_text_format(root_logger):
    stream = io.StringIO()
    configure_logging("text", level="DEBUG", stream=stream)

    sdd = DirectDebit(**CREDITOR, message_identification="MSG-3")
    sdd.add_transaction(**transaction_options())
    sdd.to_xml()

    assert "INFO sepa_debit.message: rendered 1 transaction(s) in 1 batch(es)" in stream.getvalue()
