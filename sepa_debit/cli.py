"""Render a pain.008 document from a JSON description.

Input layout::

    {
      "creditor": {"name": ..., "iban": ..., "bic": ..., "creditor_identifier": ...},
      "message_id": "optional",
      "transactions": [{"name": ..., "iban": ..., "amount": "12.50", ...}]
    }

Usage: python -m sepa_debit.cli INPUT [--schema pain.008.003.02] [--message-id ID]
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from common.logging import configure_logging

from . import config
from .errors import SepaError
from .message import DirectDebit
from .schemas import SCHEMA_PROFILES


def _load(path: str) -> Dict[str, Any]:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def build_message(document: Dict[str, Any], message_id: Optional[str] = None) -> DirectDebit:
    creditor = document.get("creditor") or {}
    message = DirectDebit(
        name=creditor.get("name"),
        iban=creditor.get("iban"),
        bic=creditor.get("bic"),
        creditor_identifier=creditor.get("creditor_identifier"),
        message_identification=message_id or document.get("message_id"),
    )
    for options in document.get("transactions", []):
        message.add_transaction(**options)
    return message


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render a SEPA direct debit (pain.008) file")
    parser.add_argument("input", help="JSON file, or - for stdin")
    parser.add_argument("--schema", default=config.DEFAULT_SCHEMA, choices=sorted(SCHEMA_PROFILES))
    parser.add_argument("--message-id", default=None)
    parser.add_argument("--log-format", default=None, choices=("text", "json"))
    args = parser.parse_args(argv)

    configure_logging(args.log_format, service_name="sepa_debit")

    try:
        document = _load(args.input)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"cannot read {args.input}: {exc}", file=sys.stderr)
        return 2

    try:
        xml = build_message(document, args.message_id).to_xml(args.schema)
    except SepaError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    sys.stdout.write(xml)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
