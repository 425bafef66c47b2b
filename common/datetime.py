"""Datetime helpers shared by the message builder and its CLI.

Currently provides:
    parse_iso_date(value): accepts ``date``/``datetime`` objects or ISO-8601
    strings (``2024-03-01``, ``20240301``, ``2024-03-01T00:00:00Z``) and
    returns the calendar date.
    utc_now_iso(): current UTC timestamp, second precision, for ``CreDtTm``.

This avoids scattered direct calls to dateutil.parser.isoparse or
date.fromisoformat, giving us a single spot to patch if behavior changes.
"""
from __future__ import annotations

import datetime as _dt
from typing import Union

from dateutil.parser import isoparse as _isoparse

__all__ = ["parse_iso_date", "utc_now_iso"]


def parse_iso_date(value: Union[str, _dt.date]) -> _dt.date:
    """Return the calendar date represented by *value*.

    A ``datetime`` is reduced to its date part; no timezone conversion takes
    place since collection and signature dates are calendar values.
    """
    if isinstance(value, _dt.datetime):
        return value.date()
    if isinstance(value, _dt.date):
        return value

    if not isinstance(value, str):
        raise TypeError("parse_iso_date expects str or date, got " + type(value).__name__)

    try:
        parsed = _isoparse(value.strip())
    except ValueError as exc:
        raise ValueError(f"invalid ISO-8601 date: {value}") from exc

    return parsed.date()


def utc_now_iso() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS+00:00``."""
    return _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0).isoformat()
