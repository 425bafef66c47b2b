"""ISO 20022 rendering (pain.008 builder)."""
from .pain008 import Clock, SystemClock, build_pain008  # noqa: F401
