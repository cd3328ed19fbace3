from __future__ import annotations
from dataclasses import dataclass


class Intent:
    """Marker base class for all intents (user actions)."""
    pass


@dataclass(frozen=True)
class Increment(Intent):
    """+1; rejected with an error at the maximum."""


@dataclass(frozen=True)
class Decrement(Intent):
    """-1; rejected with an error at the minimum."""


@dataclass(frozen=True)
class Reset(Intent):
    """Back to 0, unconditionally."""


@dataclass(frozen=True)
class SetValue(Intent):
    value: int  # rejected (not clamped) when out of bounds


@dataclass(frozen=True)
class IncrementByTen(Intent):
    """+10, clamped to the maximum."""


@dataclass(frozen=True)
class DecrementByTen(Intent):
    """-10, clamped to the minimum."""


@dataclass(frozen=True)
class ClearHistory(Intent):
    pass


@dataclass(frozen=True)
class ErrorHandled(Intent):
    """UI acknowledged the current error; clears it."""


@dataclass(frozen=True)
class ShowToastEffect(Intent):
    """Demo intent: emits a toast, nothing else."""


@dataclass(frozen=True)
class ShowSnackbarEffect(Intent):
    """Demo intent: emits a snackbar, nothing else."""


ALL_INTENTS = (
    Increment, Decrement, Reset, SetValue, IncrementByTen, DecrementByTen,
    ClearHistory, ErrorHandled, ShowToastEffect, ShowSnackbarEffect,
)
