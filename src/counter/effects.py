from __future__ import annotations
from dataclasses import dataclass


class Effect:
    """Marker base class for one-shot notifications."""
    pass


@dataclass(frozen=True)
class ShowToast(Effect):
    message: str


@dataclass(frozen=True)
class ShowSnackbar(Effect):
    message: str


@dataclass(frozen=True)
class NavigateTo(Effect):
    destination: str


ALL_EFFECTS = (ShowToast, ShowSnackbar, NavigateTo)
