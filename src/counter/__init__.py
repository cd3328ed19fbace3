"""
Public API for the counter package.

Import from here everywhere else, so you can refactor internals freely:
    from counter import (
        Counter, CounterState, CounterStatistics,
        Increment, Decrement, Reset, SetValue, IncrementByTen, DecrementByTen,
        ClearHistory, ErrorHandled, ShowToastEffect, ShowSnackbarEffect,
        ShowToast, ShowSnackbar, NavigateTo,
        ClockProtocol, SystemClock, reduce, Engine
    )
"""
from .model import Counter, CounterState, CounterStatistics
from .intents import (
    Intent, ALL_INTENTS,
    Increment, Decrement, Reset, SetValue, IncrementByTen, DecrementByTen,
    ClearHistory, ErrorHandled, ShowToastEffect, ShowSnackbarEffect,
)
from .effects import Effect, ALL_EFFECTS, ShowToast, ShowSnackbar, NavigateTo
from .protocol import ClockProtocol
from .clock import SystemClock
from .reducer import reduce
from .engine import Engine, Subscription

__all__ = [
    # model
    "Counter", "CounterState", "CounterStatistics",
    # intents
    "Intent", "ALL_INTENTS",
    "Increment", "Decrement", "Reset", "SetValue", "IncrementByTen", "DecrementByTen",
    "ClearHistory", "ErrorHandled", "ShowToastEffect", "ShowSnackbarEffect",
    # effects
    "Effect", "ALL_EFFECTS", "ShowToast", "ShowSnackbar", "NavigateTo",
    # clock & reducer & engine
    "ClockProtocol", "SystemClock", "reduce", "Engine", "Subscription",
]
