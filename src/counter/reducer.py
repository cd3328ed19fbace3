from __future__ import annotations
from dataclasses import replace

from .model import CounterState
from .effects import ShowToast, ShowSnackbar
from .intents import (
    Intent, Increment, Decrement, Reset, SetValue,
    IncrementByTen, DecrementByTen, ClearHistory, ErrorHandled,
    ShowToastEffect, ShowSnackbarEffect,
)
from .protocol import ClockProtocol


def reduce(state: CounterState, intent: Intent, clock: ClockProtocol) -> CounterState:
    """
    Pure state transformer. Never mutates the input state.

    Domain failures (limit reached, out of range) are returned as data: the
    `error` field plus a ShowSnackbar effect. New effects are always appended
    to whatever is still pending in `state.effects`.
    Raises TypeError for objects that are not one of the known intents.
    """
    counter = state.counter

    # --- +1 / -1 (counted in statistics) ---
    if isinstance(intent, Increment):
        if not counter.can_increment():
            return replace(
                state.with_effect(ShowSnackbar("Cannot increment!")),
                error=f"maximum limit reached: {counter.max_value}",
            )
        now = clock.now()
        nxt = counter.increment()
        return replace(
            state,
            counter=nxt,
            history=state.history + (f"Increment: {nxt.value} ({now})",),
            error=None,
            statistics=state.statistics.record_increment(),
            last_updated=now,
        )

    if isinstance(intent, Decrement):
        if not counter.can_decrement():
            return replace(
                state.with_effect(ShowSnackbar("Cannot decrement!")),
                error=f"minimum limit reached: {counter.min_value}",
            )
        now = clock.now()
        nxt = counter.decrement()
        return replace(
            state,
            counter=nxt,
            history=state.history + (f"Decrement: {nxt.value} ({now})",),
            error=None,
            statistics=state.statistics.record_decrement(),
            last_updated=now,
        )

    # --- Reset (keeps any pending error) ---
    if isinstance(intent, Reset):
        now = clock.now()
        return replace(
            state.with_effect(ShowToast("Counter reset!")),
            counter=counter.reset(),
            history=state.history + (f"Reset: 0 ({now})",),
            statistics=state.statistics.record_reset(),
            last_updated=now,
        )

    # --- Explicit value: rejected, never clamped. Statistics untouched. ---
    if isinstance(intent, SetValue):
        if not counter.is_valid_value(intent.value):
            return replace(
                state.with_effect(ShowSnackbar("Invalid value")),
                error=f"value must be between {counter.min_value} and {counter.max_value}",
            )
        now = clock.now()
        return replace(
            state,
            counter=counter.with_value(intent.value),
            history=state.history + (f"Set: {intent.value} ({now})",),
            error=None,
            last_updated=now,
        )

    # --- +/-10: clamp silently, no error path. Statistics untouched. ---
    if isinstance(intent, IncrementByTen):
        now = clock.now()
        value = counter.clamp(counter.value + 10)
        return replace(
            state.with_effect(ShowToast("Incremented by 10!")),
            counter=counter.with_value(value),
            history=state.history + (f"Increment by 10: {value} ({now})",),
            last_updated=now,
        )

    if isinstance(intent, DecrementByTen):
        now = clock.now()
        value = counter.clamp(counter.value - 10)
        return replace(
            state.with_effect(ShowToast("Decremented by 10!")),
            counter=counter.with_value(value),
            history=state.history + (f"Decrement by 10: {value} ({now})",),
            last_updated=now,
        )

    # --- History / error bookkeeping ---
    if isinstance(intent, ClearHistory):
        return replace(state.with_effect(ShowToast("History cleared!")), history=())

    if isinstance(intent, ErrorHandled):
        return replace(state, error=None)

    # --- Demo intents ---
    if isinstance(intent, ShowToastEffect):
        return state.with_effect(ShowToast("This is a test toast!"))

    if isinstance(intent, ShowSnackbarEffect):
        return state.with_effect(ShowSnackbar("This is a test snackbar!"))

    raise TypeError(f"Unhandled intent: {intent!r}")
