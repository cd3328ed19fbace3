from __future__ import annotations
from typing import Any, Dict

from counter.intents import (
    Increment, Decrement, Reset, SetValue, IncrementByTen, DecrementByTen,
    ClearHistory, ErrorHandled, ShowToastEffect, ShowSnackbarEffect,
)

# Built-in token bindings, one entry per intent.
#   intent:  Intent class to build
#   label:   human name, shown in help
#   aliases: tokens typed by the user (matched case-insensitively)
#   arg:     "int" when the token takes an integer argument ("set 12", "=12")
BUILTIN_BINDINGS: Dict[str, Dict[str, Any]] = {
    "Increment": {
        "intent": Increment,
        "label": "+1",
        "aliases": ["+", "inc", "increment"],
    },
    "Decrement": {
        "intent": Decrement,
        "label": "-1",
        "aliases": ["-", "dec", "decrement"],
    },
    "Reset": {
        "intent": Reset,
        "label": "Reset to 0",
        "aliases": ["0", "r", "reset"],
    },
    "SetValue": {
        "intent": SetValue,
        "label": "Set value",
        "aliases": ["=", "set"],
        "arg": "int",
    },
    "IncrementByTen": {
        "intent": IncrementByTen,
        "label": "+10",
        "aliases": ["+10", "inc10"],
    },
    "DecrementByTen": {
        "intent": DecrementByTen,
        "label": "-10",
        "aliases": ["-10", "dec10"],
    },
    "ClearHistory": {
        "intent": ClearHistory,
        "label": "Clear history",
        "aliases": ["c", "clear"],
    },
    "ErrorHandled": {
        "intent": ErrorHandled,
        "label": "Dismiss error",
        "aliases": ["ok", "dismiss"],
    },
    "ShowToastEffect": {
        "intent": ShowToastEffect,
        "label": "Test toast",
        "aliases": ["toast"],
    },
    "ShowSnackbarEffect": {
        "intent": ShowSnackbarEffect,
        "label": "Test snackbar",
        "aliases": ["snack", "snackbar"],
    },
}
