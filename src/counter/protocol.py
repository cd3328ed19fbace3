from __future__ import annotations
from typing import Protocol


class ClockProtocol(Protocol):
    """
    Minimal contract used by the reducer to stamp history entries.

    Implementations must provide:
      - now() -> str, an opaque label; the reducer only concatenates it into
        history text and stores it verbatim in `last_updated`.

    Failures are not caught anywhere: there is no fallback timestamp.
    """
    def now(self) -> str: ...
