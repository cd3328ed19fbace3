from __future__ import annotations
import time

from .protocol import ClockProtocol


class SystemClock(ClockProtocol):
    """Wall-clock labels, 24h "HH:MM:SS" by default."""

    def __init__(self, fmt: str = "%H:%M:%S"):
        self.fmt = fmt

    def now(self) -> str:
        return time.strftime(self.fmt, time.localtime())
