from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .effects import Effect


@dataclass(frozen=True)
class Counter:
    """Bounded integer. Every instance satisfies min_value <= value <= max_value."""
    value: int = 0
    min_value: int = -50
    max_value: int = 100

    def __post_init__(self):
        if self.min_value > self.max_value:
            raise ValueError(f"min_value {self.min_value} exceeds max_value {self.max_value}")
        if not self.min_value <= 0 <= self.max_value:
            # reset() targets 0
            raise ValueError(f"bounds [{self.min_value}, {self.max_value}] must include 0")
        if not self.is_valid_value(self.value):
            raise ValueError(
                f"value {self.value} outside [{self.min_value}, {self.max_value}]"
            )

    @property
    def is_at_max(self) -> bool:
        return self.value >= self.max_value

    @property
    def is_at_min(self) -> bool:
        return self.value <= self.min_value

    def can_increment(self) -> bool:
        return self.value < self.max_value

    def can_decrement(self) -> bool:
        return self.value > self.min_value

    def is_valid_value(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def clamp(self, value: int) -> int:
        return max(self.min_value, min(value, self.max_value))

    def with_value(self, value: int) -> Counter:
        return replace(self, value=value)

    def increment(self) -> Counter:
        """One step up, or self when already at the maximum."""
        return self.with_value(self.value + 1) if self.can_increment() else self

    def decrement(self) -> Counter:
        return self.with_value(self.value - 1) if self.can_decrement() else self

    def reset(self) -> Counter:
        return self.with_value(0)


@dataclass(frozen=True)
class CounterStatistics:
    # set-value and +/-10 operations are not counted here
    increment_count: int = 0
    decrement_count: int = 0
    reset_count: int = 0
    total_operations: int = 0

    def record_increment(self) -> CounterStatistics:
        return replace(self, increment_count=self.increment_count + 1,
                       total_operations=self.total_operations + 1)

    def record_decrement(self) -> CounterStatistics:
        return replace(self, decrement_count=self.decrement_count + 1,
                       total_operations=self.total_operations + 1)

    def record_reset(self) -> CounterStatistics:
        return replace(self, reset_count=self.reset_count + 1,
                       total_operations=self.total_operations + 1)


@dataclass(frozen=True)
class CounterState:
    counter: Counter = field(default_factory=Counter)
    history: Tuple[str, ...] = ()          # newest last
    is_loading: bool = False
    error: Optional[str] = None
    effects: Tuple[Effect, ...] = ()       # only non-empty between reduce and drain
    statistics: CounterStatistics = field(default_factory=CounterStatistics)
    last_updated: str = ""

    def with_effect(self, effect: Effect) -> CounterState:
        """Append to the pending effects, keeping any not yet drained."""
        return replace(self, effects=self.effects + (effect,))

    def without_effects(self) -> CounterState:
        return replace(self, effects=())
