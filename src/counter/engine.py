from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, List, Optional
import asyncio
import logging
import threading

from .model import CounterState
from .effects import Effect
from .intents import Intent
from .reducer import reduce
from .protocol import ClockProtocol

logger = logging.getLogger(__name__)

StateCallback = Callable[[CounterState], None]
EffectCallback = Callable[[Effect], None]

STATE = "state"
EFFECTS = "effects"


@dataclass(eq=False)
class Subscription:
    """Handle returned by Engine.subscribe_*; pass it back to unsubscribe."""
    engine: "Engine" = field(repr=False)
    channel: str
    callback: Callable[[Any], None]
    active: bool = True

    def unsubscribe(self) -> None:
        self.engine.unsubscribe(self)


class Engine:
    """
    Owns the current CounterState and applies the reducer, one intent at a time.

    Two channels:
      - state:   replay-latest; a new subscriber gets the current snapshot
                 (effects cleared) immediately, then every publish.
      - effects: no replay; only effects flushed after subscribing arrive.

    Each intent is reduced, the raw result published, its effects moved to
    the outbox, then the state is published again with `effects` cleared.
    The outbox is flushed by `flush_effects()`, which is scheduled on the
    asyncio loop when one is available, or can be called/awaited directly
    (`flush_effects()` / `await drain()`).

    Usage:
        engine = Engine(clock=SystemClock())
        engine.subscribe_state(render)
        engine.subscribe_effects(notify)
        engine.process_intent(Increment())
    """

    def __init__(self, clock: ClockProtocol, initial: Optional[CounterState] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.clock = clock
        self._state = (initial or CounterState()).without_effects()
        self._loop = loop
        self._lock = threading.RLock()
        self._inbox: Deque[Intent] = deque()
        self._outbox: Deque[Effect] = deque()
        self._state_subs: List[Subscription] = []
        self._effect_subs: List[Subscription] = []
        self._busy = False
        self._flush_pending = False
        self._closed = False

    @property
    def state(self) -> CounterState:
        return self._state

    @property
    def pending_effects(self) -> int:
        return len(self._outbox)

    @property
    def closed(self) -> bool:
        return self._closed

    # ----- commands -----

    def process_intent(self, intent: Intent) -> None:
        """
        Apply one intent. Calls made from inside a subscriber callback are
        queued and applied after the current intent; other threads wait.
        Clock failures propagate and leave the current state untouched.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("Engine is closed")
            self._inbox.append(intent)
            if self._busy:
                return
            self._busy = True
            try:
                while self._inbox:
                    self._apply(self._inbox.popleft())
            except BaseException:
                self._inbox.clear()
                raise
            finally:
                self._busy = False

    def flush_effects(self) -> int:
        """
        Deliver every queued effect, in order, to the current effect
        subscribers. Effects with no subscriber are dropped.
        Returns how many effects reached at least one subscriber.
        """
        with self._lock:
            self._flush_pending = False
            batch = list(self._outbox)
            self._outbox.clear()
            subscribers = list(self._effect_subs)

        delivered = 0
        for effect in batch:
            targets = [s for s in subscribers if s.active]
            if not targets:
                logger.debug("Dropping %r: no effect subscribers", effect)
                continue
            for sub in targets:
                self._notify(sub, effect)
            delivered += 1
        return delivered

    async def drain(self) -> None:
        """Yield to the loop once, then flush whatever is still queued."""
        await asyncio.sleep(0)
        self.flush_effects()

    def close(self) -> None:
        """Tear down: undelivered effects are discarded, subscribers dropped."""
        with self._lock:
            if self._outbox:
                logger.debug("Discarding %d undelivered effect(s) on close", len(self._outbox))
            self._closed = True
            self._outbox.clear()
            self._inbox.clear()
            for sub in self._state_subs + self._effect_subs:
                sub.active = False
            self._state_subs.clear()
            self._effect_subs.clear()

    # ----- subscriptions -----

    def subscribe_state(self, callback: StateCallback) -> Subscription:
        with self._lock:
            sub = Subscription(engine=self, channel=STATE, callback=callback)
            self._state_subs.append(sub)
            # a subscriber added during the raw publish still gets a settled snapshot
            self._notify(sub, self._state.without_effects())
            return sub

    def subscribe_effects(self, callback: EffectCallback) -> Subscription:
        with self._lock:
            sub = Subscription(engine=self, channel=EFFECTS, callback=callback)
            self._effect_subs.append(sub)
            return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            sub.active = False
            subs = self._state_subs if sub.channel == STATE else self._effect_subs
            if sub in subs:
                subs.remove(sub)

    # ----- internal plumbing -----

    def _apply(self, intent: Intent) -> None:
        nxt = reduce(self._state, intent, self.clock)
        logger.debug("%s -> value=%d, %d effect(s)",
                     type(intent).__name__, nxt.counter.value, len(nxt.effects))
        self._publish(nxt)
        if nxt.effects:
            self._outbox.extend(nxt.effects)
            self._publish(nxt.without_effects())
            self._schedule_flush()

    def _publish(self, state: CounterState) -> None:
        self._state = state
        for sub in list(self._state_subs):
            if sub.active:
                self._notify(sub, state)

    def _schedule_flush(self) -> None:
        if self._flush_pending:
            return
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                return  # no loop: effects wait for flush_effects()/drain()
        loop.call_soon_threadsafe(self.flush_effects)
        self._flush_pending = True

    @staticmethod
    def _notify(sub: Subscription, payload: Any) -> None:
        # an observer must never break the engine
        try:
            sub.callback(payload)
        except Exception:
            logger.exception("%s subscriber %r failed", sub.channel, sub.callback)
