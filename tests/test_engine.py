import asyncio
import threading

import pytest
from counter import (
    Counter, CounterState, Engine,
    Increment, Decrement, Reset, SetValue, IncrementByTen, ClearHistory,
    ShowToastEffect, ShowSnackbarEffect, ShowToast, ShowSnackbar,
)
from conftest import FixedClock, BrokenClock


def test_state_subscription_replays_current(engine):
    seen = []
    engine.subscribe_state(seen.append)
    assert seen == [CounterState()]

    engine.process_intent(Increment())
    assert seen[-1].counter.value == 1
    assert engine.state is seen[-1]


def test_increment_without_effects_publishes_once(engine):
    seen = []
    engine.subscribe_state(seen.append)
    engine.process_intent(Increment())
    assert len(seen) == 2  # replay + one publish
    assert engine.pending_effects == 0


def test_two_phase_publish_then_explicit_flush(engine):
    states, effects = [], []
    engine.subscribe_state(states.append)
    engine.subscribe_effects(effects.append)

    engine.process_intent(ShowToastEffect())

    # raw state, then the same state with effects cleared
    assert [len(s.effects) for s in states[1:]] == [1, 0]
    assert engine.state.effects == ()
    # nothing delivered yet without a loop
    assert effects == []
    assert engine.pending_effects == 1

    assert engine.flush_effects() == 1
    assert effects == [ShowToast("This is a test toast!")]
    assert engine.flush_effects() == 0
    assert effects == [ShowToast("This is a test toast!")]  # exactly once


def test_effects_delivered_in_fifo_order_across_intents(engine):
    effects = []
    engine.subscribe_effects(effects.append)
    engine.process_intent(ShowToastEffect())
    engine.process_intent(ShowSnackbarEffect())
    engine.process_intent(SetValue(500))
    engine.flush_effects()
    assert effects == [
        ShowToast("This is a test toast!"),
        ShowSnackbar("This is a test snackbar!"),
        ShowSnackbar("Invalid value"),
    ]


def test_effect_channel_has_no_replay(engine):
    early, late = [], []
    engine.subscribe_effects(early.append)
    engine.process_intent(Reset())
    engine.flush_effects()
    engine.subscribe_effects(late.append)
    engine.flush_effects()
    assert early == [ShowToast("Counter reset!")]
    assert late == []


def test_effects_dropped_without_subscribers(engine):
    engine.process_intent(ClearHistory())
    assert engine.flush_effects() == 0
    assert engine.pending_effects == 0

    seen = []
    engine.subscribe_effects(seen.append)
    engine.flush_effects()
    assert seen == []


def test_duplicate_effects_are_delivered_independently(engine):
    seen = []
    engine.subscribe_effects(seen.append)
    engine.process_intent(ShowToastEffect())
    engine.process_intent(ShowToastEffect())
    assert engine.flush_effects() == 2
    assert seen == [ShowToast("This is a test toast!")] * 2


def test_unsubscribe_stops_delivery(engine):
    states, effects = [], []
    s_sub = engine.subscribe_state(states.append)
    e_sub = engine.subscribe_effects(effects.append)
    s_sub.unsubscribe()
    engine.unsubscribe(e_sub)
    engine.unsubscribe(e_sub)  # idempotent

    engine.process_intent(Reset())
    engine.flush_effects()
    assert len(states) == 1
    assert effects == []
    assert not s_sub.active and not e_sub.active


def test_sequential_consistency(engine):
    for intent in (Increment(), Increment(), Decrement()):
        engine.process_intent(intent)
    s = engine.state
    assert s.counter.value == 1
    assert s.statistics.increment_count == 2
    assert s.statistics.decrement_count == 1
    assert s.statistics.total_operations == 3
    assert len(s.history) == 3


def test_reentrant_intent_is_applied_after_current(engine):
    values = []

    def on_state(state):
        values.append(state.counter.value)
        if state.counter.value == 1 and len(values) == 2:
            engine.process_intent(Increment())

    engine.subscribe_state(on_state)
    engine.process_intent(Increment())
    assert values == [0, 1, 2]
    assert engine.state.statistics.total_operations == 2


def test_failing_subscriber_does_not_stall_engine(engine):
    def boom(_):
        raise RuntimeError("observer bug")

    seen = []
    engine.subscribe_state(boom)
    engine.subscribe_state(seen.append)
    engine.subscribe_effects(boom)
    engine.subscribe_effects(seen.append)

    engine.process_intent(Reset())
    assert engine.flush_effects() == 1
    assert seen[-1] == ShowToast("Counter reset!")
    assert engine.state.counter.value == 0


def test_clock_failure_propagates_and_keeps_state():
    eng = Engine(clock=BrokenClock())
    seen = []
    eng.subscribe_state(seen.append)
    with pytest.raises(OSError):
        eng.process_intent(Increment())
    assert eng.state == CounterState()
    assert len(seen) == 1

    # rejections need no timestamp, so they still work
    eng.process_intent(SetValue(1000))
    assert eng.state.error is not None


def test_close_discards_pending_and_rejects_new_intents(engine):
    seen = []
    engine.subscribe_effects(seen.append)
    engine.process_intent(Reset())
    engine.close()
    assert engine.closed
    assert engine.flush_effects() == 0
    assert seen == []
    with pytest.raises(RuntimeError):
        engine.process_intent(Increment())


def test_initial_state_is_used_and_effects_stripped(clock):
    start = CounterState(counter=Counter(value=5, max_value=10)).with_effect(ShowToast("stale"))
    eng = Engine(clock=clock, initial=start)
    assert eng.state.effects == ()
    eng.process_intent(Increment())
    assert eng.state.counter.value == 6
    assert eng.state.history == ("Increment: 6 (T)",)


def test_flush_is_scheduled_on_running_loop(clock):
    effects = []

    async def scenario():
        eng = Engine(clock=clock)
        eng.subscribe_effects(effects.append)
        eng.process_intent(ShowToastEffect())
        eng.process_intent(IncrementByTen())
        assert effects == []  # fire-and-forget: not delivered inline
        await asyncio.sleep(0)
        assert eng.pending_effects == 0
        eng.close()

    asyncio.run(scenario())
    assert effects == [ShowToast("This is a test toast!"), ShowToast("Incremented by 10!")]


def test_drain_delivers_queued_effects(clock):
    effects = []

    async def scenario():
        eng = Engine(clock=clock)
        eng.subscribe_effects(effects.append)
        eng.process_intent(ShowSnackbarEffect())
        await eng.drain()
        assert eng.state.effects == ()
        eng.close()

    asyncio.run(scenario())
    assert effects == [ShowSnackbar("This is a test snackbar!")]


def test_threads_are_serialized():
    eng = Engine(clock=FixedClock())
    eng.process_intent(SetValue(-50))

    def worker():
        for _ in range(25):
            eng.process_intent(Increment())

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    s = eng.state
    assert s.counter.value == 50
    assert s.statistics.increment_count == 100
    assert len(s.history) == 101


def test_scheduling_failure_still_clears_state_effects(clock):
    loop = asyncio.new_event_loop()
    loop.close()
    eng = Engine(clock=clock, loop=loop)
    effects = []
    eng.subscribe_effects(effects.append)

    with pytest.raises(RuntimeError):
        eng.process_intent(ShowToastEffect())
    assert eng.state.effects == ()
    assert eng.pending_effects == 1

    # the effect is still deliverable by an explicit flush
    assert eng.flush_effects() == 1
    assert effects == [ShowToast("This is a test toast!")]
    eng.close()


def test_subscribing_during_raw_publish_replays_settled_state(engine):
    replayed = []

    def on_state(state):
        if state.effects and not replayed:
            engine.subscribe_state(replayed.append)

    engine.subscribe_state(on_state)
    engine.process_intent(Reset())
    assert replayed[0].effects == ()
    assert replayed[0].counter.value == 0
    assert all(s.effects == () for s in replayed)
