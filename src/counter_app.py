# src/counter_app.py
from __future__ import annotations

import argparse
import asyncio
import copy
import logging
import sys
from pathlib import Path
from typing import Dict, Any, Optional, TextIO, Sequence

import yaml

from counter import (
    Counter, CounterState, Engine, SystemClock,
    Effect, ShowToast, ShowSnackbar, NavigateTo,
)
from keymap import Keymap

logger = logging.getLogger("counter_app")


# ---------------------------
# Config loading
# ---------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "counter": {
        "initial": 0,
        "min": -50,
        "max": 100,
    },
    "clock": {
        "format": "%H:%M:%S",
    },
    "aliases": {
        # token → intent name, e.g. "up": "Increment"
    },
    "logging": {
        "level": "WARNING",
    },
}

def load_config(path: Optional[str]) -> Dict[str, Any]:
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if not p.exists():
            logger.warning("config not found: %s (using defaults)", p)
            return cfg
        with p.open("r", encoding="utf-8") as f:
            user = yaml.safe_load(f) or {}
        # shallow merge per section
        for k, v in user.items():
            if isinstance(v, dict) and k in cfg and isinstance(cfg[k], dict):
                cfg[k].update(v)
            else:
                cfg[k] = v
    return cfg

def initial_state(config: Dict[str, Any]) -> CounterState:
    """Build the starting snapshot from the `counter` section; ValueError on bad bounds."""
    section = config.get("counter") or {}
    return CounterState(counter=Counter(
        value=int(section.get("initial", 0)),
        min_value=int(section.get("min", -50)),
        max_value=int(section.get("max", 100)),
    ))


# ---------------------------
# Rendering
# ---------------------------

def render_state(state: CounterState) -> str:
    c, st = state.counter, state.statistics
    line = (
        f"value={c.value} [{c.min_value}..{c.max_value}] "
        f"ops={st.total_operations} (+{st.increment_count} -{st.decrement_count} r{st.reset_count}) "
        f"history={len(state.history)}"
    )
    if state.last_updated:
        line += f" updated={state.last_updated}"
    if state.error:
        line += f" error={state.error!r}"
    return line

def render_effect(effect: Effect) -> str:
    if isinstance(effect, ShowToast):
        return f"[toast] {effect.message}"
    if isinstance(effect, ShowSnackbar):
        return f"[snackbar] {effect.message}"
    if isinstance(effect, NavigateTo):
        return f"[navigate] {effect.destination}"
    return f"[effect] {effect!r}"


# ---------------------------
# App bootstrap
# ---------------------------

async def run(config: Dict[str, Any], tokens: Sequence[str],
              stdin: Optional[TextIO] = None, out: Optional[TextIO] = None,
              err: Optional[TextIO] = None) -> int:
    stdin, out, err = stdin or sys.stdin, out or sys.stdout, err or sys.stderr
    keymap = Keymap(aliases=config.get("aliases") or {})
    engine = Engine(
        clock=SystemClock((config.get("clock") or {}).get("format", "%H:%M:%S")),
        initial=initial_state(config),
    )

    def _on_state(state: CounterState) -> None:
        # the raw publish still carries effects; print only the settled one
        if not state.effects:
            print(render_state(state), file=out)

    engine.subscribe_state(_on_state)
    engine.subscribe_effects(lambda e: print(render_effect(e), file=out))

    try:
        if tokens:
            for token in tokens:
                intent = keymap.resolve(token)
                if intent is None:
                    print(f"unknown token: {token!r}", file=err)
                    return 2
                engine.process_intent(intent)
                await engine.drain()
            return 0

        # interactive: one token per line until EOF / quit
        while True:
            line = await asyncio.to_thread(stdin.readline)
            if not line:
                return 0
            token = line.strip()
            if not token:
                continue
            if token.lower() in ("q", "quit", "exit"):
                return 0
            if token.lower() in ("?", "help"):
                for label, keys in keymap.help_lines():
                    print(f"  {label:<14} {keys}", file=out)
                continue
            intent = keymap.resolve(token)
            if intent is None:
                print(f"unknown token: {token!r} (try 'help')", file=err)
                continue
            engine.process_intent(intent)
            await engine.drain()
    finally:
        engine.close()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Bounded counter (intent → state → effect)")
    parser.add_argument("tokens", nargs="*", help="Tokens to apply in order, e.g. + + - 'set 12' +10")
    parser.add_argument("--config", "-c", help="Path to config.yaml", default=None)
    parser.add_argument("--log-level", "-l", default=None, help="Override logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    level = (args.log_level or (config.get("logging") or {}).get("level", "WARNING")).upper()
    logging.basicConfig(level=level, format="[%(name)s] %(message)s")

    return asyncio.run(run(config, args.tokens))


if __name__ == "__main__":
    raise SystemExit(main())
