from __future__ import annotations
from typing import Dict, Any, Optional, Iterable, List, Tuple

from counter.intents import Intent
from .bindings import BUILTIN_BINDINGS
from .normalize import _lc, normalize_int


class Keymap:
    """
    Token -> Intent resolver for text front-ends:
      - Built-in bindings for every intent
      - Optional extra aliases (from config), token -> intent name
    Built-in tokens win over extra aliases on conflict.
    """

    def __init__(self, aliases: Optional[Dict[str, str]] = None):
        self._bindings: Dict[str, Dict[str, Any]] = {}
        self._aliases: Dict[str, str] = {}

        for name, binding in BUILTIN_BINDINGS.items():
            self._register_binding(name, binding)
        self._rebuild_alias_index()

        for token, target in (aliases or {}).items():
            self.add_alias(token, target)

    # ----- public API -----

    def resolve(self, token: str) -> Optional[Intent]:
        """Build the Intent for a typed token, or None if it means nothing."""
        if not token:
            return None
        head, arg = _split(_lc(token))
        name = self._aliases.get(head)
        if name is None:
            return None
        binding = self._bindings[name]
        if binding.get("arg") == "int":
            ok, value, _ = normalize_int(arg)
            return binding["intent"](value) if ok else None
        if arg:
            return None
        return binding["intent"]()

    def add_alias(self, token: str, target: str) -> None:
        """
        Map an extra token onto an intent. `target` is an intent name
        ("Increment", case-insensitive) or any token already bound.
        """
        name = self._resolve_name(target)
        if name is None:
            raise ValueError(f"Alias '{token}' targets unknown intent '{target}'")
        self._aliases.setdefault(_lc(token), name)  # first writer wins

    def tokens_for(self, name: str) -> List[str]:
        return [t for t, n in self._aliases.items() if n == name]

    def help_lines(self) -> Iterable[Tuple[str, str]]:
        for name, binding in self._bindings.items():
            yield binding["label"], ", ".join(self.tokens_for(name))

    # ----- internal plumbing -----

    def _resolve_name(self, target: str) -> Optional[str]:
        key = _lc(target)
        for name in self._bindings:
            if _lc(name) == key:
                return name
        return self._aliases.get(key)

    def _register_binding(self, name: str, binding: Dict[str, Any]) -> None:
        binding = dict(binding)
        binding.setdefault("label", name)
        binding.setdefault("aliases", [])
        if not isinstance(binding.get("intent"), type) or not issubclass(binding["intent"], Intent):
            raise ValueError(f"Binding {name} does not name an Intent class")
        self._bindings[name] = binding

    def _rebuild_alias_index(self) -> None:
        self._aliases.clear()
        for name, binding in self._bindings.items():
            for t in binding.get("aliases", []):
                if not t:
                    continue
                self._aliases.setdefault(_lc(t), name)


def _split(text: str) -> Tuple[str, str]:
    """'set 12' -> ('set', '12'); '=12' -> ('=', '12'); '+' -> ('+', '')."""
    head, _, arg = text.partition(" ")
    if head.startswith("=") and len(head) > 1 and not arg:
        return "=", head[1:]
    return head, arg.strip()
