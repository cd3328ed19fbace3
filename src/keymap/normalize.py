from __future__ import annotations
from typing import Any, Optional, Tuple

def _lc(x: Any) -> str:
    return str(x).strip().lower()

def normalize_int(value: Any) -> Tuple[bool, Any, Optional[str]]:
    """Parse an integer argument; bounds are left to the reducer."""
    if value is None or value == "":
        return False, None, "Value is required."
    try:
        return True, int(value), None
    except (TypeError, ValueError):
        return False, None, f"Expected integer, got: {value}"
