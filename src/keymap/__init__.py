"""
Public API for the keymap package.
Usage:
    from keymap import Keymap
"""
from .keymap import Keymap

__all__ = ["Keymap"]
