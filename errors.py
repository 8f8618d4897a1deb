# errors.py
from __future__ import annotations


class EnigmaError(Exception):
    """Base class for every failure raised by the simulator."""


class ConfigError(EnigmaError, ValueError):
    """Malformed alphabet, cycles, rotor set, settings or config file."""


class RangeError(EnigmaError, IndexError):
    """Integer signal outside ``[0, size)``."""


class SymbolLookupError(EnigmaError, LookupError):
    """Symbol that is not part of the alphabet in use."""
