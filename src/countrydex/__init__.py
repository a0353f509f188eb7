"""Countrydex - a personal gallery of visited countries."""

__version__ = "0.1.0"

from countrydex.core.config import CountrydexConfig, config

__all__ = [
    "CountrydexConfig",
    "config",
]
