"""Stream adapters."""

from packloader.adapters.stream.memory import MemoryStream


__all__ = ["MemoryStream"]
