"""Buffer decoder adapters."""

from packloader.adapters.decoders.xor import XorDecoder
from packloader.core.ports import NullDecoder


__all__ = ["NullDecoder", "XorDecoder"]
