"""Deserializer adapters."""

from packloader.adapters.deserializers.summary import (
    PACKAGE_SIGNATURE,
    SummaryDeserializer,
)


__all__ = ["PACKAGE_SIGNATURE", "SummaryDeserializer"]
