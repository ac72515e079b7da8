"""Repeating-key XOR decoder implementing BufferDecoder."""

from __future__ import annotations


class XorDecoder:
    """Decoder for packages scrambled with a repeating XOR key.

    The key is aligned to absolute stream offsets, so any region can be
    decoded independently of the reads before it.

    Example:
        >>> decoder = XorDecoder(bytes.fromhex("a5"))
        >>> loader.load_package("Scrambled.upk", decoder=decoder)
    """

    def __init__(self, key: bytes) -> None:
        """Initialize the decoder.

        Args:
            key: Non-empty XOR key.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("XOR key cannot be empty")
        self.key = bytes(key)

    @classmethod
    def from_hex(cls, value: str) -> XorDecoder:
        """Create a decoder from a hex string such as "a5" or "0x1f2e".

        Raises:
            ValueError: If value is not valid hex.
        """
        value = value.strip().lower().removeprefix("0x")
        return cls(bytes.fromhex(value))

    def decode(self, data: bytes, position: int) -> bytes:
        """XOR data with the key, starting at the key byte for position."""
        key = self.key
        size = len(key)
        return bytes(byte ^ key[(position + i) % size] for i, byte in enumerate(data))
