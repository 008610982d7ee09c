"""Bit-level reader for H.264 RBSP payloads, including Exp-Golomb codes."""

from __future__ import annotations


class BitStreamError(ValueError):
    """Raised when a read runs past the end of the bit stream."""


class BitStream:
    """Reads bits most-significant first from a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._total = len(self._data) * 8

    def read_bit(self) -> int:
        """Read one bit."""
        if self._pos >= self._total:
            raise BitStreamError("read past the end of the bit stream")
        byte = self._data[self._pos >> 3]
        bit = (byte >> (7 - (self._pos & 7))) & 1
        self._pos += 1
        return bit

    def read_bits(self, n: int) -> int:
        """Read ``n`` bits as an unsigned integer, most significant bit first."""
        if n < 0:
            raise ValueError("bit count must not be negative")
        value = 0
        for _ in range(n):
            value = (value << 1) | self.read_bit()
        return value

    def read_ue(self) -> int:
        """Decode an unsigned Exp-Golomb value, ue(v)."""
        leading_zeros = 0
        while self.read_bit() == 0:
            leading_zeros += 1
        return (1 << leading_zeros) - 1 + self.read_bits(leading_zeros)

    def read_se(self) -> int:
        """Decode a signed Exp-Golomb value, se(v)."""
        code = self.read_ue()
        if code & 1:
            return (code + 1) // 2
        return -(code // 2)