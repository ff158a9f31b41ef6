from typing import Optional

# Packed flag bytes carried by every request row.
FLAGS_WIDTH = 4


class Bitfield:
    """Fixed-size packed set of boolean flags.

    Bit `n` lives in byte `n // 8` under mask `1 << (n % 8)`. Meaning of the
    individual bits belongs to the caller.
    """

    def __init__(self, width: int = FLAGS_WIDTH, data: Optional[bytes] = None):
        if data is not None:
            if len(data) != width:
                raise ValueError(f"flag bytes must have length {width}, got {len(data)}")
            self._bytes = bytearray(data)
        else:
            self._bytes = bytearray(width)

    @property
    def width(self) -> int:
        return len(self._bytes)

    def _locate(self, pos: int):
        if pos < 0 or pos >= len(self._bytes) * 8:
            raise IndexError(f"flag position {pos} out of range for {len(self._bytes)} bytes")
        return pos // 8, 1 << (pos % 8)

    def get(self, pos: int) -> bool:
        index, mask = self._locate(pos)
        return bool(self._bytes[index] & mask)

    def set(self, pos: int, value: bool = True) -> None:
        index, mask = self._locate(pos)
        if value:
            self._bytes[index] |= mask
        else:
            self._bytes[index] &= ~mask & 0xFF

    def to_bytes(self) -> bytes:
        return bytes(self._bytes)

    def __eq__(self, other):
        if not isinstance(other, Bitfield):
            return NotImplemented
        return self._bytes == other._bytes

    def __repr__(self):
        return f"<Bitfield {self._bytes.hex()}>"
