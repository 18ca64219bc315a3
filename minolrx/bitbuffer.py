"""
Bit-level containers for demodulated rows.

This module defines the data structures handed over by the demodulator:
- `BitRow`: one received row of bits, with bit-offset pattern search and
  byte-granular extraction at arbitrary (non byte-aligned) bit offsets.
- `BitBuffer`: the rows of one capture.

Bits are stored as an immutable NumPy ``uint8`` array of 0s and 1s, most
significant bit of every byte first.
"""

from typing import Any, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _unpack(data: bytes) -> np.ndarray:
    octets = np.fromiter(bytes(data), dtype=np.uint8, count=len(data))
    return np.unpackbits(octets)


class BitRow(BaseModel):
    """
    One demodulated row of bits.

    Attributes:
        bits: Read-only array of 0/1 values, first received bit first.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    bits: Any

    @field_validator("bits", mode="before")
    @classmethod
    def validate_bits(cls, v: Any) -> np.ndarray:
        if isinstance(v, str):
            v = [int(c) for c in v if not c.isspace()]

        arr = np.asarray(v)
        if arr.ndim != 1:
            raise ValueError(f"Bits must be one-dimensional, got shape {arr.shape}")
        if arr.size and not np.all((arr == 0) | (arr == 1)):
            raise ValueError("Bits must only contain 0 and 1.")

        arr = arr.astype(np.uint8)
        arr.setflags(write=False)
        return arr

    @classmethod
    def from_bytes(cls, data: bytes, bit_count: Optional[int] = None) -> "BitRow":
        """
        Builds a row from packed bytes.

        Args:
            data: Packed bits, MSB first.
            bit_count: Number of valid bits. Defaults to ``len(data) * 8``.

        Returns:
            A new BitRow.
        """
        bits = _unpack(data)
        if bit_count is not None:
            if not 0 <= bit_count <= bits.size:
                raise ValueError(
                    f"bit_count {bit_count} out of range for {len(data)} bytes"
                )
            bits = bits[:bit_count]
        return cls(bits=bits)

    @classmethod
    def from_hex(cls, text: str, bit_count: Optional[int] = None) -> "BitRow":
        """Builds a row from a hex string such as ``"d391d391"``."""
        return cls.from_bytes(bytes.fromhex(text), bit_count)

    @property
    def bit_count(self) -> int:
        """Number of bits in the row."""
        return int(self.bits.size)

    def __len__(self) -> int:
        return self.bit_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitRow):
            return NotImplemented
        return bool(np.array_equal(self.bits, other.bits))

    def __hash__(self) -> int:
        return hash((self.bit_count, self.to_bytes()))

    def to_bytes(self) -> bytes:
        """Packs the row into bytes; the last byte is zero padded."""
        return np.packbits(self.bits).tobytes()

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def search(
        self, pattern: bytes, start: int = 0, pattern_bits: Optional[int] = None
    ) -> Optional[int]:
        """
        Finds the first occurrence of a bit pattern at any bit offset.

        The row is scanned once with a shift register of ``pattern_bits``
        bits, so the search is linear in the row length.

        Args:
            pattern: Pattern bytes, MSB first.
            start: Bit offset to start searching from.
            pattern_bits: Number of leading pattern bits to match.
                Defaults to all bits of ``pattern``.

        Returns:
            Bit offset of the first match, or None if the pattern is absent.

        Raises:
            ValueError: If ``start`` or ``pattern_bits`` is out of range.
        """
        total = len(pattern) * 8
        if pattern_bits is None:
            pattern_bits = total
        if not 0 < pattern_bits <= total:
            raise ValueError(
                f"pattern_bits must be in 1..{total}, got {pattern_bits}"
            )
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")

        target = int.from_bytes(pattern, "big") >> (total - pattern_bits)
        mask = (1 << pattern_bits) - 1

        window = 0
        for pos, bit in enumerate(self.bits[start:].tolist(), start):
            window = ((window << 1) | bit) & mask
            if pos - start + 1 >= pattern_bits and window == target:
                return pos - pattern_bits + 1
        return None

    def extract_bytes(self, offset: int, num_bits: int) -> bytes:
        """
        Extracts ``num_bits`` bits starting at bit ``offset`` as bytes.

        The offset need not be byte aligned. A trailing partial byte is
        zero padded on the right.

        Raises:
            ValueError: If the requested range does not lie inside the row.
        """
        if offset < 0 or num_bits < 0:
            raise ValueError(
                f"offset and num_bits must be non-negative, got {offset}, {num_bits}"
            )
        if offset + num_bits > self.bit_count:
            raise ValueError(
                f"Cannot extract {num_bits} bits at offset {offset} "
                f"from a {self.bit_count}-bit row"
            )
        return np.packbits(self.bits[offset : offset + num_bits]).tobytes()


class BitBuffer(BaseModel):
    """
    All rows of one capture, in reception order.

    Attributes:
        rows: The received rows.
    """

    model_config = ConfigDict(validate_assignment=True)

    rows: List[BitRow] = Field(default_factory=list)

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    def add_row(self, row: BitRow) -> "BitBuffer":
        # Reassigned so every row goes through validation
        self.rows = [*self.rows, row]
        return self
