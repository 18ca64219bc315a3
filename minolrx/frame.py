"""
Frame structures of the Minol radio telegram.

Over the air a telegram is laid out as::

    [preamble 0xaaaaaaaa][sync 0xd391d391][length][payload x length][crc16 BE]

The payload is PN9 whitened; the CRC covers the length byte and the
de-whitened payload.

- `Frame`: a recovered telegram, length byte, payload and received
  checksum kept as separate fields.
- `DecodedRecord`: the record emitted for a valid telegram.
- `encode_frame`: builds the bit row a transmitter would send.
"""

from typing import Dict, Literal, Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .bitbuffer import BitRow
from .crc import crc16
from .sequences import MAX_PAYLOAD_LENGTH, PREAMBLE, SYNC_WORD, whiten


class Frame(BaseModel):
    """
    A telegram recovered from a row, after de-whitening.

    Attributes:
        length: Payload length announced by the length byte.
        payload: De-whitened payload, exactly ``length`` bytes.
        checksum_received: Big-endian CRC read after the payload.
    """

    model_config = ConfigDict(frozen=True)

    length: int = Field(..., ge=0, le=MAX_PAYLOAD_LENGTH)
    payload: bytes
    checksum_received: int = Field(..., ge=0, le=0xFFFF)

    @model_validator(mode="after")
    def check_payload_length(self) -> "Frame":
        if len(self.payload) != self.length:
            raise ValueError(
                f"Payload holds {len(self.payload)} bytes, "
                f"length byte says {self.length}"
            )
        return self

    @property
    def checksum_data(self) -> bytes:
        """Bytes covered by the CRC: length byte then payload."""
        return bytes([self.length]) + self.payload

    @property
    def checksum_computed(self) -> int:
        return crc16(self.checksum_data)

    @property
    def is_valid(self) -> bool:
        return self.checksum_computed == self.checksum_received

    def to_bytes(self) -> bytes:
        """Length byte, de-whitened payload and received CRC, as logged."""
        return self.checksum_data + self.checksum_received.to_bytes(2, "big")


class DecodedRecord(BaseModel):
    """
    Output record of a successfully decoded telegram.

    Attributes:
        model: Device model label.
        raw: Payload as lowercase hex, two characters per byte.
        mic: Message integrity check that validated the payload.
    """

    model_config = ConfigDict(frozen=True)

    model: Literal["Minol"] = "Minol"
    raw: str = Field(
        ..., pattern=r"^(?:[0-9a-f]{2})*$", max_length=2 * MAX_PAYLOAD_LENGTH
    )
    mic: Literal["CRC"] = "CRC"

    @property
    def payload(self) -> bytes:
        return bytes.fromhex(self.raw)

    def to_dict(self, fields: Optional[Sequence[str]] = None) -> Dict[str, str]:
        """
        Returns the record as a plain dict.

        Args:
            fields: Field names to include, in order. Defaults to all fields.

        Raises:
            KeyError: If an unknown field is requested.
        """
        data = self.model_dump()
        if fields is None:
            return data
        return {name: data[name] for name in fields}


def encode_frame(payload: bytes, preamble: bool = True, pad_bits: int = 0) -> BitRow:
    """
    Builds the bit row of a telegram carrying ``payload``.

    This is the transmit side of the format and is used to synthesize
    test rows.

    Args:
        payload: Application payload, at most 255 bytes.
        preamble: Whether to send the 0xaa bit sync preamble.
        pad_bits: Number of zero bits received before the telegram, to
            place it at a non byte-aligned offset.

    Returns:
        The encoded row.
    """
    payload = bytes(payload)
    if len(payload) > MAX_PAYLOAD_LENGTH:
        raise ValueError(
            f"Payload of {len(payload)} bytes exceeds maximum of {MAX_PAYLOAD_LENGTH}"
        )
    if pad_bits < 0:
        raise ValueError(f"pad_bits must be non-negative, got {pad_bits}")

    length = bytes([len(payload)])
    checksum = crc16(length + payload).to_bytes(2, "big")
    header = (PREAMBLE if preamble else b"") + SYNC_WORD + length
    data = header + whiten(payload) + checksum

    row = BitRow.from_bytes(data)
    if pad_bits:
        padding = np.zeros(pad_bits, dtype=np.uint8)
        row = BitRow(bits=np.concatenate([padding, row.bits]))
    return row
