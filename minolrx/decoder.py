"""
Frame recovery for Minol/Brunata telegrams.

This module turns one demodulated row into a validated `DecodedRecord`:
sync search at any bit offset, length-bounded extraction, PN9
de-whitening and CRC-16 verification. Every unusable candidate raises a
`DecodeFailure` subclass:

- `StructuralFailure`: the row does not hold a complete telegram
  (`MultiRowUnsupported`, `NoSync`, `TooShort`).
- `IntegrityFailure`: a complete telegram failed its check
  (`ChecksumMismatch`).

Functions
---------
decode :
    Recovers the record from a row or raises a `DecodeFailure`.

Classes
-------
MinolDecoder :
    Callable decoder block that yields None for unusable rows.
"""

from typing import Dict, Optional, Union

from .bitbuffer import BitBuffer, BitRow
from .config import DecoderConfig, get_config
from .frame import DecodedRecord, Frame
from .logger import logger, set_log_level
from .sequences import SYNC_WORD, whiten

SYNC_BITS = len(SYNC_WORD) * 8
LENGTH_BITS = 8
CHECKSUM_BITS = 16


class DecodeFailure(Exception):
    """Base class of all reasons a row yields no record."""

    code = "abort_early"


class StructuralFailure(DecodeFailure):
    """The input does not contain a complete telegram."""


class IntegrityFailure(DecodeFailure):
    """A complete telegram failed its integrity check."""

    code = "fail_mic"


class MultiRowUnsupported(StructuralFailure):
    def __init__(self, num_rows: int):
        self.num_rows = num_rows
        super().__init__(f"Expected exactly one row, got {num_rows}")


class NoSync(StructuralFailure):
    def __init__(self, bit_count: int):
        self.bit_count = bit_count
        super().__init__(f"Sync word {SYNC_WORD.hex()} not found in {bit_count} bits")


class TooShort(StructuralFailure):
    code = "abort_length"

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Frame needs {required} bits after sync start, row has {available}"
        )


class ChecksumMismatch(IntegrityFailure):
    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"CRC invalid {received:04x} != {expected:04x}")


def frame_bits(length: int) -> int:
    """Bits from the start of the sync word to the end of the CRC."""
    return SYNC_BITS + LENGTH_BITS + length * 8 + CHECKSUM_BITS


def _single_row(bits: Union[BitRow, BitBuffer]) -> BitRow:
    if isinstance(bits, BitBuffer):
        if bits.num_rows != 1:
            raise MultiRowUnsupported(bits.num_rows)
        return bits.rows[0]
    return bits


def decode(bits: Union[BitRow, BitBuffer]) -> DecodedRecord:
    """
    Recovers the payload of a single-row Minol telegram.

    Parameters
    ----------
    bits : BitRow or BitBuffer
        The demodulated row, or a capture that must hold exactly one row.

    Returns
    -------
    DecodedRecord
        Record with the de-whitened payload as hex.

    Raises
    ------
    MultiRowUnsupported
        If a capture with other than one row is given.
    NoSync
        If the sync word occurs at no bit offset.
    TooShort
        If the row ends before the CRC, checked before and after the
        length byte is known.
    ChecksumMismatch
        If the CRC over length byte and payload does not match.
    """
    row = _single_row(bits)

    start_pos = row.search(SYNC_WORD)
    if start_pos is None:
        raise NoSync(row.bit_count)

    available = row.bit_count - start_pos
    if available < frame_bits(0):
        raise TooShort(frame_bits(0), available)

    length = row.extract_bytes(start_pos + SYNC_BITS, LENGTH_BITS)[0]

    if available < frame_bits(length):
        raise TooShort(frame_bits(length), available)

    body = row.extract_bytes(
        start_pos + SYNC_BITS + LENGTH_BITS, (length + 2) * 8
    )
    frame = Frame(
        length=length,
        payload=whiten(body[:length]),
        checksum_received=int.from_bytes(body[length:], "big"),
    )

    expected = frame.checksum_computed
    if expected != frame.checksum_received:
        logger.debug(f"CRC invalid {frame.checksum_received:04x} != {expected:04x}")
        raise ChecksumMismatch(expected, frame.checksum_received)

    logger.debug(f"Frame data at bit {start_pos}: {frame.to_bytes().hex()}")
    return DecodedRecord(raw=frame.payload.hex())


class MinolDecoder:
    """
    Decoder block registered with a host capture pipeline.

    Calling the block with a row returns a record, or None when the row
    holds no valid telegram, so it can be applied to every captured row.

    Args:
        config: Registration parameters. Falls back to the global config,
            then to the defaults.
    """

    def __init__(self, config: Optional[DecoderConfig] = None):
        self.config = config or get_config() or DecoderConfig()
        if self.config.log_level is not None:
            set_log_level(self.config.log_level)

    @property
    def name(self) -> str:
        return self.config.name

    def decode(self, bits: Union[BitRow, BitBuffer]) -> DecodedRecord:
        """Same as `decode`, raising a `DecodeFailure` for unusable rows."""
        return decode(bits)

    def try_decode(self, bits: Union[BitRow, BitBuffer]) -> Optional[DecodedRecord]:
        """Decodes a row, returning None instead of raising a `DecodeFailure`."""
        try:
            return decode(bits)
        except DecodeFailure as e:
            logger.debug(f"{self.name}: {type(e).__name__} ({e.code}): {e}")
            return None

    def process(self, bits: Union[BitRow, BitBuffer]) -> Optional[DecodedRecord]:
        return self.try_decode(bits)

    def __call__(self, bits: Union[BitRow, BitBuffer]) -> Optional[DecodedRecord]:
        return self.try_decode(bits)

    def output(self, record: DecodedRecord) -> Dict[str, str]:
        """Record fields in the configured output order."""
        return record.to_dict(self.config.output_fields)
