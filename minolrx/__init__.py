"""
minolrx: frame recovery for Minol/Brunata 868 MHz telemetry.

This package provides tools for:
- Holding demodulated bit rows and searching them at bit granularity.
- Reversing the CC1101 PN9 data whitening.
- Verifying the CC1101 CRC-16 and emitting validated payload records.
"""

from .bitbuffer import BitBuffer, BitRow
from .config import (
    DecoderConfig,
    clear_config,
    get_config,
    require_config,
    set_config,
)
from .decoder import (
    ChecksumMismatch,
    DecodeFailure,
    IntegrityFailure,
    MinolDecoder,
    MultiRowUnsupported,
    NoSync,
    StructuralFailure,
    TooShort,
    decode,
)
from .frame import DecodedRecord, Frame, encode_frame
from .logger import set_log_level

__all__ = [
    "BitRow",
    "BitBuffer",
    "DecoderConfig",
    "set_config",
    "get_config",
    "clear_config",
    "require_config",
    "DecodeFailure",
    "StructuralFailure",
    "IntegrityFailure",
    "MultiRowUnsupported",
    "NoSync",
    "TooShort",
    "ChecksumMismatch",
    "decode",
    "MinolDecoder",
    "DecodedRecord",
    "Frame",
    "encode_frame",
    "set_log_level",
]
