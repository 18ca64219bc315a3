"""
Fixed sequences of the CC1101 packet format.

This module provides the constant byte sequences used on air and the
PN9 whitening routines:
- `PREAMBLE`, `SYNC_WORD`: bit sync preamble and frame sync word.
- `WHITENING_TABLE`: the first 256 bytes of the CC1101 PN9 sequence.
- `pn9_sequence`: regenerates the whitening bytes from the LFSR.
- `whiten`: XORs data with the whitening table (its own inverse).
"""

# Bit sync, sent ahead of the sync word. Not required for decoding.
PREAMBLE = b"\xaa\xaa\xaa\xaa"

# Frame sync word (access code)
SYNC_WORD = b"\xd3\x91\xd3\x91"

# Largest payload the one-byte length field can announce
MAX_PAYLOAD_LENGTH = 255

# CC1101 PN9 whitening sequence (LFSR poly 0x21, init 0x1ff)
WHITENING_TABLE = bytes(
    [
        0xFF, 0xE1, 0x1D, 0x9A, 0xED, 0x85, 0x33, 0x24,
        0xEA, 0x7A, 0xD2, 0x39, 0x70, 0x97, 0x57, 0x0A,
        0x54, 0x7D, 0x2D, 0xD8, 0x6D, 0x0D, 0xBA, 0x8F,
        0x67, 0x59, 0xC7, 0xA2, 0xBF, 0x34, 0xCA, 0x18,
        0x30, 0x53, 0x93, 0xDF, 0x92, 0xEC, 0xA7, 0x15,
        0x8A, 0xDC, 0xF4, 0x86, 0x55, 0x4E, 0x18, 0x21,
        0x40, 0xC4, 0xC4, 0xD5, 0xC6, 0x91, 0x8A, 0xCD,
        0xE7, 0xD1, 0x4E, 0x09, 0x32, 0x17, 0xDF, 0x83,
        0xFF, 0xF0, 0x0E, 0xCD, 0xF6, 0xC2, 0x19, 0x12,
        0x75, 0x3D, 0xE9, 0x1C, 0xB8, 0xCB, 0x2B, 0x05,
        0xAA, 0xBE, 0x16, 0xEC, 0xB6, 0x06, 0xDD, 0xC7,
        0xB3, 0xAC, 0x63, 0xD1, 0x5F, 0x1A, 0x65, 0x0C,
        0x98, 0xA9, 0xC9, 0x6F, 0x49, 0xF6, 0xD3, 0x0A,
        0x45, 0x6E, 0x7A, 0xC3, 0x2A, 0x27, 0x8C, 0x10,
        0x20, 0x62, 0xE2, 0x6A, 0xE3, 0x48, 0xC5, 0xE6,
        0xF3, 0x68, 0xA7, 0x04, 0x99, 0x8B, 0xEF, 0xC1,
        0x7F, 0x78, 0x87, 0x66, 0x7B, 0xE1, 0x0C, 0x89,
        0xBA, 0x9E, 0x74, 0x0E, 0xDC, 0xE5, 0x95, 0x02,
        0x55, 0x5F, 0x0B, 0x76, 0x5B, 0x83, 0xEE, 0xE3,
        0x59, 0xD6, 0xB1, 0xE8, 0x2F, 0x8D, 0x32, 0x06,
        0xCC, 0xD4, 0xE4, 0xB7, 0x24, 0xFB, 0x69, 0x85,
        0x22, 0x37, 0xBD, 0x61, 0x95, 0x13, 0x46, 0x08,
        0x10, 0x31, 0x71, 0xB5, 0x71, 0xA4, 0x62, 0xF3,
        0x79, 0xB4, 0x53, 0x82, 0xCC, 0xC5, 0xF7, 0xE0,
        0x3F, 0xBC, 0x43, 0xB3, 0xBD, 0x70, 0x86, 0x44,
        0x5D, 0x4F, 0x3A, 0x07, 0xEE, 0xF2, 0x4A, 0x81,
        0xAA, 0xAF, 0x05, 0xBB, 0xAD, 0x41, 0xF7, 0xF1,
        0x2C, 0xEB, 0x58, 0xF4, 0x97, 0x46, 0x19, 0x03,
        0x66, 0x6A, 0xF2, 0x5B, 0x92, 0xFD, 0xB4, 0x42,
        0x91, 0x9B, 0xDE, 0xB0, 0xCA, 0x09, 0x23, 0x04,
        0x88, 0x98, 0xB8, 0xDA, 0x38, 0x52, 0xB1, 0xF9,
        0x3C, 0xDA, 0x29, 0x41, 0xE6, 0xE2, 0x7B, 0xF0,
    ]
)


def pn9_sequence(length: int, seed: int = 0x1FF) -> bytes:
    """
    Generates PN9 whitening bytes.

    Each output byte is the low byte of the 9-bit LFSR state, after which
    the register is clocked eight times with feedback ``x0 ^ x5``.

    Args:
        length: Number of bytes to generate.
        seed: Initial 9-bit register state (non-zero).

    Returns:
        The whitening bytes.
    """
    if length < 0:
        raise ValueError(f"Length must be non-negative, got {length}")
    if not 0 < seed <= 0x1FF:
        raise ValueError(f"Seed must be a non-zero 9-bit value, got {seed:#x}")

    seq = bytearray(length)
    state = seed

    for i in range(length):
        seq[i] = state & 0xFF
        for _ in range(8):
            fb = (state ^ (state >> 5)) & 1
            state = (state >> 1) | (fb << 8)

    return bytes(seq)


def whiten(data: bytes) -> bytes:
    """
    XORs ``data[i]`` with ``WHITENING_TABLE[i]``.

    Applying it twice returns the input, so the same call whitens on
    transmit and de-whitens on receive.

    Raises:
        ValueError: If ``data`` is longer than the whitening table.
    """
    if len(data) > len(WHITENING_TABLE):
        raise ValueError(
            f"Cannot whiten {len(data)} bytes, table holds {len(WHITENING_TABLE)}"
        )
    return bytes(b ^ k for b, k in zip(data, WHITENING_TABLE))
