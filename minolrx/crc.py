"""
CRC-16 used by the CC1101 packet engine.

The default parameters (poly 0x8005, init 0xffff, MSB first, no reflection,
no final XOR) are the catalogued CRC-16/CMS.
"""

from functools import lru_cache
from typing import Callable

import crcmod

CRC16_POLYNOMIAL = 0x8005
CRC16_INIT = 0xFFFF


@lru_cache(maxsize=None)
def _crc16_function(polynomial: int, init: int) -> Callable[[bytes], int]:
    # crcmod expects the polynomial with its x^16 term
    return crcmod.mkCrcFun(
        0x10000 | polynomial, initCrc=init, rev=False, xorOut=0x0000
    )


def crc16(
    data: bytes, polynomial: int = CRC16_POLYNOMIAL, init: int = CRC16_INIT
) -> int:
    """
    Computes an MSB-first CRC-16 without final XOR.

    Args:
        data: Message bytes.
        polynomial: Generator polynomial without the x^16 term.
        init: Initial register value.

    Returns:
        16-bit checksum.
    """
    return _crc16_function(polynomial & 0xFFFF, init & 0xFFFF)(bytes(data))
