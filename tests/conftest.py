import numpy as np
import pytest

from minolrx import clear_config
from minolrx.crc import crc16
from minolrx.sequences import SYNC_WORD, WHITENING_TABLE


@pytest.fixture(autouse=True)
def no_global_config():
    """Runs every test without a leftover global decoder configuration."""
    clear_config()
    yield
    clear_config()


@pytest.fixture
def zero_payload_frame():
    """
    Raw bytes of a telegram carrying the two-byte payload 00 00.

    Built by hand (not with encode_frame) so decoding is checked against
    an independent construction.
    """
    length = 0x02
    whitened = bytes([0x00 ^ WHITENING_TABLE[0], 0x00 ^ WHITENING_TABLE[1]])
    checksum = crc16(bytes([length, 0x00, 0x00]))
    return SYNC_WORD + bytes([length]) + whitened + checksum.to_bytes(2, "big")


@pytest.fixture
def random_payload():
    """Factory for reproducible random payloads of a given length."""

    def make(length: int, seed: int = 0) -> bytes:
        rng = np.random.default_rng(seed)
        return rng.integers(0, 256, size=length, dtype=np.uint8).tobytes()

    return make
