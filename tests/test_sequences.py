import pytest

from minolrx.sequences import (
    MAX_PAYLOAD_LENGTH,
    PREAMBLE,
    SYNC_WORD,
    WHITENING_TABLE,
    pn9_sequence,
    whiten,
)


def test_constants():
    assert SYNC_WORD == bytes.fromhex("d391d391")
    assert PREAMBLE == bytes.fromhex("aaaaaaaa")
    assert len(WHITENING_TABLE) == 256
    assert len(WHITENING_TABLE) > MAX_PAYLOAD_LENGTH


def test_pn9_matches_table():
    """The LFSR regenerates the stored whitening table."""
    assert pn9_sequence(256) == WHITENING_TABLE


def test_pn9_prefix():
    assert pn9_sequence(3) == b"\xff\xe1\x1d"
    assert pn9_sequence(0) == b""


def test_pn9_invalid_arguments():
    with pytest.raises(ValueError):
        pn9_sequence(-1)
    with pytest.raises(ValueError):
        pn9_sequence(4, seed=0)
    with pytest.raises(ValueError):
        pn9_sequence(4, seed=0x200)


def test_whiten_zeros_gives_table():
    assert whiten(bytes(10)) == WHITENING_TABLE[:10]


def test_whiten_is_involution(random_payload):
    """Whitening twice restores the data for every length 0..255."""
    for length in range(MAX_PAYLOAD_LENGTH + 1):
        data = random_payload(length, seed=length)
        assert whiten(whiten(data)) == data


def test_whiten_full_table():
    assert whiten(WHITENING_TABLE) == bytes(256)


def test_whiten_too_long():
    with pytest.raises(ValueError, match="Cannot whiten"):
        whiten(bytes(257))
