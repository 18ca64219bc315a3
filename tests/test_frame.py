"""Tests for frame models and the telegram encoder."""

import pytest
from pydantic import ValidationError

from minolrx import DecodedRecord, Frame, encode_frame
from minolrx.crc import crc16
from minolrx.sequences import PREAMBLE, SYNC_WORD, WHITENING_TABLE


class TestFrame:
    def test_valid_frame(self):
        checksum = crc16(b"\x02\x00\x00")
        frame = Frame(length=2, payload=b"\x00\x00", checksum_received=checksum)

        assert frame.checksum_data == b"\x02\x00\x00"
        assert frame.checksum_computed == checksum
        assert frame.is_valid
        assert frame.to_bytes() == b"\x02\x00\x00" + checksum.to_bytes(2, "big")

    def test_wrong_checksum_is_invalid(self):
        checksum = crc16(b"\x01\x42") ^ 0x0001
        frame = Frame(length=1, payload=b"\x42", checksum_received=checksum)
        assert not frame.is_valid

    def test_payload_must_match_length(self):
        with pytest.raises(ValidationError, match="length byte says"):
            Frame(length=3, payload=b"\x00\x00", checksum_received=0)

    def test_field_bounds(self):
        with pytest.raises(ValidationError):
            Frame(length=256, payload=bytes(256), checksum_received=0)
        with pytest.raises(ValidationError):
            Frame(length=0, payload=b"", checksum_received=0x10000)


class TestDecodedRecord:
    def test_defaults(self):
        record = DecodedRecord(raw="00ff")
        assert record.model == "Minol"
        assert record.mic == "CRC"
        assert record.payload == b"\x00\xff"

    def test_empty_payload(self):
        assert DecodedRecord(raw="").payload == b""

    def test_to_dict_order(self):
        record = DecodedRecord(raw="0102")
        assert list(record.to_dict()) == ["model", "raw", "mic"]
        assert record.to_dict(["raw"]) == {"raw": "0102"}

    def test_to_dict_unknown_field(self):
        with pytest.raises(KeyError):
            DecodedRecord(raw="01").to_dict(["rssi"])

    @pytest.mark.parametrize("raw", ["ABCD", "abc", "zz", "0" * 512])
    def test_invalid_raw(self, raw):
        with pytest.raises(ValidationError):
            DecodedRecord(raw=raw)

    def test_labels_are_fixed(self):
        with pytest.raises(ValidationError):
            DecodedRecord(model="Other", raw="00")
        with pytest.raises(ValidationError):
            DecodedRecord(raw="00", mic="CHECKSUM")

    def test_frozen(self):
        record = DecodedRecord(raw="00")
        with pytest.raises(ValidationError):
            record.raw = "01"


class TestEncodeFrame:
    def test_layout(self):
        payload = b"\x10\x20\x30"
        row = encode_frame(payload)

        data = row.to_bytes()
        assert data[:4] == PREAMBLE
        assert data[4:8] == SYNC_WORD
        assert data[8] == 3
        assert data[9:12] == bytes(b ^ k for b, k in zip(payload, WHITENING_TABLE))
        assert int.from_bytes(data[12:14], "big") == crc16(b"\x03" + payload)
        assert row.bit_count == 14 * 8

    def test_without_preamble(self, zero_payload_frame):
        row = encode_frame(b"\x00\x00", preamble=False)
        assert row.to_bytes() == zero_payload_frame

    def test_pad_bits(self):
        row = encode_frame(b"", preamble=False, pad_bits=5)
        assert row.bit_count == 5 + 7 * 8
        assert row.bits[:5].tolist() == [0] * 5
        assert row.search(SYNC_WORD) == 5

    def test_maximum_payload(self):
        row = encode_frame(bytes(255), preamble=False)
        assert row.bit_count == (4 + 1 + 255 + 2) * 8

    def test_payload_too_long(self):
        with pytest.raises(ValueError, match="exceeds maximum"):
            encode_frame(bytes(256))

    def test_negative_pad_bits(self):
        with pytest.raises(ValueError):
            encode_frame(b"\x00", pad_bits=-1)
