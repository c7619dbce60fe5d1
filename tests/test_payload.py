"""
Test suite for the verification payload codec
"""

import json
import pytest

from echeck.errors import EncodingError
from echeck.payload import encode, decode, PAYLOAD_FIELDS, VerificationPayload

from conftest import ISSUED_AT, make_draft


@pytest.fixture
def record(issuer):
    return issuer.issue(make_draft(), issued_at=ISSUED_AT).record


class TestEncode:
    """Payload construction"""

    def test_contains_only_payload_fields(self, record):
        data = json.loads(encode(record))
        assert tuple(data.keys()) == PAYLOAD_FIELDS
        assert data == {
            "checkNumber": record.check_number,
            "signature": record.signature,
            "timestamp": "2026-10-18T09:30:00.123Z",
            "country": "Sudan",
        }

    def test_excludes_sensitive_fields(self, record):
        text = encode(record)
        assert record.security_pin not in json.loads(text).values()
        assert "1500.00" not in text
        assert record.beneficiary_name not in text

    def test_byte_identical_on_regeneration(self, record):
        assert encode(record) == encode(record)

    def test_custom_country(self, record):
        assert json.loads(encode(record, country="SD"))["country"] == "SD"


class TestDecode:
    """Payload parsing"""

    def test_round_trip(self, record):
        payload = decode(encode(record))
        assert payload == VerificationPayload(
            check_number=record.check_number,
            signature=record.signature,
            issued_at=record.issued_at,
            country="Sudan",
        )
        assert payload.matches(record)

    def test_accepts_bytes(self, record):
        assert decode(encode(record).encode("utf-8")).check_number == record.check_number

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "not json",
        "[1, 2, 3]",
        '"just a string"',
    ])
    def test_malformed_text(self, text):
        with pytest.raises(EncodingError):
            decode(text)

    def test_missing_field(self, record):
        data = json.loads(encode(record))
        del data["signature"]
        with pytest.raises(EncodingError, match="missing"):
            decode(json.dumps(data))

    def test_unexpected_field(self, record):
        data = json.loads(encode(record))
        data["amount"] = "1500.00"
        with pytest.raises(EncodingError, match="unexpected"):
            decode(json.dumps(data))

    def test_non_string_field(self, record):
        data = json.loads(encode(record))
        data["checkNumber"] = 100001
        with pytest.raises(EncodingError):
            decode(json.dumps(data))

    def test_bad_signature(self, record):
        data = json.loads(encode(record))
        data["signature"] = "XYZ"
        with pytest.raises(EncodingError, match="signature"):
            decode(json.dumps(data))

    def test_bad_timestamp(self, record):
        data = json.loads(encode(record))
        data["timestamp"] = "last tuesday"
        with pytest.raises(EncodingError, match="timestamp"):
            decode(json.dumps(data))

    def test_payload_for_other_record_does_not_match(self, issuer, record):
        other = issuer.issue(make_draft(check_number="100002")).record
        assert not decode(encode(record)).matches(other)
