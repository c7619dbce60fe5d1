"""
Verification Payload Codec

Builds and parses the compact JSON text embedded in a check's QR code. The
payload carries only the check number, signature, issuance timestamp and
jurisdiction tag: no amount, no names and never the security PIN.
"""

import json
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from .checks import CheckRecord, format_timestamp, parse_timestamp
from .errors import EncodingError


DEFAULT_COUNTRY = "Sudan"

PAYLOAD_FIELDS = ("checkNumber", "signature", "timestamp", "country")

SIGNATURE_PATTERN = re.compile(r"[0-9a-f]{64}")


@dataclass(frozen=True)
class VerificationPayload:
    """Fields recovered from a scanned QR code"""
    check_number: str
    signature: str
    issued_at: datetime
    country: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'checkNumber': self.check_number,
            'signature': self.signature,
            'timestamp': format_timestamp(self.issued_at),
            'country': self.country,
        }

    def matches(self, record: CheckRecord) -> bool:
        """True if this payload was produced from record"""
        return (
            self.check_number == record.check_number
            and self.signature == record.signature
            and self.issued_at == record.issued_at
        )


def encode(record: CheckRecord, country: str = DEFAULT_COUNTRY) -> str:
    """Payload text for a record; identical records give identical bytes"""
    payload = VerificationPayload(
        check_number=record.check_number,
        signature=record.signature,
        issued_at=record.issued_at,
        country=country,
    )
    return json.dumps(payload.to_dict(), ensure_ascii=False, separators=(',', ':'))


def decode(text: str) -> VerificationPayload:
    """
    Parse payload text produced by encode.

    Raises:
        EncodingError: If the text is not a well-formed payload
    """
    if isinstance(text, bytes):
        try:
            text = text.decode('utf-8')
        except UnicodeDecodeError as e:
            raise EncodingError(f"Payload is not UTF-8: {e}")
    if not isinstance(text, str) or not text.strip():
        raise EncodingError("Payload is empty")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise EncodingError(f"Payload is not valid JSON: {e.msg}")

    if not isinstance(data, dict):
        raise EncodingError("Payload must be a JSON object")

    missing = [name for name in PAYLOAD_FIELDS if name not in data]
    if missing:
        raise EncodingError(f"Payload missing fields: {', '.join(missing)}")
    unexpected = sorted(set(data) - set(PAYLOAD_FIELDS))
    if unexpected:
        raise EncodingError(f"Payload has unexpected fields: {', '.join(unexpected)}")

    for name in PAYLOAD_FIELDS:
        if not isinstance(data[name], str) or not data[name]:
            raise EncodingError(f"Payload field '{name}' must be a non-empty string")

    if not SIGNATURE_PATTERN.fullmatch(data['signature']):
        raise EncodingError("Payload signature must be 64 lowercase hex characters")

    try:
        issued_at = parse_timestamp(data['timestamp'])
    except ValueError as e:
        raise EncodingError(f"Payload timestamp is invalid: {e}")

    return VerificationPayload(
        check_number=data['checkNumber'],
        signature=data['signature'],
        issued_at=issued_at,
        country=data['country'],
    )
