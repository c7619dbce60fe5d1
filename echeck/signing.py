"""
Check Signing Module

Canonical serialization of a check record and its SHA-256 signature.

The signature is SHA-256 over the canonical string followed by the 4-digit
security PIN, hex encoded. The PIN is a low-friction shared check, not a
strong key: with only 10,000 possible values, anyone holding a record and
its signature can recover the PIN by brute force, and the issuer (who knows
the PIN) can forge signatures. Treat a valid signature as evidence that the
record is unaltered, not as proof of who issued it.
"""

import hashlib
import hmac
import json
from datetime import datetime
from typing import Optional

from .checks import CheckRecord, format_timestamp
from .currency import format_amount


# Fixed so independent implementations produce identical bytes
CANONICAL_FIELDS = (
    "checkNumber",
    "issuerName",
    "issuerAccount",
    "beneficiaryName",
    "amount",
    "amountInWords",
    "issueDate",
    "bankName",
    "branchName",
    "securityPin",
    "issuedAt",
)


def canonicalize(record: CheckRecord, issued_at: Optional[datetime] = None) -> str:
    """
    Deterministic serialization of a check used as the signing input.

    Produces a compact JSON object whose keys follow CANONICAL_FIELDS.
    signature, id and status are excluded. amount is fixed-point with the
    currency precision, issueDate is an ISO date, a missing branch is "",
    issuedAt is a millisecond UTC timestamp.

    Args:
        record: Check record (signature may still be empty)
        issued_at: Issuance time; defaults to record.issued_at

    Returns:
        Canonical string
    """
    if issued_at is None:
        issued_at = record.issued_at

    values = {
        "checkNumber": record.check_number,
        "issuerName": record.issuer_name,
        "issuerAccount": record.issuer_account,
        "beneficiaryName": record.beneficiary_name,
        "amount": format_amount(record.amount),
        "amountInWords": record.amount_in_words,
        "issueDate": record.issue_date.isoformat(),
        "bankName": record.bank_name,
        "branchName": record.branch_name or "",
        "securityPin": record.security_pin,
        "issuedAt": format_timestamp(issued_at),
    }
    ordered = {name: values[name] for name in CANONICAL_FIELDS}
    return json.dumps(ordered, ensure_ascii=False, separators=(',', ':'))


def sign(canonical: str, secret: str) -> str:
    """Lowercase hex SHA-256 of canonical + secret"""
    data = (canonical + secret).encode('utf-8')
    return hashlib.sha256(data).hexdigest()


def sign_record(record: CheckRecord, secret: Optional[str] = None) -> str:
    """Signature for a record, using its own PIN unless another is supplied"""
    if secret is None:
        secret = record.security_pin
    return sign(canonicalize(record), secret)


def verify_signature(record: CheckRecord, secret: Optional[str] = None) -> bool:
    """Recompute the signature and compare it to the stored one"""
    expected = sign_record(record, secret)
    return hmac.compare_digest(expected.encode('utf-8'), record.signature.encode('utf-8'))
