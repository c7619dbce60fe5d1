"""
Check Issuance Module

Turns a validated draft into a signed, stored check and its QR payload:
amount in words -> canonical string -> signature -> ledger -> payload.
"""

import dataclasses
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .checks import (
    CheckDraft, CheckRecord, CheckStatus,
    format_timestamp, parse_timestamp, utc_now, validate_draft
)
from .currency import Currency
from .errors import ValidationError
from .ledger import CheckLedger
from .logging_config import log_action
from .numerals import amount_in_words
from .payload import DEFAULT_COUNTRY, encode
from .signing import canonicalize, sign


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedCheck:
    """A stored check together with its QR payload text"""
    record: CheckRecord
    payload: str


class CheckIssuer:
    """Issues checks into a ledger"""

    def __init__(self, ledger: CheckLedger,
                 currency_suffix: str = Currency.SDG.formal_name,
                 country: str = DEFAULT_COUNTRY):
        self.ledger = ledger
        self.currency_suffix = currency_suffix
        self.country = country

    def issue(self, draft: CheckDraft, issued_at: Optional[datetime] = None) -> IssuedCheck:
        """
        Validate, sign, store and encode a new check.

        Args:
            draft: Issuer-entered fields
            issued_at: Issuance time override; defaults to now

        Returns:
            IssuedCheck with the stored record and its payload

        Raises:
            ValidationError: If the draft is invalid or the number is taken
        """
        amount = validate_draft(draft)
        if draft.check_number in self.ledger:
            raise ValidationError(
                f"Check number already issued: {draft.check_number}",
                field="check_number"
            )

        if issued_at is None:
            issued_at = utc_now()
        else:
            issued_at = parse_timestamp(format_timestamp(issued_at))

        unsigned = CheckRecord(
            id=str(uuid.uuid4()),
            check_number=draft.check_number,
            issuer_name=draft.issuer_name,
            issuer_account=draft.issuer_account,
            beneficiary_name=draft.beneficiary_name,
            amount=amount,
            amount_in_words=amount_in_words(amount, self.currency_suffix),
            issue_date=draft.issue_date,
            bank_name=draft.bank_name,
            branch_name=draft.branch_name or None,
            security_pin=draft.security_pin,
            issued_at=issued_at,
            signature="",
            status=CheckStatus.ACTIVE,
        )
        signature = sign(canonicalize(unsigned, issued_at), draft.security_pin)
        record = dataclasses.replace(unsigned, signature=signature)

        self.ledger.append(record)

        log_action(
            logger, "info", "Check issued",
            action="issue", check_number=record.check_number,
            extra={'amount': str(record.amount), 'bank': record.bank_name}
        )
        return IssuedCheck(record=record, payload=encode(record, self.country))
