"""
Check Verification Module

Single-shot classification of a (check number, PIN) claim against the ledger.

By default the supplied PIN is compared with the stored PIN and the stored
signature is not re-checked, so tampering with other stored fields goes
unnoticed. With verify_signature enabled the signature is also recomputed
from the stored fields and the supplied PIN, and a mismatch is reported as
SIGNATURE_MISMATCH.
"""

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .checks import CheckRecord, utc_now
from .errors import ValidationError
from .ledger import CheckLedger
from .logging_config import log_action
from .signing import verify_signature as signature_matches


logger = logging.getLogger(__name__)


class VerificationOutcome(Enum):
    """Result classification of a verification attempt"""
    VALID = "valid"
    NOT_FOUND = "not_found"
    SECRET_MISMATCH = "secret_mismatch"
    SIGNATURE_MISMATCH = "signature_mismatch"  # Only in signature-checking mode


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of one verification; verified_at is never persisted"""
    outcome: VerificationOutcome
    check_number: str
    record: Optional[CheckRecord] = None
    verified_at: Optional[datetime] = None

    @property
    def is_valid(self) -> bool:
        return self.outcome == VerificationOutcome.VALID


class Verifier:
    """Verifies check claims against a ledger"""

    def __init__(self, ledger: CheckLedger, verify_signature: bool = False):
        self.ledger = ledger
        self.verify_signature = verify_signature

    def verify(self, check_number: str, supplied_secret: str) -> VerificationResult:
        """
        Classify a verification claim.

        Args:
            check_number: Claimed check number
            supplied_secret: 4-digit PIN supplied by the holder

        Returns:
            VerificationResult; the record is only attached when VALID

        Raises:
            ValidationError: If either input is blank
        """
        if not isinstance(check_number, str) or not check_number:
            raise ValidationError("check_number is required", field="check_number")
        if not isinstance(supplied_secret, str) or not supplied_secret:
            raise ValidationError("security_pin is required", field="security_pin")

        record = self.ledger.lookup(check_number)
        if record is None:
            return self._result(VerificationOutcome.NOT_FOUND, check_number)

        if not hmac.compare_digest(supplied_secret.encode('utf-8'),
                                   record.security_pin.encode('utf-8')):
            return self._result(VerificationOutcome.SECRET_MISMATCH, check_number)

        if self.verify_signature and not signature_matches(record, supplied_secret):
            return self._result(VerificationOutcome.SIGNATURE_MISMATCH, check_number)

        return self._result(VerificationOutcome.VALID, check_number, record)

    def _result(self, outcome: VerificationOutcome, check_number: str,
                record: Optional[CheckRecord] = None) -> VerificationResult:
        level = "info" if outcome == VerificationOutcome.VALID else "warning"
        log_action(
            logger, level, "Check verification",
            action="verify", check_number=check_number, outcome=outcome.value
        )
        return VerificationResult(
            outcome=outcome,
            check_number=check_number,
            record=record,
            verified_at=utc_now() if record is not None else None,
        )
