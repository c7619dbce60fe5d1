"""
Check Records Module

Strongly-typed check record, the user-entered draft it is built from, and
input validation. A record is immutable once issued: there is no edit or
amend operation, and ACTIVE is the only status this system produces.
"""

from decimal import Decimal, InvalidOperation
from datetime import date, datetime, timezone
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from enum import Enum
import re

from .currency import Currency, decimal_from_string, validate_decimal_precision, format_amount
from .errors import ValidationError


SUDANESE_BANKS = (
    "بنك الخرطوم",
    "بنك فيصل الإسلامي السوداني",
    "بنك أم درمان الوطني",
    "بنك النيلين",
    "بنك السودان المركزي",
    "المصرف الصناعي السوداني",
    "بنك المزارع التجاري",
    "بنك الإدخار والتنمية الاجتماعية",
    "بنك البركة السوداني",
    "بنك التضامن الإسلامي",
    "بنك الثروة الحيوانية والتعاوني",
    "بنك الإستثمار السوداني",
    "بنك التنمية التعاوني الإسلامي",
    "بنك قطر الوطني - السودان",
    "بنك أبو ظبي الإسلامي - السودان",
)

PIN_PATTERN = re.compile(r"[0-9]{4}")


class CheckStatus(Enum):
    """Check lifecycle states"""
    ACTIVE = "active"  # Issued and verifiable


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds, the stored timestamp precision"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_timestamp(value: datetime) -> str:
    """Millisecond UTC form, e.g. 2026-10-18T09:30:00.000Z"""
    if value.tzinfo is None:
        raise ValueError("Timestamp must be timezone-aware")
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime"""
    if not isinstance(text, str) or not text:
        raise ValueError("Timestamp must be a non-empty string")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        raise ValueError("Timestamp must carry a UTC offset")
    return value.astimezone(timezone.utc)


@dataclass
class CheckDraft:
    """
    Check fields as entered by the issuer, before derivation and signing.
    amount may be given as text; amount in words is never entered.
    """
    check_number: str
    issuer_name: str
    issuer_account: str
    beneficiary_name: str
    amount: Union[Decimal, str, int]
    bank_name: str
    security_pin: str
    issue_date: date = field(default_factory=date.today)
    branch_name: Optional[str] = None


@dataclass(frozen=True)
class CheckRecord:
    """
    Issued electronic check.

    signature is a pure function of every other field except id and status,
    see signing.canonicalize.
    """
    id: str
    check_number: str
    issuer_name: str
    issuer_account: str
    beneficiary_name: str
    amount: Decimal
    amount_in_words: str
    issue_date: date
    bank_name: str
    branch_name: Optional[str]
    security_pin: str
    issued_at: datetime
    signature: str
    status: CheckStatus = CheckStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == CheckStatus.ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored JSON shape"""
        return {
            'checkNumber': self.check_number,
            'issuerName': self.issuer_name,
            'issuerAccount': self.issuer_account,
            'beneficiaryName': self.beneficiary_name,
            'amount': format_amount(self.amount),
            'amountInWords': self.amount_in_words,
            'issueDate': self.issue_date.isoformat(),
            'bankName': self.bank_name,
            'branchName': self.branch_name or "",
            'securityPin': self.security_pin,
            'timestamp': format_timestamp(self.issued_at),
            'signature': self.signature,
            'status': self.status.value,
            'id': self.id,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Stored shape without the security PIN"""
        result = self.to_dict()
        del result['securityPin']
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CheckRecord':
        """Create instance from the stored JSON shape"""
        return cls(
            id=str(data['id']),
            check_number=data['checkNumber'],
            issuer_name=data['issuerName'],
            issuer_account=data['issuerAccount'],
            beneficiary_name=data['beneficiaryName'],
            amount=Decimal(str(data['amount'])),
            amount_in_words=data.get('amountInWords', ""),
            issue_date=date.fromisoformat(data['issueDate']),
            bank_name=data['bankName'],
            branch_name=data.get('branchName') or None,
            security_pin=data['securityPin'],
            issued_at=parse_timestamp(data['timestamp']),
            signature=data['signature'],
            status=CheckStatus(data.get('status', CheckStatus.ACTIVE.value)),
        )


def _require_text(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return value


def validate_pin(pin: Optional[str]) -> str:
    """Security PIN must be exactly 4 ASCII digits"""
    _require_text(pin, "security_pin")
    if len(pin) != 4:
        raise ValidationError("Security PIN must be exactly 4 digits", field="security_pin")
    if not PIN_PATTERN.fullmatch(pin):
        raise ValidationError("Security PIN must contain digits only", field="security_pin")
    return pin


def parse_amount(value: Union[Decimal, str, int, None]) -> Decimal:
    """Parse and validate a positive check amount at currency precision"""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("amount is required", field="amount")
    if isinstance(value, bool) or isinstance(value, float):
        raise ValidationError("Amount must be a Decimal, integer or string", field="amount")
    try:
        if isinstance(value, str):
            amount = decimal_from_string(value)
        else:
            amount = Decimal(value)
    except (ValueError, InvalidOperation):
        raise ValidationError(f"Invalid amount: {value!r}", field="amount")
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}", field="amount")

    amount = validate_decimal_precision(amount, Currency.SDG)
    if amount <= 0:
        raise ValidationError("Amount must be positive", field="amount")
    return amount


def validate_draft(draft: CheckDraft) -> Decimal:
    """
    Validate a draft before signing.

    Returns:
        The parsed amount

    Raises:
        ValidationError: On the first missing or malformed field
    """
    _require_text(draft.check_number, "check_number")
    _require_text(draft.issuer_name, "issuer_name")
    _require_text(draft.issuer_account, "issuer_account")
    _require_text(draft.beneficiary_name, "beneficiary_name")
    amount = parse_amount(draft.amount)
    _require_text(draft.bank_name, "bank_name")
    if draft.bank_name not in SUDANESE_BANKS:
        raise ValidationError(f"Unknown bank: {draft.bank_name}", field="bank_name")
    validate_pin(draft.security_pin)
    if not isinstance(draft.issue_date, date) or isinstance(draft.issue_date, datetime):
        raise ValidationError("issue_date must be a calendar date", field="issue_date")
    return amount
