"""
Pydantic schemas for API requests
"""

from datetime import date
from typing import Optional, Union
from pydantic import BaseModel, Field, StrictInt, StrictStr

from ..checks import CheckDraft


class IssueCheckRequest(BaseModel):
    check_number: str
    issuer_name: str
    issuer_account: str
    beneficiary_name: str
    amount: Union[StrictStr, StrictInt] = Field(..., description="Decimal amount as string, or whole number")
    bank_name: str = Field(..., description="One of the banks listed at /banks")
    branch_name: Optional[str] = None
    issue_date: Optional[date] = Field(None, description="Defaults to today")
    security_pin: str = Field(..., description="Exactly 4 digits")
    
    def to_draft(self) -> CheckDraft:
        draft = CheckDraft(
            check_number=self.check_number,
            issuer_name=self.issuer_name,
            issuer_account=self.issuer_account,
            beneficiary_name=self.beneficiary_name,
            amount=self.amount,
            bank_name=self.bank_name,
            security_pin=self.security_pin,
            branch_name=self.branch_name,
        )
        if self.issue_date is not None:
            draft.issue_date = self.issue_date
        return draft


class VerifyCheckRequest(BaseModel):
    check_number: str
    security_pin: str


class DecodePayloadRequest(BaseModel):
    payload: str = Field(..., description="Text read from a check QR code")
