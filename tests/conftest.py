"""
Shared fixtures for the electronic check test suite
"""

import pytest
from datetime import date, datetime, timezone

from echeck.checks import CheckDraft, SUDANESE_BANKS
from echeck.storage import InMemoryKeyValueStore
from echeck.ledger import CheckLedger
from echeck.issuance import CheckIssuer


ISSUED_AT = datetime(2026, 10, 18, 9, 30, 0, 123000, tzinfo=timezone.utc)


def make_draft(**overrides) -> CheckDraft:
    fields = dict(
        check_number="100001",
        issuer_name="خولة عبدالله الطيب",
        issuer_account="0012345678",
        beneficiary_name="رنا صلاح محمد علي",
        amount="1500",
        bank_name=SUDANESE_BANKS[0],
        security_pin="1234",
        issue_date=date(2026, 10, 18),
        branch_name="الخرطوم شرق",
    )
    fields.update(overrides)
    return CheckDraft(**fields)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def ledger(store):
    return CheckLedger(store)


@pytest.fixture
def issuer(ledger):
    return CheckIssuer(ledger)
