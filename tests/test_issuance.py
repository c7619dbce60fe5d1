"""
End-to-end tests for check issuance and verification

Issue -> store -> encode, then verify against the same ledger.
"""

import json
import pytest
import tempfile
from decimal import Decimal
from pathlib import Path

from echeck.errors import ValidationError
from echeck.issuance import CheckIssuer
from echeck.ledger import CheckLedger
from echeck.payload import decode
from echeck.signing import canonicalize, sign, verify_signature
from echeck.storage import SQLiteKeyValueStore
from echeck.verification import Verifier, VerificationOutcome

from conftest import ISSUED_AT, make_draft


class TestIssue:
    """Issuance pipeline"""

    def test_issue_derives_fields(self, issuer):
        record = issuer.issue(make_draft(amount="1500", security_pin="1234")).record

        assert record.amount == Decimal("1500.00")
        assert record.amount_in_words == "ألف وخمسمائة جنيه سوداني"
        assert record.is_active
        assert record.id
        assert record.issued_at.tzinfo is not None
        assert verify_signature(record)

    def test_signature_matches_manual_computation(self, issuer):
        record = issuer.issue(make_draft(), issued_at=ISSUED_AT).record
        assert record.issued_at == ISSUED_AT
        assert record.signature == sign(canonicalize(record, ISSUED_AT), "1234")

    def test_payload_matches_record(self, issuer):
        issued = issuer.issue(make_draft())
        assert decode(issued.payload).matches(issued.record)

    def test_ids_are_distinct(self, issuer):
        a = issuer.issue(make_draft(check_number="1")).record
        b = issuer.issue(make_draft(check_number="2")).record
        assert a.id != b.id

    def test_same_inputs_same_signature(self, store):
        a = CheckIssuer(CheckLedger(store, key="a")).issue(make_draft(), issued_at=ISSUED_AT)
        b = CheckIssuer(CheckLedger(store, key="b")).issue(make_draft(), issued_at=ISSUED_AT)
        assert a.record.signature == b.record.signature
        assert a.record.id != b.record.id
        assert a.payload == b.payload

    def test_amount_change_changes_signature(self, store):
        a = CheckIssuer(CheckLedger(store, key="a")).issue(
            make_draft(amount="100"), issued_at=ISSUED_AT)
        b = CheckIssuer(CheckLedger(store, key="b")).issue(
            make_draft(amount="100.01"), issued_at=ISSUED_AT)
        assert a.record.signature != b.record.signature

    def test_empty_branch_stored_as_none(self, issuer):
        record = issuer.issue(make_draft(branch_name="")).record
        assert record.branch_name is None

    def test_custom_currency_suffix(self, ledger):
        record = CheckIssuer(ledger, currency_suffix="SDG").issue(make_draft(amount="200")).record
        assert record.amount_in_words == "مائتان SDG"

    def test_naive_issued_at_rejected(self, issuer):
        from datetime import datetime
        with pytest.raises(ValueError):
            issuer.issue(make_draft(), issued_at=datetime(2026, 1, 1))


class TestIssueValidation:
    """Rejected drafts leave nothing behind"""

    def test_invalid_pin_creates_nothing(self, ledger, issuer, store):
        with pytest.raises(ValidationError):
            issuer.issue(make_draft(security_pin="12a4"))
        assert ledger.count() == 0
        assert store.keys() == []

    @pytest.mark.parametrize("amount", ["1e3", "5O0", "12abc34", "1,5"])
    def test_malformed_amount_creates_nothing(self, ledger, issuer, store, amount):
        with pytest.raises(ValidationError) as exc_info:
            issuer.issue(make_draft(amount=amount))
        assert exc_info.value.field == "amount"
        assert ledger.count() == 0
        assert store.keys() == []

    def test_duplicate_number_rejected_before_signing(self, ledger, issuer):
        issuer.issue(make_draft(check_number="77"))
        with pytest.raises(ValidationError) as exc_info:
            issuer.issue(make_draft(check_number="77", amount="5"))
        assert exc_info.value.field == "check_number"
        assert ledger.count() == 1


class TestEndToEnd:
    """The full issue and verify scenario"""

    def test_issue_then_verify(self, ledger, issuer):
        issued = issuer.issue(make_draft(check_number="CHK-1", amount="1500", security_pin="1234"))
        assert issued.record.amount_in_words.startswith("ألف وخمسمائة")

        verifier = Verifier(ledger)
        valid = verifier.verify("CHK-1", "1234")
        assert valid.outcome == VerificationOutcome.VALID
        assert valid.record == issued.record

        wrong = verifier.verify("CHK-1", "0000")
        assert wrong.outcome == VerificationOutcome.SECRET_MISMATCH

        missing = verifier.verify("CHK-2", "1234")
        assert missing.outcome == VerificationOutcome.NOT_FOUND

    def test_survives_restart_with_sqlite(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            db_path = Path(temp_dir) / "checks.db"

            store = SQLiteKeyValueStore(db_path)
            issued = CheckIssuer(CheckLedger(store)).issue(make_draft())
            store.close()

            store = SQLiteKeyValueStore(db_path)
            ledger = CheckLedger(store)
            result = Verifier(ledger, verify_signature=True).verify("100001", "1234")
            assert result.outcome == VerificationOutcome.VALID
            assert result.record == issued.record
            assert ledger.integrity_report()["valid"]
            store.close()
