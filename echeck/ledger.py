"""
Check Ledger Module

Append-only collection of issued checks, keyed by check number and backed
by a key-value store. Every append rewrites the whole ledger as one JSON
array under a single key; there is no incremental log.

The ledger assumes a single writer. Two processes issuing against the same
store race on the snapshot and the later write wins.
"""

import json
import logging
import threading
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Any

from .checks import CheckRecord, CheckStatus
from .errors import ValidationError
from .signing import verify_signature
from .storage import KeyValueStore


logger = logging.getLogger(__name__)

DEFAULT_LEDGER_KEY = "sudaneseElectronicChecks"


class CheckLedger:
    """
    Ordered set of issued checks with full-snapshot persistence
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_LEDGER_KEY):
        self.store = store
        self.key = key
        self._records: List[CheckRecord] = []
        self._index: Dict[str, CheckRecord] = {}
        self._lock = threading.RLock()
        self.load()

    def load(self) -> None:
        """Load the persisted snapshot; an absent key means an empty ledger"""
        with self._lock:
            raw = self.store.get(self.key)
            records: List[CheckRecord] = []
            if raw:
                data = json.loads(raw.decode('utf-8'))
                if not isinstance(data, list):
                    raise ValueError(f"Ledger snapshot under '{self.key}' is not a list")
                records = [CheckRecord.from_dict(item) for item in data]

            index: Dict[str, CheckRecord] = {}
            for record in records:
                # First match wins for snapshots written without uniqueness checks
                index.setdefault(record.check_number, record)

            self._records = records
            self._index = index
            logger.debug("Loaded %d checks from '%s'", len(records), self.key)

    def _snapshot(self, records: List[CheckRecord]) -> bytes:
        data = [record.to_dict() for record in records]
        return json.dumps(data, ensure_ascii=False, separators=(',', ':')).encode('utf-8')

    def append(self, record: CheckRecord) -> None:
        """
        Add a record and persist the full ledger.

        The record only becomes visible once the snapshot write succeeds.

        Raises:
            ValidationError: If the check number is already in the ledger
        """
        with self._lock:
            if record.check_number in self._index:
                raise ValidationError(
                    f"Check number already issued: {record.check_number}",
                    field="check_number"
                )

            updated = self._records + [record]
            self.store.set(self.key, self._snapshot(updated))

            self._records = updated
            self._index[record.check_number] = record

    def lookup(self, check_number: str) -> Optional[CheckRecord]:
        """Find a check by number"""
        with self._lock:
            return self._index.get(check_number)

    def all(self) -> List[CheckRecord]:
        """All checks in insertion order"""
        with self._lock:
            return list(self._records)

    def total_amount(self) -> Decimal:
        """Sum of amounts over all checks"""
        with self._lock:
            return sum((record.amount for record in self._records), Decimal('0'))

    def count(self, predicate: Optional[Callable[[CheckRecord], bool]] = None) -> int:
        """Count checks, optionally only those matching predicate"""
        with self._lock:
            if predicate is None:
                return len(self._records)
            return sum(1 for record in self._records if predicate(record))

    def active_count(self) -> int:
        return self.count(lambda record: record.status == CheckStatus.ACTIVE)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, check_number: object) -> bool:
        with self._lock:
            return check_number in self._index

    def integrity_report(self) -> Dict[str, Any]:
        """
        Recompute every stored signature

        Returns:
            Dictionary with integrity check results
        """
        result = {
            'valid': True,
            'total_checks': 0,
            'signature_errors': [],
        }

        records = self.all()
        result['total_checks'] = len(records)

        for position, record in enumerate(records):
            if not verify_signature(record):
                result['valid'] = False
                result['signature_errors'].append({
                    'check_number': record.check_number,
                    'position': position,
                    'id': record.id,
                })

        if not result['valid']:
            logger.warning(
                "Ledger integrity check failed for %d checks",
                len(result['signature_errors'])
            )
        return result
