"""
Check system container and FastAPI dependency
"""

import logging
from typing import Optional

from ..config import EcheckConfig, get_config
from ..storage import KeyValueStore, create_store
from ..ledger import CheckLedger
from ..issuance import CheckIssuer
from ..verification import Verifier
from ..qr import QRCodeRenderer, QRRenderer
from ..payload import VerificationPayload, decode
from ..errors import EncodingError
from ..logging_config import log_action


logger = logging.getLogger(__name__)


class CheckSystem:
    """Electronic check system with all components initialized"""
    
    def __init__(self, config: Optional[EcheckConfig] = None,
                 store: Optional[KeyValueStore] = None,
                 renderer: Optional[QRRenderer] = None):
        self.config = config or get_config()
        
        # Initialize storage
        if store is None:
            store = create_store(self.config.storage_backend, self.config.database_path)
        self.store = store
        
        # Initialize core components
        self.ledger = CheckLedger(self.store, self.config.ledger_key)
        self.issuer = CheckIssuer(
            self.ledger,
            currency_suffix=self.config.currency_suffix,
            country=self.config.jurisdiction
        )
        self.verifier = Verifier(self.ledger, verify_signature=self.config.verify_signature)
        self.renderer = renderer or QRCodeRenderer()
    
    def decode_payload(self, text: str) -> VerificationPayload:
        """Decode scanned payload text, logging rejected payloads"""
        try:
            return decode(text)
        except EncodingError as e:
            log_action(logger, "warning", f"Rejected payload: {e}", action="decode", outcome="invalid")
            raise
    
    def close(self) -> None:
        self.store.close()


# Global check system instance, created on first use
check_system: Optional[CheckSystem] = None


def get_check_system() -> CheckSystem:
    global check_system
    if check_system is None:
        check_system = CheckSystem()
    return check_system
