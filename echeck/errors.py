"""
Error types raised by the check issuance and verification core.

All of them subclass ValueError so callers that only care about bad input
can catch one type.
"""

from typing import Optional


class ValidationError(ValueError):
    """User input rejected before any signature is computed"""
    
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class EncodingError(ValueError):
    """Verification payload could not be parsed"""
    pass
