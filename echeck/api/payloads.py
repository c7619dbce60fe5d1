"""
Scanned payload endpoints
"""

from fastapi import APIRouter, HTTPException, Depends

from .system import CheckSystem, get_check_system
from .schemas import DecodePayloadRequest
from ..checks import format_timestamp
from ..errors import EncodingError


router = APIRouter()


@router.post("/decode")
async def decode_payload(
    request: DecodePayloadRequest,
    system: CheckSystem = Depends(get_check_system)
):
    """Parse a scanned payload and report whether it matches a stored check"""
    try:
        payload = system.decode_payload(request.payload)
    except EncodingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    
    record = system.ledger.lookup(payload.check_number)
    return {
        "check_number": payload.check_number,
        "signature": payload.signature,
        "issued_at": format_timestamp(payload.issued_at),
        "country": payload.country,
        "known": record is not None,
        "matches_record": record is not None and payload.matches(record)
    }
