"""
Check issuance, history and verification endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, Response, status

from .system import CheckSystem, get_check_system
from .schemas import IssueCheckRequest, VerifyCheckRequest
from ..checks import format_timestamp
from ..currency import format_amount
from ..errors import ValidationError
from ..payload import encode


router = APIRouter()
stats_router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def issue_check(
    request: IssueCheckRequest,
    system: CheckSystem = Depends(get_check_system)
):
    """Issue a new signed check"""
    try:
        issued = system.issuer.issue(request.to_draft())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    return {
        "check": issued.record.to_public_dict(),
        "payload": issued.payload,
        "message": "Check issued successfully"
    }


@router.get("")
async def list_checks(system: CheckSystem = Depends(get_check_system)):
    """List issued checks, newest first"""
    records = system.ledger.all()
    records.reverse()
    return {
        "checks": [record.to_public_dict() for record in records],
        "count": len(records)
    }


@stats_router.get("/checks")
async def get_stats(system: CheckSystem = Depends(get_check_system)):
    """Ledger totals"""
    return {
        "total_checks": system.ledger.count(),
        "active_checks": system.ledger.active_count(),
        "total_amount": format_amount(system.ledger.total_amount())
    }


@router.post("/verify")
async def verify_check(
    request: VerifyCheckRequest,
    system: CheckSystem = Depends(get_check_system)
):
    """Verify a check number and security PIN"""
    try:
        result = system.verifier.verify(request.check_number, request.security_pin)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    response = {
        "check_number": result.check_number,
        "valid": result.is_valid,
        "outcome": result.outcome.value
    }
    if result.is_valid:
        response["check"] = result.record.to_public_dict()
        response["verified_at"] = format_timestamp(result.verified_at)
        response["payload"] = encode(result.record, system.config.jurisdiction)
    return response


@router.get("/{check_number}")
async def get_check(
    check_number: str,
    system: CheckSystem = Depends(get_check_system)
):
    """Get check details without the security PIN"""
    record = system.ledger.lookup(check_number)
    if not record:
        raise HTTPException(status_code=404, detail="Check not found")
    return record.to_public_dict()


@router.get("/{check_number}/qr")
async def get_check_qr(
    check_number: str,
    system: CheckSystem = Depends(get_check_system)
):
    """QR code image of the check's verification payload"""
    record = system.ledger.lookup(check_number)
    if not record:
        raise HTTPException(status_code=404, detail="Check not found")
    
    png = system.renderer.render_png(
        encode(record, system.config.jurisdiction),
        system.config.qr_size,
        system.config.qr_error_correction
    )
    return Response(content=png, media_type="image/png")
