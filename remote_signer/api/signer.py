"""Operator endpoints for the remote signer."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from remote_signer.api.deps import get_correlation_id, get_signer
from remote_signer.exceptions import SignerNotRunningError
from remote_signer.schemas.scan import ScanResult
from remote_signer.schemas.status import DenyRuleResponse, SafeInfoResult, SignerStatus
from remote_signer.services.scheduler import SafeRemoteSigner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/signer", tags=["Signer"])


@router.get("/status", response_model=SignerStatus)
async def get_status(signer: SafeRemoteSigner = Depends(get_signer)):
    """Current signer state and the last scan summary."""
    return signer.get_status()


@router.post("/scan", response_model=ScanResult)
async def trigger_scan(
    signer: SafeRemoteSigner = Depends(get_signer),
    correlation_id: str = Depends(get_correlation_id),
):
    """Run one scan immediately."""
    logger.info(f"Manual scan requested (correlation_id={correlation_id})")
    try:
        return await signer.trigger_scan()
    except SignerNotRunningError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/safes", response_model=List[SafeInfoResult])
async def get_safes(signer: SafeRemoteSigner = Depends(get_signer)):
    """Safe metadata on every enabled chain."""
    return await signer.get_safe_info_for_all_chains()


@router.get("/rules", response_model=List[DenyRuleResponse])
async def get_rules(signer: SafeRemoteSigner = Depends(get_signer)):
    return [
        DenyRuleResponse(id=rule.id, description=rule.description)
        for rule in signer.policy.rules
    ]
