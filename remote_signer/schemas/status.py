"""Operator-facing status schemas."""
from typing import List, Optional

from pydantic import BaseModel

from safe_tx_adapter import SafeInfo
from remote_signer.schemas.scan import ScanResult


class SignerStatus(BaseModel):
    running: bool
    signer_address: Optional[str] = None
    enabled_chains: List[int]
    safe_address: str
    polling_interval_ms: int
    api_rate_limit: int
    deny_rules: List[str]
    last_scan: Optional[ScanResult] = None


class SafeInfoResult(BaseModel):
    """Safe metadata for one chain, or the error that prevented fetching it."""

    chain_id: int
    info: Optional[SafeInfo] = None
    error: Optional[str] = None


class DenyRuleResponse(BaseModel):
    id: str
    description: str
