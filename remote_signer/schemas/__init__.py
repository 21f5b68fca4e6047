"""Pydantic schemas."""
from remote_signer.schemas.action import PendingMessage, PendingTransaction, ProposedAction
from remote_signer.schemas.scan import ItemKind, ScanResult, SubmissionOutcome
from remote_signer.schemas.status import DenyRuleResponse, SafeInfoResult, SignerStatus

__all__ = [
    "ProposedAction",
    "PendingTransaction",
    "PendingMessage",
    "ItemKind",
    "SubmissionOutcome",
    "ScanResult",
    "SignerStatus",
    "SafeInfoResult",
    "DenyRuleResponse",
]
