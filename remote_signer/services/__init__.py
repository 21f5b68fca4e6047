"""Signer services."""
from remote_signer.services.deny_list import (
    DEFAULT_RULES,
    DenyListChecker,
    DenyRule,
    MessageDenyRule,
    PolicyDecision,
    selector_rule,
)
from remote_signer.services.network_clients import NetworkClientSet, SafeProtocolClient
from remote_signer.services.scanner import SafeScanner
from remote_signer.services.scheduler import SafeRemoteSigner
from remote_signer.services.signer import OperatorSigner
from remote_signer.services.throttle import QueryThrottle

__all__ = [
    "DEFAULT_RULES",
    "DenyListChecker",
    "DenyRule",
    "MessageDenyRule",
    "PolicyDecision",
    "selector_rule",
    "NetworkClientSet",
    "SafeProtocolClient",
    "SafeScanner",
    "SafeRemoteSigner",
    "OperatorSigner",
    "QueryThrottle",
]
