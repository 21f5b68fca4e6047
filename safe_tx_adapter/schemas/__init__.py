"""Safe Transaction Service API schemas."""

from .common import PaginatedResponse, ServiceModel, SignatureRequest
from .enums import Operation, SignatureType
from .messages import MessageConfirmation, MessageListResponse, SafeMessage
from .safes import SafeInfo
from .transactions import (
    Confirmation,
    MultisigTransaction,
    MultisigTransactionListResponse,
)

__all__ = [
    # Enums
    "Operation",
    "SignatureType",
    # Common
    "ServiceModel",
    "PaginatedResponse",
    "SignatureRequest",
    # Safes
    "SafeInfo",
    # Transactions
    "Confirmation",
    "MultisigTransaction",
    "MultisigTransactionListResponse",
    # Messages
    "MessageConfirmation",
    "SafeMessage",
    "MessageListResponse",
]
