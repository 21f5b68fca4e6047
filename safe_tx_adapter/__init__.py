"""Safe Transaction Service adapter - async client for the Safe Transaction Service API."""

from .auth import SafeApiKeyAuth
from .client import SafeTransactionServiceClient
from .config import DEFAULT_BASE_URL, TX_SERVICE_SHORT_NAMES, SafeTxServiceSettings
from .exceptions import (
    SafeTxServiceAuthError,
    SafeTxServiceError,
    SafeTxServiceHTTPError,
    SafeTxServiceNetworkError,
    SafeTxServiceNotFoundError,
    SafeTxServiceRateLimitError,
    SafeTxServiceServerError,
    SafeTxServiceValidationError,
    UnsupportedChainError,
    error_for_status,
)
from .helpers import collect_all_pages
from .schemas import (
    Confirmation,
    MessageConfirmation,
    MessageListResponse,
    MultisigTransaction,
    MultisigTransactionListResponse,
    Operation,
    PaginatedResponse,
    SafeInfo,
    SafeMessage,
    SignatureRequest,
    SignatureType,
)

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "SafeTransactionServiceClient",
    "SafeApiKeyAuth",
    "SafeTxServiceSettings",
    "DEFAULT_BASE_URL",
    "TX_SERVICE_SHORT_NAMES",
    # Exceptions
    "SafeTxServiceError",
    "SafeTxServiceHTTPError",
    "SafeTxServiceAuthError",
    "SafeTxServiceNotFoundError",
    "SafeTxServiceValidationError",
    "SafeTxServiceRateLimitError",
    "SafeTxServiceServerError",
    "SafeTxServiceNetworkError",
    "UnsupportedChainError",
    "error_for_status",
    # Helpers
    "collect_all_pages",
    # Enums
    "Operation",
    "SignatureType",
    # Schemas
    "PaginatedResponse",
    "SignatureRequest",
    "SafeInfo",
    "Confirmation",
    "MultisigTransaction",
    "MultisigTransactionListResponse",
    "MessageConfirmation",
    "SafeMessage",
    "MessageListResponse",
]
