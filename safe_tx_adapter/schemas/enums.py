"""Enumerations for the Safe Transaction Service API."""

from enum import Enum, IntEnum


class Operation(IntEnum):
    """Safe transaction operation kind."""

    CALL = 0
    DELEGATE_CALL = 1


class SignatureType(str, Enum):
    """Signature encoding reported for a confirmation."""

    CONTRACT_SIGNATURE = "CONTRACT_SIGNATURE"
    APPROVED_HASH = "APPROVED_HASH"
    EOA = "EOA"
    ETH_SIGN = "ETH_SIGN"
