"""Off-chain Safe message schemas."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from .common import PaginatedResponse, ServiceModel
from .enums import SignatureType


class MessageConfirmation(ServiceModel):
    """An owner's signature on a Safe message."""

    owner: str = Field(..., description="Signing owner address")
    signature: str | None = Field(default=None, description="Submitted signature")
    signature_type: SignatureType | None = Field(
        default=None, alias="signatureType", description="Signature encoding"
    )


class SafeMessage(ServiceModel):
    """A Safe off-chain message (plain text or EIP-712 typed data)."""

    message_hash: str = Field(..., alias="messageHash", description="Safe message hash")
    message: str | dict[str, Any] = Field(..., description="Message payload")
    safe: str | None = Field(default=None, description="Safe address")
    proposed_by: str | None = Field(
        default=None, alias="proposedBy", description="Proposer address"
    )
    confirmations: list[MessageConfirmation] = Field(
        default_factory=list, description="Signatures collected so far"
    )
    prepared_signature: str | None = Field(
        default=None,
        alias="preparedSignature",
        description="Combined signature once the threshold is reached",
    )

    @field_validator("confirmations", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


MessageListResponse = PaginatedResponse[SafeMessage]
