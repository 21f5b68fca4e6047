"""Multisig transaction schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from .common import PaginatedResponse, ServiceModel
from .enums import Operation, SignatureType


class Confirmation(ServiceModel):
    """An owner's confirmation of a multisig transaction."""

    owner: str = Field(..., description="Confirming owner address")
    signature: str | None = Field(default=None, description="Submitted signature")
    signature_type: SignatureType | None = Field(
        default=None, alias="signatureType", description="Signature encoding"
    )
    submission_date: datetime | None = Field(
        default=None, alias="submissionDate", description="Submission timestamp"
    )


class MultisigTransaction(ServiceModel):
    """A proposed Safe transaction."""

    safe: str = Field(..., description="Safe address")
    to: str = Field(..., description="Target address")
    value: str = Field(default="0", description="Native value in wei")
    data: str | None = Field(default=None, description="Call data (hex)")
    operation: Operation = Field(default=Operation.CALL, description="Operation kind")
    nonce: int = Field(..., description="Safe nonce of the transaction")
    safe_tx_hash: str = Field(..., alias="safeTxHash", description="Safe tx hash")
    confirmations_required: int | None = Field(
        default=None,
        alias="confirmationsRequired",
        description="Confirmations needed for execution",
    )
    confirmations: list[Confirmation] = Field(
        default_factory=list, description="Confirmations collected so far"
    )
    is_executed: bool = Field(
        default=False, alias="isExecuted", description="Executed on-chain"
    )

    @field_validator("confirmations", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []

    @field_validator("value", mode="before")
    @classmethod
    def _value_as_str(cls, value):
        return "0" if value is None else str(value)


MultisigTransactionListResponse = PaginatedResponse[MultisigTransaction]
