"""Safe account schemas."""

from __future__ import annotations

from pydantic import Field

from .common import ServiceModel


class SafeInfo(ServiceModel):
    """Safe account metadata as tracked by the transaction service."""

    address: str = Field(..., description="Safe address")
    nonce: int = Field(..., description="Current on-chain nonce")
    threshold: int = Field(..., description="Required confirmations")
    owners: list[str] = Field(default_factory=list, description="Owner addresses")
    master_copy: str | None = Field(
        default=None, alias="masterCopy", description="Singleton address"
    )
    modules: list[str] = Field(default_factory=list, description="Enabled modules")
    fallback_handler: str | None = Field(
        default=None, alias="fallbackHandler", description="Fallback handler"
    )
    guard: str | None = Field(default=None, description="Transaction guard")
    version: str | None = Field(default=None, description="Safe contract version")
