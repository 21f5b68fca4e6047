"""Common schemas for the Safe Transaction Service API."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ServiceModel(BaseModel):
    """Base model for service payloads.

    Fields are read by their camelCase wire names; anything the signer does
    not read is dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PaginatedResponse(ServiceModel, Generic[T]):
    """Generic paginated response."""

    count: int | None = Field(default=None, description="Total number of items")
    next: str | None = Field(default=None, description="URL for next page")
    previous: str | None = Field(default=None, description="URL for previous page")
    results: list[T] = Field(default_factory=list, description="List of items")


class SignatureRequest(BaseModel):
    """Body for confirmation and message signature submissions."""

    signature: str = Field(..., description="Hex encoded signature (0x prefixed)")
