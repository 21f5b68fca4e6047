"""Scan cycle result schemas."""
import enum
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


class ItemKind(str, enum.Enum):
    TRANSACTION = "transaction"
    MESSAGE = "message"


class SubmissionOutcome(BaseModel):
    """Result of one attempted approval submission."""

    chain_id: int
    item_hash: str
    kind: ItemKind
    signature: Optional[str] = None
    success: bool
    error: Optional[str] = None


class ScanResult(BaseModel):
    """Summary of one scan cycle across all enabled chains."""

    transactions_processed: int = 0
    messages_processed: int = 0
    already_signed: int = 0
    denied: int = 0
    fetch_errors: int = 0
    outcomes: List[SubmissionOutcome] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None

    @property
    def failed_submissions(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.success)
