"""Pending transaction and message schemas."""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from safe_tx_adapter import MultisigTransaction, Operation, SafeMessage


def _contains_address(addresses: List[str], address: str) -> bool:
    address = address.lower()
    return any(candidate.lower() == address for candidate in addresses)


class ProposedAction(BaseModel):
    """What a pending Safe transaction would do, independent of chain."""

    model_config = ConfigDict(frozen=True)

    to: str
    value: str = "0"
    data: Optional[str] = None
    operation: Operation = Operation.CALL

    @property
    def is_delegate_call(self) -> bool:
        return self.operation == Operation.DELEGATE_CALL


class PendingTransaction(BaseModel):
    """A multisig transaction awaiting confirmations on one chain."""

    chain_id: int
    safe_tx_hash: str
    action: ProposedAction
    nonce: int
    confirmations: List[str] = Field(default_factory=list)
    confirmations_required: int

    @property
    def confirmation_count(self) -> int:
        return len(self.confirmations)

    def is_signed_by(self, address: str) -> bool:
        """Whether the address already confirmed (case-insensitive)."""
        return _contains_address(self.confirmations, address)

    @classmethod
    def from_service(cls, chain_id: int, tx: MultisigTransaction) -> "PendingTransaction":
        """Map a transaction service payload to the fields the signer reads."""
        return cls(
            chain_id=chain_id,
            safe_tx_hash=tx.safe_tx_hash,
            action=ProposedAction(
                to=tx.to,
                value=tx.value,
                data=tx.data,
                operation=tx.operation,
            ),
            nonce=tx.nonce,
            confirmations=[c.owner for c in tx.confirmations],
            confirmations_required=tx.confirmations_required or 1,
        )


class PendingMessage(BaseModel):
    """An off-chain Safe message awaiting signatures on one chain."""

    chain_id: int
    message_hash: str
    message: Union[str, Dict[str, Any]]
    confirmations: List[str] = Field(default_factory=list)
    confirmations_required: int

    @property
    def confirmation_count(self) -> int:
        return len(self.confirmations)

    @property
    def needs_confirmations(self) -> bool:
        return self.confirmation_count < self.confirmations_required

    def is_signed_by(self, address: str) -> bool:
        """Whether the address already signed (case-insensitive)."""
        return _contains_address(self.confirmations, address)

    @classmethod
    def from_service(
        cls, chain_id: int, message: SafeMessage, confirmations_required: int
    ) -> "PendingMessage":
        """Map a service message; the service reports no required count for messages."""
        return cls(
            chain_id=chain_id,
            message_hash=message.message_hash,
            message=message.message,
            confirmations=[c.owner for c in message.confirmations],
            confirmations_required=confirmations_required,
        )
