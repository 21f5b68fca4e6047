"""Structured signer events.

Events are log records only; the signer keeps no event store. The fields
travel as top-level ``extra`` keys so the JSON file handlers write them out.
Metadata keys must not collide with ``LogRecord`` attributes.
"""
import enum
import logging
from typing import Any

logger = logging.getLogger("remote_signer.events")


class EventType(str, enum.Enum):
    """Signer event types."""

    # Chain lifecycle
    CHAIN_INITIALIZED = "initialized"
    PENDING_TRANSACTIONS_FETCHED = "pending_transactions_fetched"
    PENDING_MESSAGES_FETCHED = "pending_messages_fetched"
    FETCH_FAILED = "fetch_failed"

    # Per item
    PROCESSING_STARTED = "processing_started"
    ALREADY_SIGNED = "already_signed"
    DENIED = "denied"
    SIGNED_AND_SUBMITTED = "signed_and_submitted"
    PROCESSING_FAILED = "processing_failed"


def _format_metadata(metadata: dict) -> str:
    if not metadata:
        return ""
    return " " + " ".join(f"{key}={value}" for key, value in metadata.items())


def log_transaction_event(
    chain_id: int,
    safe_tx_hash: str,
    event: EventType,
    level: int = logging.INFO,
    **metadata: Any,
) -> None:
    """Log an event about one pending transaction."""
    logger.log(
        level,
        f"Transaction {event.value} chain={chain_id} safeTxHash={safe_tx_hash}"
        f"{_format_metadata(metadata)}",
        extra={
            "chainId": chain_id,
            "safeTxHash": safe_tx_hash,
            "event": event.value,
            **metadata,
        },
    )


def log_message_event(
    chain_id: int,
    message_hash: str,
    event: EventType,
    level: int = logging.INFO,
    **metadata: Any,
) -> None:
    """Log an event about one pending message."""
    logger.log(
        level,
        f"Message {event.value} chain={chain_id} messageHash={message_hash}"
        f"{_format_metadata(metadata)}",
        extra={
            "chainId": chain_id,
            "messageHash": message_hash,
            "event": event.value,
            **metadata,
        },
    )


def log_chain_event(
    chain_id: int,
    event: EventType,
    level: int = logging.INFO,
    **metadata: Any,
) -> None:
    """Log a per-chain event."""
    logger.log(
        level,
        f"Chain {event.value} chain={chain_id}{_format_metadata(metadata)}",
        extra={"chainId": chain_id, "event": event.value, **metadata},
    )


def log_security_event(event: str, level: int = logging.WARNING, **metadata: Any) -> None:
    """Log a security relevant event (e.g. a denied approval)."""
    logger.log(
        level,
        f"Security: {event}{_format_metadata(metadata)}",
        extra={"category": "security", "event": event, **metadata},
    )
