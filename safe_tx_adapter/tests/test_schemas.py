"""Tests for Pydantic schemas."""

import pytest
from pydantic import ValidationError

from safe_tx_adapter.schemas import (
    MultisigTransaction,
    MultisigTransactionListResponse,
    Operation,
    SafeInfo,
    SafeMessage,
    SignatureType,
)


class TestEnums:
    """Test enum definitions."""

    def test_operation_values(self) -> None:
        """Test Operation enum values."""
        assert Operation.CALL == 0
        assert Operation.DELEGATE_CALL == 1

    def test_signature_type_values(self) -> None:
        """Test SignatureType enum values."""
        assert SignatureType.EOA == "EOA"
        assert SignatureType.ETH_SIGN == "ETH_SIGN"


class TestMultisigTransaction:
    """Test multisig transaction parsing."""

    def test_parses_wire_names(self, transaction_payload: dict) -> None:
        """Test camelCase fields are mapped and unknown fields ignored."""
        tx = MultisigTransaction(**transaction_payload)

        assert tx.safe_tx_hash == transaction_payload["safeTxHash"]
        assert tx.confirmations_required == 2
        assert tx.operation == Operation.CALL
        assert tx.confirmations[0].signature_type == SignatureType.EOA
        assert not hasattr(tx, "trusted")

    def test_null_confirmations_become_empty(self, transaction_payload: dict) -> None:
        """Test a null confirmation list is read as empty."""
        transaction_payload["confirmations"] = None

        tx = MultisigTransaction(**transaction_payload)

        assert tx.confirmations == []

    def test_delegate_call_operation(self, transaction_payload: dict) -> None:
        """Test operation 1 maps to DELEGATE_CALL."""
        transaction_payload["operation"] = 1

        assert MultisigTransaction(**transaction_payload).operation == Operation.DELEGATE_CALL

    def test_missing_hash_rejected(self, transaction_payload: dict) -> None:
        """Test safeTxHash is required."""
        del transaction_payload["safeTxHash"]

        with pytest.raises(ValidationError):
            MultisigTransaction(**transaction_payload)

    def test_paginated_list(self, transaction_payload: dict) -> None:
        """Test paginated list response."""
        page = MultisigTransactionListResponse(
            count=1, next=None, previous=None, results=[transaction_payload]
        )

        assert page.count == 1
        assert page.results[0].nonce == 7


class TestSafeMessage:
    """Test Safe message parsing."""

    def test_plain_text_message(self, message_payload: dict) -> None:
        """Test plain text messages keep their payload."""
        message = SafeMessage(**message_payload)

        assert message.message == "Sign in to example.org"
        assert message.message_hash == message_payload["messageHash"]
        assert len(message.confirmations) == 1

    def test_typed_data_message(self, message_payload: dict) -> None:
        """Test EIP-712 payloads are kept as dictionaries."""
        message_payload["message"] = {"types": {}, "primaryType": "Mail", "message": {}}

        message = SafeMessage(**message_payload)

        assert isinstance(message.message, dict)
        assert message.message["primaryType"] == "Mail"


class TestSafeInfo:
    """Test Safe info parsing."""

    def test_string_nonce_coerced(self) -> None:
        """Test the service's string nonce is read as an int."""
        info = SafeInfo(
            address="0x5AFE5afE5afE5afE5afE5aFe5aFe5Afe5Afe5AfE",
            nonce="12",
            threshold=2,
            owners=["0x1111111111111111111111111111111111111111"],
            masterCopy="0x3333333333333333333333333333333333333333",
            version="1.4.1",
        )

        assert info.nonce == 12
        assert info.master_copy == "0x3333333333333333333333333333333333333333"
