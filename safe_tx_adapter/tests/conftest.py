"""Pytest configuration and fixtures."""

import pytest

SAFE_ADDRESS = "0x5afe5afe5afe5afe5afe5afe5afe5afe5afe5afe"
OWNER_ADDRESS = "0x1111111111111111111111111111111111111111"
SAFE_TX_HASH = "0x" + "ab" * 32


@pytest.fixture
def api_key() -> str:
    """Test API key."""
    return "test-safe-api-key"


@pytest.fixture
def mock_settings(api_key: str):
    """Create test settings."""
    from safe_tx_adapter.config import SafeTxServiceSettings

    return SafeTxServiceSettings(
        api_key=api_key,
        base_url="https://api.test.safe.global/tx-service",
        retry_attempts=1,  # Disable retries for faster tests
    )


@pytest.fixture
def transaction_payload() -> dict:
    """A pending multisig transaction as returned by the service."""
    return {
        "safe": "0x5AFE5afE5afE5afE5afE5aFe5aFe5Afe5Afe5AfE",
        "to": "0x2222222222222222222222222222222222222222",
        "value": "1000000000000000000",
        "data": None,
        "operation": 0,
        "nonce": 7,
        "safeTxHash": SAFE_TX_HASH,
        "confirmationsRequired": 2,
        "confirmations": [
            {
                "owner": OWNER_ADDRESS,
                "signature": "0x" + "00" * 65,
                "signatureType": "EOA",
                "submissionDate": "2024-05-01T10:00:00Z",
            }
        ],
        "isExecuted": False,
        "trusted": True,
        "proposer": OWNER_ADDRESS,
    }


@pytest.fixture
def message_payload() -> dict:
    """A Safe message as returned by the service."""
    return {
        "created": "2024-05-01T10:00:00Z",
        "messageHash": "0x" + "cd" * 32,
        "message": "Sign in to example.org",
        "proposedBy": OWNER_ADDRESS,
        "safeAppId": None,
        "confirmations": [
            {"owner": OWNER_ADDRESS, "signature": "0x" + "11" * 65, "signatureType": "EOA"}
        ],
        "preparedSignature": None,
    }
