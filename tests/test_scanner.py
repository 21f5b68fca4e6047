"""Tests for the scan cycle."""
import logging
from unittest.mock import AsyncMock, patch

import pytest

from safe_tx_adapter import (
    SafeTxServiceNetworkError,
    SafeTxServiceServerError,
    SafeTxServiceValidationError,
)
from remote_signer.chains import get_enabled_networks
from remote_signer.schemas.scan import ItemKind
from remote_signer.services.deny_list import MessageDenyRule
from remote_signer.services.scanner import SafeScanner
from remote_signer.services.throttle import QueryThrottle
from signer_fakes import (
    ADD_OWNER_DATA,
    OPERATOR_ADDRESS,
    OTHER_OWNER,
    SAFE_ADDRESS,
    FakeNetworkClientSet,
    make_message,
    make_settings,
    make_transaction,
)


@pytest.mark.asyncio
async def test_plain_transfer_is_signed_and_submitted(scanner, fake_clients, operator_signer):
    """An allowed transfer is confirmed with the operator signature."""
    tx = make_transaction(nonce=5, confirmations=[OTHER_OWNER])
    fake_clients.tx_services[1].list_pending_transactions.return_value = [tx]

    result = await scanner.scan_and_process()

    confirm = fake_clients.tx_services[1].confirm_transaction
    confirm.assert_awaited_once_with(tx.safe_tx_hash, operator_signer.sign_hash(tx.safe_tx_hash))
    assert result.transactions_processed == 1
    assert result.outcomes[0].success is True
    assert result.outcomes[0].kind == ItemKind.TRANSACTION
    assert result.finished_at is not None


@pytest.mark.asyncio
async def test_pending_transactions_fetched_from_current_nonce(scanner, fake_clients):
    service = fake_clients.tx_services[137]
    service.get_safe_info.return_value = service.get_safe_info.return_value.model_copy(
        update={"nonce": 42}
    )

    await scanner.scan_and_process()

    service.list_pending_transactions.assert_awaited_once_with(SAFE_ADDRESS, current_nonce=42)


@pytest.mark.asyncio
async def test_add_owner_is_denied(scanner, fake_clients, caplog):
    caplog.set_level(logging.WARNING)
    fake_clients.tx_services[1].list_pending_transactions.return_value = [
        make_transaction(data=ADD_OWNER_DATA)
    ]

    result = await scanner.scan_and_process()

    fake_clients.tx_services[1].confirm_transaction.assert_not_awaited()
    assert result.denied == 1
    assert result.transactions_processed == 0
    assert "SAFE_OWNERSHIP_TRANSFER" in caplog.text


@pytest.mark.asyncio
async def test_untrusted_delegate_call_is_denied(scanner, fake_clients):
    fake_clients.tx_services[137].list_pending_transactions.return_value = [
        make_transaction(operation=1)
    ]

    result = await scanner.scan_and_process()

    fake_clients.tx_services[137].confirm_transaction.assert_not_awaited()
    assert result.denied == 1


@pytest.mark.asyncio
async def test_already_signed_transaction_skipped(scanner, fake_clients):
    """Owner lookup ignores address case."""
    fake_clients.tx_services[1].list_pending_transactions.return_value = [
        make_transaction(confirmations=[OPERATOR_ADDRESS.upper().replace("0X", "0x")])
    ]

    result = await scanner.scan_and_process()

    fake_clients.tx_services[1].confirm_transaction.assert_not_awaited()
    assert result.already_signed == 1
    assert result.outcomes == []


@pytest.mark.asyncio
async def test_submission_failure_does_not_stop_cycle(scanner, fake_clients):
    first = make_transaction(nonce=5)
    second = make_transaction(nonce=6)
    service = fake_clients.tx_services[1]
    service.list_pending_transactions.return_value = [first, second]
    service.confirm_transaction.side_effect = [
        SafeTxServiceValidationError("HTTP 422", {"signature": ["invalid"]}),
        None,
    ]

    result = await scanner.scan_and_process()

    assert service.confirm_transaction.await_count == 2
    assert result.transactions_processed == 1
    assert result.failed_submissions == 1
    failed = result.outcomes[0]
    assert failed.item_hash == first.safe_tx_hash
    assert failed.success is False
    assert "HTTP 422" in failed.error
    assert failed.signature is not None


@pytest.mark.asyncio
async def test_fetch_failure_isolated_to_one_chain(scanner, fake_clients):
    fake_clients.tx_services[1].get_safe_info.side_effect = SafeTxServiceNetworkError(
        "Network error: connection refused"
    )
    fake_clients.tx_services[137].list_pending_transactions.return_value = [make_transaction()]

    result = await scanner.scan_and_process()

    fake_clients.tx_services[1].list_pending_transactions.assert_not_awaited()
    fake_clients.tx_services[1].list_messages.assert_awaited_once()
    assert result.fetch_errors == 1
    assert result.transactions_processed == 1
    assert [outcome.chain_id for outcome in result.outcomes] == [137]


@pytest.mark.asyncio
async def test_networks_processed_in_order_transactions_first(scanner, fake_clients):
    calls = []

    def record(name, chain_id, value):
        async def _side_effect(*args, **kwargs):
            calls.append((name, chain_id))
            return value

        return _side_effect

    for chain_id, service in fake_clients.tx_services.items():
        service.list_pending_transactions.side_effect = record("transactions", chain_id, [])
        service.list_messages.side_effect = record("messages", chain_id, [])

    await scanner.scan_and_process()

    assert calls == [
        ("transactions", 1),
        ("messages", 1),
        ("transactions", 137),
        ("messages", 137),
    ]


@pytest.mark.asyncio
async def test_pause_between_networks_only(fake_clients, policy, operator_signer):
    settings = make_settings(inter_chain_delay_ms=250)
    scanner = SafeScanner(settings, fake_clients, policy, QueryThrottle(), operator_signer.address)

    with patch("remote_signer.services.scanner.asyncio.sleep", new_callable=AsyncMock) as sleep:
        await scanner.scan_and_process()

    sleep.assert_awaited_once_with(0.25)


class TestMessages:
    """Pending message handling."""

    @pytest.mark.asyncio
    async def test_message_below_threshold_is_signed(self, scanner, fake_clients, operator_signer):
        message = make_message("0x" + "cd" * 32, confirmations=[OTHER_OWNER])
        fake_clients.tx_services[1].list_messages.return_value = [message]

        result = await scanner.scan_and_process()

        fake_clients.tx_services[1].add_message_signature.assert_awaited_once_with(
            message.message_hash, operator_signer.sign_hash(message.message_hash)
        )
        assert result.messages_processed == 1
        assert result.outcomes[0].kind == ItemKind.MESSAGE

    @pytest.mark.asyncio
    async def test_fully_confirmed_message_ignored(self, scanner, fake_clients):
        fake_clients.tx_services[1].list_messages.return_value = [
            make_message("0x" + "cd" * 32, confirmations=[OTHER_OWNER, "0x" + "33" * 20])
        ]

        result = await scanner.scan_and_process()

        fake_clients.tx_services[1].add_message_signature.assert_not_awaited()
        assert result.messages_processed == 0
        assert result.already_signed == 0

    @pytest.mark.asyncio
    async def test_required_confirmations_configurable(self, fake_clients, policy, operator_signer):
        settings = make_settings(message_confirmations_required=3)
        scanner = SafeScanner(settings, fake_clients, policy, QueryThrottle(), operator_signer.address)
        fake_clients.tx_services[1].list_messages.return_value = [
            make_message("0x" + "cd" * 32, confirmations=[OTHER_OWNER, "0x" + "33" * 20])
        ]

        result = await scanner.scan_and_process()

        assert result.messages_processed == 1

    @pytest.mark.asyncio
    async def test_already_signed_message_skipped(self, scanner, fake_clients):
        fake_clients.tx_services[137].list_messages.return_value = [
            make_message("0x" + "cd" * 32, confirmations=[OPERATOR_ADDRESS])
        ]

        result = await scanner.scan_and_process()

        fake_clients.tx_services[137].add_message_signature.assert_not_awaited()
        assert result.already_signed == 1

    @pytest.mark.asyncio
    async def test_message_rule_denies(self, scanner, fake_clients, policy):
        policy.add_message_rule(
            MessageDenyRule(id="NO_TYPED_DATA", description="typed data", check=lambda m: isinstance(m, dict))
        )
        fake_clients.tx_services[1].list_messages.return_value = [
            make_message("0x" + "cd" * 32, message={"primaryType": "Permit"}),
            make_message("0x" + "ef" * 32, message="hello"),
        ]

        result = await scanner.scan_and_process()

        assert result.denied == 1
        assert result.messages_processed == 1

    @pytest.mark.asyncio
    async def test_message_fetch_failure_counted(self, scanner, fake_clients):
        fake_clients.tx_services[137].list_messages.side_effect = SafeTxServiceServerError("HTTP 503")

        result = await scanner.scan_and_process()

        assert result.fetch_errors == 1


@pytest.mark.asyncio
async def test_single_network_cycle(operator_signer, policy):
    """One enabled chain: no pause, one pass."""
    settings = make_settings(enabled_chains="8453", inter_chain_delay_ms=250)
    clients = FakeNetworkClientSet(get_enabled_networks(settings), operator_signer)
    scanner = SafeScanner(settings, clients, policy, QueryThrottle(), operator_signer.address)

    with patch("remote_signer.services.scanner.asyncio.sleep", new_callable=AsyncMock) as sleep:
        result = await scanner.scan_and_process()

    sleep.assert_not_awaited()
    clients.tx_services[8453].list_messages.assert_awaited_once()
    assert result.fetch_errors == 0
