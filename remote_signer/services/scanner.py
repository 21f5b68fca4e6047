"""Scan cycle: fetch pending items, apply the deny list, sign and submit."""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, List

from remote_signer.config import Settings
from remote_signer.schemas.action import PendingMessage, PendingTransaction
from remote_signer.schemas.scan import ItemKind, ScanResult, SubmissionOutcome
from remote_signer.services.deny_list import DenyListChecker
from remote_signer.services.events import (
    EventType,
    log_chain_event,
    log_message_event,
    log_security_event,
    log_transaction_event,
)
from remote_signer.services.network_clients import NetworkClientSet
from remote_signer.services.throttle import QueryThrottle

logger = logging.getLogger(__name__)


class SafeScanner:
    """Runs one scan cycle over every enabled network.

    Networks are visited one after another. Within a network, pending
    transactions are handled before pending messages. A failure on one
    network or item is logged and the cycle moves on.
    """

    def __init__(
        self,
        settings: Settings,
        clients: NetworkClientSet,
        policy: DenyListChecker,
        throttle: QueryThrottle,
        signer_address: str,
    ):
        self.settings = settings
        self.clients = clients
        self.policy = policy
        self.throttle = throttle
        self.signer_address = signer_address
        self.safe_address = settings.safe_address

    async def scan_and_process(self) -> ScanResult:
        """Process every enabled network once and summarize the cycle."""
        result = ScanResult()
        networks = self.clients.networks
        delay = self.settings.inter_chain_delay_ms / 1000

        for index, network in enumerate(networks):
            await self._process_transactions(network.chain_id, result)
            await self._process_messages(network.chain_id, result)

            if delay and index < len(networks) - 1:
                await asyncio.sleep(delay)

        result.finished_at = datetime.now(timezone.utc)
        logger.info(
            f"Scan complete: {result.transactions_processed} transactions and "
            f"{result.messages_processed} messages signed, {result.denied} denied, "
            f"{result.already_signed} already signed, {result.failed_submissions} failed, "
            f"{result.fetch_errors} fetch errors"
        )
        return result

    # ==================== Transactions ====================

    async def _fetch_pending_transactions(self, chain_id: int) -> List[PendingTransaction]:
        tx_service = self.clients.tx_service(chain_id)
        info = await self.throttle.run(
            tx_service.get_safe_info,
            self.safe_address,
            operation_name="get_safe_info",
            chain_id=chain_id,
        )
        transactions = await self.throttle.run(
            tx_service.list_pending_transactions,
            self.safe_address,
            current_nonce=info.nonce,
            operation_name="list_pending_transactions",
            chain_id=chain_id,
        )
        return [PendingTransaction.from_service(chain_id, tx) for tx in transactions]

    async def _process_transactions(self, chain_id: int, result: ScanResult) -> None:
        try:
            pending = await self._fetch_pending_transactions(chain_id)
        except Exception as e:
            result.fetch_errors += 1
            log_chain_event(
                chain_id,
                EventType.FETCH_FAILED,
                level=logging.ERROR,
                kind=ItemKind.TRANSACTION.value,
                error=str(e),
            )
            return

        log_chain_event(chain_id, EventType.PENDING_TRANSACTIONS_FETCHED, count=len(pending))

        for tx in pending:
            await self._process_transaction(tx, result)

    async def _process_transaction(self, tx: PendingTransaction, result: ScanResult) -> None:
        log_transaction_event(
            tx.chain_id,
            tx.safe_tx_hash,
            EventType.PROCESSING_STARTED,
            level=logging.DEBUG,
            nonce=tx.nonce,
            confirmations=f"{tx.confirmation_count}/{tx.confirmations_required}",
        )

        if tx.is_signed_by(self.signer_address):
            result.already_signed += 1
            log_transaction_event(tx.chain_id, tx.safe_tx_hash, EventType.ALREADY_SIGNED)
            return

        decision = self.policy.evaluate(tx.action)
        if decision.denied:
            result.denied += 1
            log_transaction_event(
                tx.chain_id,
                tx.safe_tx_hash,
                EventType.DENIED,
                level=logging.WARNING,
                reasons=decision.reasons,
            )
            log_security_event(
                "transaction_denied",
                chainId=tx.chain_id,
                safeTxHash=tx.safe_tx_hash,
                to=tx.action.to,
                operation=int(tx.action.operation),
                rules=decision.matched_rules,
            )
            return

        tx_service = self.clients.tx_service(tx.chain_id)
        outcome = await self._sign_and_submit(
            tx.chain_id,
            tx.safe_tx_hash,
            ItemKind.TRANSACTION,
            tx_service.confirm_transaction,
            "confirm_transaction",
        )
        result.outcomes.append(outcome)
        if outcome.success:
            result.transactions_processed += 1
            log_transaction_event(
                tx.chain_id,
                tx.safe_tx_hash,
                EventType.SIGNED_AND_SUBMITTED,
                nonce=tx.nonce,
            )
        else:
            log_transaction_event(
                tx.chain_id,
                tx.safe_tx_hash,
                EventType.PROCESSING_FAILED,
                level=logging.ERROR,
                error=outcome.error,
            )

    # ==================== Messages ====================

    async def _fetch_pending_messages(self, chain_id: int) -> List[PendingMessage]:
        tx_service = self.clients.tx_service(chain_id)
        messages = await self.throttle.run(
            tx_service.list_messages,
            self.safe_address,
            operation_name="list_messages",
            chain_id=chain_id,
        )
        required = self.settings.message_confirmations_required
        pending = [PendingMessage.from_service(chain_id, m, required) for m in messages]
        return [message for message in pending if message.needs_confirmations]

    async def _process_messages(self, chain_id: int, result: ScanResult) -> None:
        try:
            pending = await self._fetch_pending_messages(chain_id)
        except Exception as e:
            result.fetch_errors += 1
            log_chain_event(
                chain_id,
                EventType.FETCH_FAILED,
                level=logging.ERROR,
                kind=ItemKind.MESSAGE.value,
                error=str(e),
            )
            return

        log_chain_event(chain_id, EventType.PENDING_MESSAGES_FETCHED, count=len(pending))

        for message in pending:
            await self._process_message(message, result)

    async def _process_message(self, message: PendingMessage, result: ScanResult) -> None:
        if message.is_signed_by(self.signer_address):
            result.already_signed += 1
            log_message_event(message.chain_id, message.message_hash, EventType.ALREADY_SIGNED)
            return

        decision = self.policy.evaluate_message(message.message)
        if decision.denied:
            result.denied += 1
            log_message_event(
                message.chain_id,
                message.message_hash,
                EventType.DENIED,
                level=logging.WARNING,
                reasons=decision.reasons,
            )
            log_security_event(
                "message_denied",
                chainId=message.chain_id,
                messageHash=message.message_hash,
                rules=decision.matched_rules,
            )
            return

        tx_service = self.clients.tx_service(message.chain_id)
        outcome = await self._sign_and_submit(
            message.chain_id,
            message.message_hash,
            ItemKind.MESSAGE,
            tx_service.add_message_signature,
            "add_message_signature",
        )
        result.outcomes.append(outcome)
        if outcome.success:
            result.messages_processed += 1
            log_message_event(message.chain_id, message.message_hash, EventType.SIGNED_AND_SUBMITTED)
        else:
            log_message_event(
                message.chain_id,
                message.message_hash,
                EventType.PROCESSING_FAILED,
                level=logging.ERROR,
                error=outcome.error,
            )

    # ==================== Signing ====================

    async def _sign_and_submit(
        self,
        chain_id: int,
        item_hash: str,
        kind: ItemKind,
        submit: Callable[[str, str], Awaitable[None]],
        operation_name: str,
    ) -> SubmissionOutcome:
        """Sign the hash and submit it once. Failures become a failed outcome."""
        signature = None
        try:
            signature = await self.clients.protocol(chain_id).sign_hash(item_hash)
            await self.throttle.run(
                submit,
                item_hash,
                signature,
                operation_name=operation_name,
                chain_id=chain_id,
            )
        except Exception as e:
            return SubmissionOutcome(
                chain_id=chain_id,
                item_hash=item_hash,
                kind=kind,
                signature=signature,
                success=False,
                error=str(e),
            )

        return SubmissionOutcome(
            chain_id=chain_id,
            item_hash=item_hash,
            kind=kind,
            signature=signature,
            success=True,
        )
