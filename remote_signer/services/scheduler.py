"""Signer lifecycle and periodic scan scheduling."""
import asyncio
import logging
from typing import Awaitable, List, Optional, Set

from remote_signer.config import Settings
from remote_signer.exceptions import SignerNotRunningError
from remote_signer.schemas.scan import ScanResult
from remote_signer.schemas.status import SafeInfoResult, SignerStatus
from remote_signer.services.deny_list import DenyListChecker
from remote_signer.services.network_clients import NetworkClientSet
from remote_signer.services.scanner import SafeScanner
from remote_signer.services.signer import OperatorSigner
from remote_signer.services.throttle import QueryThrottle

logger = logging.getLogger(__name__)

MIN_POLLING_INTERVAL_MS = 5000


class SafeRemoteSigner:
    """
    Background service that:
    1. Initializes clients for every enabled network once
    2. Scans on a fixed-rate schedule and on demand
    3. Reports status and per-chain Safe metadata to the operator
    """

    def __init__(
        self,
        settings: Settings,
        signer: Optional[OperatorSigner] = None,
        clients: Optional[NetworkClientSet] = None,
        policy: Optional[DenyListChecker] = None,
        throttle: Optional[QueryThrottle] = None,
    ):
        self.settings = settings
        self.signer = signer or OperatorSigner(settings.private_key)
        self.clients = clients or NetworkClientSet(settings, self.signer)
        self.policy = policy or DenyListChecker(settings.trusted_delegate_addresses)
        self.throttle = throttle or QueryThrottle(settings.api_rate_limit)
        self.scanner = SafeScanner(
            settings, self.clients, self.policy, self.throttle, self.signer.address
        )
        self.polling_interval_ms = max(settings.polling_interval, MIN_POLLING_INTERVAL_MS)
        self.last_scan: Optional[ScanResult] = None

        self._running = False
        self._lock = asyncio.Lock()
        self._ticker: Optional[asyncio.Task] = None
        self._periodic_scan: Optional[asyncio.Task] = None
        self._scans: Set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Initialize clients, start the ticker and run one scan immediately."""
        async with self._lock:
            if self._running:
                logger.warning("Remote signer is already running")
                return

            if not self.clients.initialized:
                await self.clients.initialize()

            self._running = True
            self._ticker = asyncio.create_task(self._tick_loop())
            logger.info(
                f"Remote signer started - signer: {self.signer.address}, "
                f"chains: {self.clients.chain_ids}, interval: {self.polling_interval_ms}ms"
            )

        await self._spawn(self._logged_scan("Initial"))

    async def stop(self) -> None:
        """Stop the ticker. Scans already running are awaited, not cancelled."""
        async with self._lock:
            if not self._running:
                logger.warning("Remote signer is not running")
                return

            self._running = False
            if self._ticker:
                self._ticker.cancel()
                try:
                    await self._ticker
                except asyncio.CancelledError:
                    pass
                self._ticker = None

            if self._scans:
                await asyncio.gather(*self._scans, return_exceptions=True)

            logger.info("Remote signer stopped")

    async def trigger_scan(self) -> ScanResult:
        """Run one scan now without moving the next periodic firing."""
        if not self._running:
            raise SignerNotRunningError("Remote signer is not running")
        # A cancelled caller must not abort the cycle; stop() still awaits it.
        return await asyncio.shield(self._spawn(self._scan()))

    async def close(self) -> None:
        """Stop if running and release network clients."""
        if self._running:
            await self.stop()
        await self.clients.close()

    # ==================== Scanning ====================

    def _spawn(self, coro: Awaitable) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._scans.add(task)
        task.add_done_callback(self._scans.discard)
        return task

    async def _scan(self) -> ScanResult:
        result = await self.scanner.scan_and_process()
        self.last_scan = result
        return result

    async def _logged_scan(self, label: str) -> None:
        try:
            await self._scan()
        except Exception as e:
            logger.error(f"{label} scan failed: {e}", exc_info=True)

    async def _tick_loop(self) -> None:
        """Fixed-rate ticker on the loop's monotonic clock; missed ticks are dropped."""
        loop = asyncio.get_running_loop()
        interval = self.polling_interval_ms / 1000
        next_fire = loop.time() + interval

        while True:
            await asyncio.sleep(max(0.0, next_fire - loop.time()))
            now = loop.time()
            while next_fire <= now:
                next_fire += interval

            if self._periodic_scan is not None and not self._periodic_scan.done():
                logger.debug("Previous periodic scan still running, skipping tick")
                continue

            self._periodic_scan = self._spawn(self._logged_scan("Periodic"))

    # ==================== Status ====================

    def get_status(self) -> SignerStatus:
        return SignerStatus(
            running=self._running,
            signer_address=self.signer.address if self._running else None,
            enabled_chains=self.clients.chain_ids,
            safe_address=self.settings.safe_address,
            polling_interval_ms=self.polling_interval_ms,
            api_rate_limit=self.throttle.max_concurrent,
            deny_rules=[rule.id for rule in self.policy.rules],
            last_scan=self.last_scan,
        )

    async def get_safe_info_for_all_chains(self) -> List[SafeInfoResult]:
        """Safe metadata per enabled chain; a failing chain reports its error."""
        results: List[SafeInfoResult] = []
        for chain_id in self.clients.chain_ids:
            try:
                tx_service = self.clients.tx_service(chain_id)
                info = await self.throttle.run(
                    tx_service.get_safe_info,
                    self.settings.safe_address,
                    operation_name="get_safe_info",
                    chain_id=chain_id,
                )
                results.append(SafeInfoResult(chain_id=chain_id, info=info))
            except Exception as e:
                logger.error(f"Failed to get Safe info for chain {chain_id}: {e}")
                results.append(SafeInfoResult(chain_id=chain_id, error=str(e)))
        return results
