"""Per-network clients: RPC, transaction service and Safe protocol signer."""
import logging
from typing import Callable, Dict, List, Optional

from web3 import Web3

from safe_tx_adapter import SafeTransactionServiceClient, SafeTxServiceSettings
from remote_signer.chains import Network, get_enabled_networks
from remote_signer.config import Settings
from remote_signer.exceptions import NetworkInitializationError, UnknownNetworkError
from remote_signer.services.events import EventType, log_chain_event
from remote_signer.services.signer import OperatorSigner

logger = logging.getLogger(__name__)

Web3Factory = Callable[[Network, Settings], Web3]


def default_web3_factory(network: Network, settings: Settings) -> Web3:
    """Read-only HTTP provider for a network RPC URL."""
    return Web3(
        Web3.HTTPProvider(
            network.rpc_url,
            request_kwargs={"timeout": settings.http_timeout_seconds},
        )
    )


class SafeProtocolClient:
    """Operator signer bound to the vault on one network."""

    def __init__(
        self,
        network: Network,
        web3: Web3,
        signer: OperatorSigner,
        safe_address: str,
    ):
        self.network = network
        self.web3 = web3
        self.signer = signer
        self.safe_address = Web3.to_checksum_address(safe_address)

    async def initialize(self) -> None:
        """Check the RPC serves the expected chain and the vault is deployed there."""
        rpc_chain_id = self.web3.eth.chain_id
        if rpc_chain_id != self.network.chain_id:
            raise NetworkInitializationError(
                self.network.chain_id,
                f"RPC for {self.network.name} reports chain {rpc_chain_id}",
            )

        code = self.web3.eth.get_code(self.safe_address)
        if not code:
            raise NetworkInitializationError(
                self.network.chain_id,
                f"No Safe contract at {self.safe_address} on {self.network.name}",
            )

    @property
    def signer_address(self) -> str:
        return self.signer.address

    async def sign_hash(self, hash_hex: str) -> str:
        """Sign a Safe transaction or message hash."""
        return self.signer.sign_hash(hash_hex)


class NetworkClientSet:
    """Clients for every enabled network, built once at startup.

    Initialization is all-or-nothing: the first network that fails aborts
    startup and closes whatever was opened.
    """

    def __init__(
        self,
        settings: Settings,
        signer: OperatorSigner,
        networks: Optional[List[Network]] = None,
        web3_factory: Optional[Web3Factory] = None,
    ):
        self.settings = settings
        self.signer = signer
        self.networks = networks if networks is not None else get_enabled_networks(settings)
        self._web3_factory = web3_factory or default_web3_factory
        self._web3: Dict[int, Web3] = {}
        self._tx_services: Dict[int, SafeTransactionServiceClient] = {}
        self._protocols: Dict[int, SafeProtocolClient] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def chain_ids(self) -> List[int]:
        return [network.chain_id for network in self.networks]

    def _tx_service_settings(self) -> SafeTxServiceSettings:
        return SafeTxServiceSettings(
            api_key=self.settings.safe_api_key,
            base_url=self.settings.safe_tx_service_url,
            timeout_seconds=self.settings.http_timeout_seconds,
        )

    async def initialize(self) -> None:
        """Build and verify clients for every enabled network."""
        if self._initialized:
            return

        tx_settings = self._tx_service_settings()
        try:
            for network in self.networks:
                await self._initialize_network(network, tx_settings)
        except Exception:
            await self.close()
            raise

        self._initialized = True
        logger.info(f"Initialized clients for chains {self.chain_ids}")

    async def _initialize_network(
        self, network: Network, tx_settings: SafeTxServiceSettings
    ) -> None:
        try:
            web3 = self._web3_factory(network, self.settings)
            tx_service = SafeTransactionServiceClient(
                network.chain_id,
                tx_settings,
                short_name=network.tx_service_short_name,
            )
            await tx_service.open()
            self._tx_services[network.chain_id] = tx_service

            protocol = SafeProtocolClient(
                network, web3, self.signer, self.settings.safe_address
            )
            await protocol.initialize()
        except NetworkInitializationError:
            raise
        except Exception as e:
            raise NetworkInitializationError(
                network.chain_id,
                f"Failed to initialize {network.name} (chain {network.chain_id})",
                str(e),
            ) from e

        self._web3[network.chain_id] = web3
        self._protocols[network.chain_id] = protocol
        log_chain_event(
            network.chain_id,
            EventType.CHAIN_INITIALIZED,
            network=network.name,
            txService=tx_service.base_url,
        )

    def _lookup(self, clients: Dict[int, object], chain_id: int):
        try:
            return clients[chain_id]
        except KeyError:
            raise UnknownNetworkError(f"No clients initialized for chain {chain_id}") from None

    def tx_service(self, chain_id: int) -> SafeTransactionServiceClient:
        return self._lookup(self._tx_services, chain_id)

    def protocol(self, chain_id: int) -> SafeProtocolClient:
        return self._lookup(self._protocols, chain_id)

    def web3(self, chain_id: int) -> Web3:
        return self._lookup(self._web3, chain_id)

    async def close(self) -> None:
        """Release HTTP clients."""
        for tx_service in self._tx_services.values():
            await tx_service.aclose()
        self._tx_services.clear()
        self._protocols.clear()
        self._web3.clear()
        self._initialized = False
