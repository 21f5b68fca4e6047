"""Supported chains and enabled-network resolution."""
from dataclasses import dataclass
from typing import Dict, List, Tuple

from remote_signer.config import Settings
from remote_signer.exceptions import ConfigurationError


@dataclass(frozen=True)
class Network:
    """An EVM network the vault is watched on."""

    chain_id: int
    name: str
    rpc_url: str
    tx_service_short_name: str


# chain id -> (display name, tx service short name, settings field holding the RPC URL)
SUPPORTED_CHAINS: Dict[int, Tuple[str, str, str]] = {
    1: ("Ethereum", "eth", "ethereum_rpc_url"),
    10: ("Optimism", "oeth", "optimism_rpc_url"),
    100: ("Gnosis", "gno", "gnosis_rpc_url"),
    137: ("Polygon", "pol", "polygon_rpc_url"),
    146: ("Sonic", "sonic", "sonic_rpc_url"),
    8453: ("Base", "base", "base_rpc_url"),
    42161: ("Arbitrum One", "arb1", "arbitrum_rpc_url"),
}


def get_chain_config(chain_id: int, settings: Settings) -> Network:
    """Build the network description for a supported chain."""
    entry = SUPPORTED_CHAINS.get(chain_id)
    if entry is None:
        raise ConfigurationError(f"Unsupported chain ID: {chain_id}")
    name, short_name, rpc_field = entry
    return Network(
        chain_id=chain_id,
        name=name,
        rpc_url=getattr(settings, rpc_field),
        tx_service_short_name=short_name,
    )


def validate_enabled_chains(settings: Settings) -> None:
    """Reject unsupported chain ids and an empty chain set."""
    chain_ids = settings.enabled_chain_ids
    unsupported = [chain_id for chain_id in chain_ids if chain_id not in SUPPORTED_CHAINS]

    if unsupported:
        raise ConfigurationError(
            f"Unsupported chain IDs: {', '.join(str(c) for c in unsupported)}"
        )

    if not chain_ids:
        raise ConfigurationError("No enabled chains configured")


def get_enabled_networks(settings: Settings) -> List[Network]:
    """Configured chains, in configured order, duplicates dropped."""
    validate_enabled_chains(settings)

    networks: List[Network] = []
    seen = set()
    for chain_id in settings.enabled_chain_ids:
        if chain_id in seen:
            continue
        seen.add(chain_id)
        networks.append(get_chain_config(chain_id, settings))
    return networks
