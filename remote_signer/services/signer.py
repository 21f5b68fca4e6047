"""Operator account used to approve Safe transactions and messages."""
import logging

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount

from remote_signer.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Safe treats v > 30 as an eth_sign signature over the prefixed hash.
ETH_SIGN_V_OFFSET = 4


class OperatorSigner:
    """Signs 32-byte Safe hashes with the operator key."""

    def __init__(self, private_key: str):
        try:
            self._account: LocalAccount = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            # Never include the key in the error.
            raise ConfigurationError("Invalid operator private key") from e

    @property
    def address(self) -> str:
        """Checksummed operator address."""
        return self._account.address

    def sign_hash(self, hash_hex: str) -> str:
        """Produce a Safe eth_sign signature (r || s || v+4) for a 32-byte hash."""
        if len(bytes.fromhex(hash_hex.removeprefix("0x"))) != 32:
            raise ValueError(f"Expected a 32-byte hash, got {hash_hex}")

        signed = self._account.sign_message(encode_defunct(hexstr=hash_hex))
        v = signed.v + ETH_SIGN_V_OFFSET
        signature = (
            signed.r.to_bytes(32, "big")
            + signed.s.to_bytes(32, "big")
            + v.to_bytes(1, "big")
        )
        return "0x" + signature.hex()
