"""Safe remote signer - automated co-signing for Safe multisig accounts."""

__version__ = "0.1.0"
