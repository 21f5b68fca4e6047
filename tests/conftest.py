"""Pytest configuration and fixtures."""
import pytest

from remote_signer.chains import get_enabled_networks
from remote_signer.config import Settings
from remote_signer.services.deny_list import DenyListChecker
from remote_signer.services.scanner import SafeScanner
from remote_signer.services.signer import OperatorSigner
from remote_signer.services.throttle import QueryThrottle
from signer_fakes import OPERATOR_KEY, FakeNetworkClientSet, make_settings


@pytest.fixture
def settings() -> Settings:
    """Test settings for chains 1 and 137."""
    return make_settings()


@pytest.fixture
def operator_signer() -> OperatorSigner:
    return OperatorSigner(OPERATOR_KEY)


@pytest.fixture
def fake_clients(settings: Settings, operator_signer: OperatorSigner) -> FakeNetworkClientSet:
    return FakeNetworkClientSet(get_enabled_networks(settings), operator_signer)


@pytest.fixture
def policy() -> DenyListChecker:
    return DenyListChecker()


@pytest.fixture
def scanner(settings, fake_clients, policy, operator_signer) -> SafeScanner:
    return SafeScanner(
        settings,
        fake_clients,
        policy,
        QueryThrottle(settings.api_rate_limit),
        operator_signer.address,
    )
