"""
Test bootstrap:
- Make tests/helpers importable
- Shared fixtures for transactions, keys and the mock network client
"""
import sys
import pathlib
import pytest

TESTS_DIR = pathlib.Path(__file__).parent

if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))


@pytest.fixture
def upgrade_tx():
    """An upgrade_package transaction without a fee payer."""
    from helpers import mk_upgrade_package_transaction
    return mk_upgrade_package_transaction()


@pytest.fixture
def ed25519_keypair():
    """Provide a deterministic Ed25519 key pair for testing."""
    from helpers import mk_ed25519_keypair
    return mk_ed25519_keypair(seed=b"test_seed_for_deterministic_key_pair")


@pytest.fixture
def mock_client():
    """Provide a recording mock network client."""
    from helpers import MockNetworkClient
    return MockNetworkClient()
