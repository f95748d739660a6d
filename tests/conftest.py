"""
Pytest fixtures for the txdispatch SDK tests.
"""
import pytest
from eth_account import Account as EthAccount
from web3.providers.rpc import HTTPProvider

from txdispatch_sdk._rate_limited_log import reset_rate_limited_log
from txdispatch_sdk.signer import LocalSigner, RemoteAccount

from tests.test_helpers import TEST_PRIV_KEY, TEST_REMOTE_ADDRESS, create_test_dispatcher, make_node


@pytest.fixture(autouse=True)
def _reset_rate_limited_log():
    """Every test starts with an empty rate-limit cache."""
    reset_rate_limited_log()
    yield
    reset_rate_limited_log()


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    Works for all tests because it is autouse.
    """
    def _dummy(self, method, params=None):
        if method == "eth_chainId":
            return {"jsonrpc": "2.0", "id": 1, "result": "0x1"}
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


@pytest.fixture
def eth_account():
    """Deterministic eth_account account for the test key"""
    return EthAccount.from_key(TEST_PRIV_KEY)


@pytest.fixture
def local_signer():
    return LocalSigner(TEST_PRIV_KEY)


@pytest.fixture
def remote_account():
    return RemoteAccount(TEST_REMOTE_ADDRESS)


@pytest.fixture
def node():
    """Stub node on chain 1 with EIP-1559 fees"""
    return make_node()


@pytest.fixture
def dispatcher(node, local_signer):
    return create_test_dispatcher(node, account=local_signer, chain=1)
