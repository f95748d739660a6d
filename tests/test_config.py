"""
Tests for loading client configuration from the environment.
"""
import pytest

from txdispatch_sdk.config import ClientConfig

from tests.test_helpers import TEST_PRIV_KEY, TEST_REMOTE_ADDRESS, TEST_RPC_URL


def test_from_env_full():
    env = {
        "TXDISPATCH_RPC_URL": f" {TEST_RPC_URL} ",
        "TXDISPATCH_CHAIN_ID": "11155111",
        "TXDISPATCH_PRIVATE_KEY": TEST_PRIV_KEY,
        "TXDISPATCH_ACCOUNT": TEST_REMOTE_ADDRESS,
        "TXDISPATCH_TIMEOUT": "10",
        "TXDISPATCH_RETRY_COUNT": "0",
    }

    config = ClientConfig.from_env(environ=env)

    assert config.rpc_url == TEST_RPC_URL
    assert config.chain_id == 11155111
    assert config.private_key == TEST_PRIV_KEY
    assert config.account_address == TEST_REMOTE_ADDRESS
    assert config.timeout == 10
    assert config.retry_count == 0


def test_from_env_defaults():
    config = ClientConfig.from_env(environ={"TXDISPATCH_RPC_URL": TEST_RPC_URL, "TXDISPATCH_CHAIN_ID": ""})

    assert config.chain_id is None
    assert config.private_key is None
    assert config.timeout == 30
    assert config.retry_count == 3


def test_from_env_reads_os_environ(monkeypatch):
    monkeypatch.setenv("TXDISPATCH_RPC_URL", TEST_RPC_URL)
    monkeypatch.delenv("TXDISPATCH_CHAIN_ID", raising=False)

    assert ClientConfig.from_env().rpc_url == TEST_RPC_URL


def test_from_env_custom_prefix():
    config = ClientConfig.from_env(prefix="APP_", environ={"APP_RPC_URL": TEST_RPC_URL, "APP_CHAIN_ID": "1"})
    assert config.chain_id == 1


def test_from_env_missing_rpc_url():
    with pytest.raises(ValueError, match="TXDISPATCH_RPC_URL environment variable not set"):
        ClientConfig.from_env(environ={})


def test_from_env_malformed_value():
    with pytest.raises(ValueError, match="Invalid TXDISPATCH_\\* configuration"):
        ClientConfig.from_env(environ={"TXDISPATCH_RPC_URL": TEST_RPC_URL, "TXDISPATCH_CHAIN_ID": "mainnet"})


def test_private_key_hidden_from_repr():
    config = ClientConfig(rpc_url=TEST_RPC_URL, private_key=TEST_PRIV_KEY)
    assert TEST_PRIV_KEY not in repr(config)
