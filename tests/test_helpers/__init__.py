"""
Shared constants and factories for the txdispatch SDK tests.
"""
from typing import Any, Dict, Optional

from txdispatch_sdk.dispatcher import TransactionDispatcher
from txdispatch_sdk.signer import LocalSigner
from txdispatch_sdk.stub_transport import StubTransport

# Test constants used throughout tests
TEST_RPC_URL = "https://rpc.example.com"
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_TO = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
TEST_REMOTE_ADDRESS = "0xA0Cf798816D4b9b9866b5330EEa46a18382f251e"
TEST_TX_HASH = "0x" + "ab" * 32
TEST_REMOTE_RAW = "0x02f86b0180843b9aca00"

BASE_FEE = 1_000_000_000       # 1 gwei
NODE_GAS_PRICE = 2_000_000_000  # 2 gwei
NODE_NONCE = 5
ESTIMATED_GAS = 21000


def node_responses(chain_id: int = 1, base_fee: Optional[int] = BASE_FEE) -> Dict[str, Any]:
    """Canned JSON-RPC results of a healthy node."""
    block: Dict[str, Any] = {"number": "0x10"}
    if base_fee is not None:
        block["baseFeePerGas"] = hex(base_fee)
    return {
        "eth_chainId": hex(chain_id),
        "eth_getTransactionCount": lambda address, tag: hex(NODE_NONCE),
        "eth_getBlockByNumber": lambda tag, full: block,
        "eth_gasPrice": hex(NODE_GAS_PRICE),
        "eth_estimateGas": lambda request: hex(ESTIMATED_GAS),
        "eth_sendRawTransaction": lambda raw: TEST_TX_HASH,
        "eth_sendTransaction": lambda request: TEST_TX_HASH,
        "eth_signTransaction": lambda request: TEST_REMOTE_RAW,
    }


def make_node(chain_id: int = 1, base_fee: Optional[int] = BASE_FEE, **overrides: Any) -> StubTransport:
    responses = node_responses(chain_id=chain_id, base_fee=base_fee)
    responses.update(overrides)
    return StubTransport(responses)


def create_test_dispatcher(
    transport: Optional[StubTransport] = None,
    account: Any = None,
    chain: Any = 1,
    **kwargs: Any
) -> TransactionDispatcher:
    """Create a dispatcher wired to a stub node with consistent defaults."""
    return TransactionDispatcher(
        transport if transport is not None else make_node(),
        account=account if account is not None else LocalSigner(TEST_PRIV_KEY),
        chain=chain,
        **kwargs
    )
