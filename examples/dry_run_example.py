#!/usr/bin/env python3
"""
Dry run: dispatch against an in-memory node.

Shows both account kinds and what a chain mismatch looks like without
touching a real network.
"""
import logging

from txdispatch_sdk import (
    DispatchClient,
    DispatchError,
    LocalSigner,
    RemoteAccount,
    SEPOLIA,
    StubTransport,
)

logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("dry-run-example")

# Well-known development key; never use it for real funds
DEV_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
RECIPIENT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


def make_node(chain_id: int) -> StubTransport:
    return StubTransport({
        "eth_chainId": hex(chain_id),
        "eth_getTransactionCount": lambda address, tag: "0x0",
        "eth_getBlockByNumber": lambda tag, full: {"baseFeePerGas": hex(10**9)},
        "eth_estimateGas": lambda request: hex(21000),
        "eth_sendRawTransaction": lambda raw: "0x" + "ab" * 32,
        "eth_sendTransaction": lambda request: "0x" + "cd" * 32,
    })


def main():
    node = make_node(SEPOLIA.id)
    client = DispatchClient(transport=node, account=LocalSigner(DEV_KEY), chain=SEPOLIA)

    signed = client.sign_transaction(to=RECIPIENT, value=10**15)
    logger.info(f"Locally signed: {signed.raw_transaction[:20]}... (chain {signed.chain_id})")

    ref = client.send_transaction(to=RECIPIENT, value=10**15, account=RemoteAccount(RECIPIENT))
    logger.info(f"Remote signer submitted: {ref.transaction_hash}")
    logger.info(f"Node calls: {node.methods}")

    wrong_node = make_node(1)
    wrong_client = DispatchClient(transport=wrong_node, account=LocalSigner(DEV_KEY), chain=SEPOLIA)
    try:
        wrong_client.send_transaction(to=RECIPIENT, value=1)
    except DispatchError as e:
        logger.error(f"Refused ({e.reason}):\n{e}")


if __name__ == "__main__":
    main()
