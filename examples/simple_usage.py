#!/usr/bin/env python3
"""
Simple example of using the txdispatch SDK.
"""
import logging

from txdispatch_sdk import ClientConfig, DispatchClient, DispatchError

logging.basicConfig(level=logging.INFO)


def main():
    """
    Demonstrate basic usage of the DispatchClient.

    This example shows how to:
    1. Load the client configuration from TXDISPATCH_* environment variables
    2. Sign a transfer without submitting it
    3. Sign and submit the same transfer
    """
    try:
        config = ClientConfig.from_env()
    except ValueError as e:
        print(f"ERROR: {e}")
        return

    if config.chain_id is None:
        print("ERROR: TXDISPATCH_CHAIN_ID environment variable is required")
        return

    recipient = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

    with DispatchClient.from_config(config) as client:
        print(f"Dispatching from {client.address} on chain {config.chain_id}")

        try:
            signed = client.sign_transaction(to=recipient, value=10**15)
            print(f"Signed transaction: {signed.raw_transaction}")

            ref = client.send_transaction(to=recipient, value=10**15)
            print(f"Transaction hash: {ref.transaction_hash}")
        except DispatchError as e:
            print(f"Dispatch failed ({e.reason}): {e}")


if __name__ == "__main__":
    main()
