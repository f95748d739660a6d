"""
Tests for error classification and the request-details error message.
"""
import pytest

from txdispatch_sdk.chain import MAINNET
from txdispatch_sdk.errors import classify_error, format_request_details, get_transaction_error
from txdispatch_sdk.exceptions import (
    AccountNotFoundError,
    ChainMismatchError,
    ChainNotFoundError,
    DispatchError,
    InvalidRequestError,
    RequestPreparationError,
    RpcError,
    TransportError,
)
from txdispatch_sdk.models import TransactionIntent

from tests.test_helpers import TEST_TO


@pytest.mark.parametrize("err,reason", [
    (AccountNotFoundError(), "account_not_found"),
    (InvalidRequestError("bad"), "invalid_request"),
    (ChainNotFoundError(), "chain_not_found"),
    (ChainMismatchError(1, 5), "chain_mismatch"),
    (RequestPreparationError("gap"), "request_preparation"),
    (RpcError("reverted", code=3), "execution_reverted"),
    (RpcError("nonce too high"), "nonce_too_high"),
    (RpcError("Nonce too low"), "nonce_too_low"),
    (RpcError("already known"), "nonce_too_low"),
    (RpcError("nonce has max value"), "nonce_max_value"),
    (RpcError("insufficient funds for gas * price + value"), "insufficient_funds"),
    (RpcError("intrinsic gas too low"), "intrinsic_gas_too_low"),
    (RpcError("max fee per gas less than block base fee"), "fee_cap_too_low"),
    (RpcError("tip higher than fee cap"), "tip_above_fee_cap"),
    (RpcError("transaction type not valid in this context"), "tx_type_not_supported"),
    (RpcError("something odd", code=-32000), "node_error"),
    (TransportError("connection refused"), "transport_error"),
    (RuntimeError("boom"), "unknown"),
])
def test_classify_error(err, reason):
    assert classify_error(err) == reason


def test_request_details():
    intent = TransactionIntent(to=TEST_TO, value=1, data="0x" + "ab" * 64)
    account = type("Acct", (), {"address": "0xSender"})()

    details = format_request_details(intent, account, MAINNET)

    assert "chain:" in details
    assert "Ethereum (id: 1)" in details
    assert "from:" in details and "0xSender" in details
    assert TEST_TO in details
    # Long values are shortened
    assert "(130 chars)" in details


def test_request_details_without_chain_or_account():
    details = format_request_details(None, None, None)
    assert details.strip() == "chain: none (chain check skipped)"


def test_get_transaction_error():
    cause = RpcError("insufficient funds for transfer", code=-32000)
    intent = TransactionIntent(to=TEST_TO, value=1)

    error = get_transaction_error(cause, intent, None, MAINNET)

    assert isinstance(error, DispatchError)
    assert error.cause is cause
    assert error.intent is intent
    assert error.account is None
    assert error.chain is MAINNET
    assert error.reason == "insufficient_funds"
    assert str(error).startswith("insufficient funds for transfer\n\nRequest Arguments:\n")


def test_get_transaction_error_empty_message():
    error = get_transaction_error(KeyError(), None, None, None)
    assert str(error).startswith("KeyError")
