"""
Structural validation of transaction intents, run before any network call.
"""
import re
from typing import Any, Optional

from web3 import Web3

from .exceptions import InvalidRequestError
from .formatters import TRANSACTION_TYPES
from .models import TransactionIntent

MAX_UINT256 = 2 ** 256 - 1
MAX_UINT64 = 2 ** 64 - 1

_HEX_DATA = re.compile(r"^0x([0-9a-fA-F]{2})*$")

_NUMERIC_LIMITS = {
    "value": MAX_UINT256,
    "gas": MAX_UINT256,
    "gas_price": MAX_UINT256,
    "max_fee_per_gas": MAX_UINT256,
    "max_priority_fee_per_gas": MAX_UINT256,
    "nonce": MAX_UINT64,
}

SUPPORTED_TYPES = frozenset(TRANSACTION_TYPES) | frozenset(hex(t) for t in TRANSACTION_TYPES.values())


def assert_request(intent: TransactionIntent, account: Any) -> None:
    """
    Fail fast on intents that cannot possibly be submitted.

    Args:
        intent: Caller's transaction intent
        account: Resolved account the transaction is sent from

    Raises:
        InvalidRequestError: On the first structural problem found
    """
    if intent.to is None and intent.data is None:
        raise InvalidRequestError(
            "Transaction needs a recipient (`to`) or `data` for a contract creation", field="to"
        )

    if intent.to is not None and not Web3.is_address(intent.to):
        raise InvalidRequestError(f"Invalid recipient address: {intent.to}", field="to")

    if intent.from_address is not None:
        if not Web3.is_address(intent.from_address):
            raise InvalidRequestError(f"Invalid sender address: {intent.from_address}", field="from")
        if intent.from_address.lower() != account.address.lower():
            raise InvalidRequestError(
                f"`from` ({intent.from_address}) does not match the dispatching account ({account.address})",
                field="from",
            )

    if intent.gas_price is not None and (
        intent.max_fee_per_gas is not None or intent.max_priority_fee_per_gas is not None
    ):
        raise InvalidRequestError(
            "Cannot specify both `gasPrice` and `maxFeePerGas`/`maxPriorityFeePerGas`", field="gas_price"
        )

    for name, limit in _NUMERIC_LIMITS.items():
        _check_quantity(name, getattr(intent, name), limit)

    if (
        intent.max_fee_per_gas is not None
        and intent.max_priority_fee_per_gas is not None
        and intent.max_priority_fee_per_gas > intent.max_fee_per_gas
    ):
        raise InvalidRequestError(
            f"maxPriorityFeePerGas ({intent.max_priority_fee_per_gas}) cannot be higher than "
            f"maxFeePerGas ({intent.max_fee_per_gas})",
            field="max_priority_fee_per_gas",
        )

    if isinstance(intent.data, str) and not _HEX_DATA.match(intent.data):
        raise InvalidRequestError("`data` must be a 0x-prefixed, even-length hex string", field="data")

    if intent.type is not None and intent.type not in SUPPORTED_TYPES:
        raise InvalidRequestError(f"Unsupported transaction type: {intent.type}", field="type")


def _check_quantity(name: str, value: Optional[int], limit: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRequestError(f"`{name}` must be an integer", field=name)
    if value < 0:
        raise InvalidRequestError(f"`{name}` cannot be negative (got {value})", field=name)
    if value > limit:
        raise InvalidRequestError(f"`{name}` exceeds its maximum of {limit} (got {value})", field=name)
