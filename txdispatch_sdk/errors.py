"""
Error normalization for failed dispatches.

`get_transaction_error` is applied exactly once, at the dispatch boundary.
It keeps the original failure as the cause and attaches the intent, the
resolved account and the declared chain.
"""
import re
from typing import Any, List, Optional, Tuple

from .chain import ChainDescriptor
from .exceptions import (
    AccountNotFoundError,
    ChainMismatchError,
    ChainNotFoundError,
    DispatchError,
    InvalidRequestError,
    RequestPreparationError,
    RpcError,
    TransportError,
)
from .models import TransactionIntent

# Node error message patterns, checked in order
NODE_ERROR_PATTERNS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("nonce_too_high", re.compile(r"nonce too high", re.I)),
    ("nonce_too_low", re.compile(r"nonce too low|transaction already imported|already known", re.I)),
    ("nonce_max_value", re.compile(r"nonce has max value", re.I)),
    ("insufficient_funds", re.compile(r"insufficient funds", re.I)),
    ("intrinsic_gas_too_high", re.compile(r"intrinsic gas too high|gas limit reached", re.I)),
    ("intrinsic_gas_too_low", re.compile(r"intrinsic gas too low", re.I)),
    ("fee_cap_too_high", re.compile(r"max fee per gas higher than 2\^256-1|fee cap higher than 2\^256-1", re.I)),
    ("fee_cap_too_low", re.compile(r"max fee per gas less than block base fee|fee cap less than block base fee|transaction is outdated", re.I)),
    ("tip_above_fee_cap", re.compile(r"max priority fee per gas higher than max fee per gas|tip higher than fee cap", re.I)),
    ("tx_type_not_supported", re.compile(r"transaction type not valid", re.I)),
    ("execution_reverted", re.compile(r"execution reverted", re.I)),
]

_LOCAL_REASONS: List[Tuple[type, str]] = [
    (AccountNotFoundError, "account_not_found"),
    (InvalidRequestError, "invalid_request"),
    (ChainNotFoundError, "chain_not_found"),
    (ChainMismatchError, "chain_mismatch"),
    (RequestPreparationError, "request_preparation"),
]


def classify_error(err: BaseException) -> str:
    """
    Map a failure to a stable reason code.

    Local taxonomy errors map by class. Node errors are recognised by
    JSON-RPC code or message; other transport failures are `transport_error`.
    """
    for error_type, reason in _LOCAL_REASONS:
        if isinstance(err, error_type):
            return reason
    if isinstance(err, RpcError) and err.code == 3:
        return "execution_reverted"
    if isinstance(err, TransportError):
        message = str(err)
        for reason, pattern in NODE_ERROR_PATTERNS:
            if pattern.search(message):
                return reason
        return "node_error" if isinstance(err, RpcError) else "transport_error"
    return "unknown"


def format_request_details(intent: Optional[TransactionIntent], account: Any,
                           chain: Optional[ChainDescriptor]) -> str:
    """Render the request arguments block attached to dispatch errors."""
    rows: List[Tuple[str, Any]] = []
    if chain is not None:
        rows.append(("chain", chain.label))
    else:
        rows.append(("chain", "none (chain check skipped)"))
    if account is not None:
        rows.append(("from", account.address))
    if intent is not None:
        for label, name in (
            ("to", "to"),
            ("value", "value"),
            ("data", "data"),
            ("gas", "gas"),
            ("gasPrice", "gas_price"),
            ("maxFeePerGas", "max_fee_per_gas"),
            ("maxPriorityFeePerGas", "max_priority_fee_per_gas"),
            ("nonce", "nonce"),
        ):
            value = getattr(intent, name)
            if value is not None:
                rows.append((label, _short(value)))
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"  {label + ':':<{width + 1}} {value}" for label, value in rows)


def get_transaction_error(
    err: BaseException,
    intent: Optional[TransactionIntent] = None,
    account: Any = None,
    chain: Optional[ChainDescriptor] = None,
) -> DispatchError:
    """
    Wrap a failure into a DispatchError carrying the request context.

    The caller is expected to `raise get_transaction_error(...) from err`.
    """
    message = str(err) or type(err).__name__
    details = format_request_details(intent, account, chain)
    return DispatchError(
        f"{message}\n\nRequest Arguments:\n{details}",
        cause=err,
        intent=intent,
        account=account,
        chain=chain,
        reason=classify_error(err),
    )


def _short(value: Any, limit: int = 66) -> str:
    if isinstance(value, (bytes, bytearray)):
        value = "0x" + bytes(value).hex()
    text = str(value)
    return text if len(text) <= limit else f"{text[:limit]}... ({len(text)} chars)"
