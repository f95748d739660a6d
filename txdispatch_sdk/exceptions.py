"""
Exceptions for the txdispatch SDK.

Inner pipeline stages raise one of the taxonomy errors below. The dispatch
boundary wraps whatever was raised into a single DispatchError.
"""
from typing import Any, Optional


class TxDispatchError(Exception):
    """Base exception for all txdispatch errors."""
    pass


class AccountNotFoundError(TxDispatchError):
    """Raised when no account was supplied and none is configured on the client."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Could not find an account to sign with. Pass `account` or configure a default account on the client."
        )


class InvalidRequestError(TxDispatchError):
    """Raised when a transaction intent is structurally impossible to submit."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class ChainNotFoundError(TxDispatchError):
    """Raised when a chain check is requested but no chain was declared."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "No chain was provided to the request. Pass `chain`, configure a default chain, "
               "or pass chain=None to skip the chain check."
        )


class ChainMismatchError(TxDispatchError):
    """Raised when the node reports a different chain than the one declared."""

    def __init__(self, declared_chain_id: int, actual_chain_id: int, chain_name: Optional[str] = None):
        self.declared_chain_id = declared_chain_id
        self.actual_chain_id = actual_chain_id
        self.chain_name = chain_name
        label = f"{chain_name} (id: {declared_chain_id})" if chain_name else f"id {declared_chain_id}"
        super().__init__(
            f"Chain ID mismatch: the node is on chain id {actual_chain_id} "
            f"but the request targets {label}."
        )


class RequestPreparationError(TxDispatchError):
    """Raised when merging, estimating or formatting transaction fields fails."""
    pass


class TransportError(TxDispatchError):
    """Raised when a round-trip to the node fails."""

    def __init__(self, message: str, method: Optional[str] = None):
        self.method = method
        super().__init__(message)


class RpcError(TransportError):
    """Raised when the node answers a request with a JSON-RPC error object."""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None, method: Optional[str] = None):
        self.code = code
        self.data = data
        super().__init__(message, method=method)


class DispatchError(TxDispatchError):
    """
    The single error raised by a failed dispatch.

    Attributes:
        cause: The original failure
        intent: The caller's transaction intent
        account: The resolved account, or None if resolution failed
        chain: The declared chain descriptor, or None if the check was skipped
        reason: Short machine-readable classification of the cause
    """

    def __init__(self, message: str, cause: BaseException, intent: Any = None,
                 account: Any = None, chain: Any = None, reason: str = "unknown"):
        self.cause = cause
        self.intent = intent
        self.account = account
        self.chain = chain
        self.reason = reason
        super().__init__(message)
