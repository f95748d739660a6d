"""
txdispatch SDK - sign and submit transactions from local or remote accounts
with a guaranteed chain check.
"""
from .accounts import parse_account, resolve_account
from .chain import INHERIT, MAINNET, SEPOLIA, ChainDescriptor
from .client import DispatchClient
from .config import ClientConfig
from .dispatcher import TransactionDispatcher
from .exceptions import (
    AccountNotFoundError,
    ChainMismatchError,
    ChainNotFoundError,
    DispatchError,
    InvalidRequestError,
    RequestPreparationError,
    RpcError,
    TransportError,
    TxDispatchError,
)
from .fees import FeeEstimator, RpcFeeEstimator
from .models import DispatchMode, SignedTransaction, SigningResult, SubmissionReference, TransactionIntent
from .signer import AccountKind, LocalAccount, LocalSigner, RemoteAccount
from .stub_transport import StubTransport
from .transport import HTTPTransport, Transport, Web3Transport
from .version import __version__

__all__ = [
    "DispatchClient",
    "TransactionDispatcher",
    "ClientConfig",
    "TransactionIntent",
    "DispatchMode",
    "SignedTransaction",
    "SubmissionReference",
    "SigningResult",
    "ChainDescriptor",
    "INHERIT",
    "MAINNET",
    "SEPOLIA",
    "AccountKind",
    "LocalAccount",
    "LocalSigner",
    "RemoteAccount",
    "parse_account",
    "resolve_account",
    "FeeEstimator",
    "RpcFeeEstimator",
    "Transport",
    "HTTPTransport",
    "Web3Transport",
    "StubTransport",
    "TxDispatchError",
    "AccountNotFoundError",
    "InvalidRequestError",
    "ChainNotFoundError",
    "ChainMismatchError",
    "RequestPreparationError",
    "TransportError",
    "RpcError",
    "DispatchError",
    "__version__",
]
