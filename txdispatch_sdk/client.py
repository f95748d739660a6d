"""
DispatchClient - Main client for signing and sending transactions.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Union

from .accounts import parse_account
from .chain import INHERIT, ChainDescriptor
from .config import ClientConfig
from .dispatcher import TransactionDispatcher
from .fees import FeeEstimator
from .formatters import hex_to_number
from .models import (
    DispatchMode,
    SignedTransaction,
    SigningResult,
    SubmissionReference,
    TransactionIntent,
    field_name,
)
from .signer import LocalSigner
from .transport import HTTPTransport, Transport


class DispatchClient:
    """
    Client for signing and submitting transactions.

    The client carries the long-lived configuration (transport, default
    account, default chain). Each call builds its own dispatch; nothing is
    cached between calls.

    Example:
        client = DispatchClient(
            rpc_url="https://rpc.sepolia.org",
            account=LocalSigner(priv_key),
            chain=SEPOLIA,
        )
        ref = client.send_transaction(to="0x...", value=10**15)
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        rpc_url: Optional[str] = None,
        account: Optional[Any] = None,
        chain: Union[ChainDescriptor, int, None] = None,
        estimator: Optional[FeeEstimator] = None,
        timeout: int = 30,
        retry_count: int = 3,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the DispatchClient

        Args:
            transport: Transport to use (optional if rpc_url provided)
            rpc_url: Node URL for a default HTTPTransport (optional if transport provided)
            account: Default account (LocalAccount, RemoteAccount, eth_account account or address)
            chain: Default declared chain or chain id
            estimator: Fee/nonce estimator for local signing
            timeout: Timeout for HTTP requests in seconds
            retry_count: Number of connection retries for HTTP requests
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If neither transport nor rpc_url is provided
            ValueError: If rpc_url doesn't use https (unless it's localhost/127.0.0.1)
        """
        if transport is None:
            if not rpc_url:
                raise ValueError("Either transport or rpc_url must be provided")
            transport = HTTPTransport(rpc_url, timeout=timeout, retry_count=retry_count)

        self.rpc_url = rpc_url
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)
        self.dispatcher = TransactionDispatcher(
            transport,
            account=account,
            chain=chain,
            estimator=estimator,
            logger=self.logger,
        )

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "DispatchClient":
        """
        Build a client from a ClientConfig.

        A private key takes precedence over an account address.
        """
        account: Optional[Any] = None
        if config.private_key:
            account = LocalSigner(config.private_key)
        elif config.account_address:
            account = config.account_address
        return cls(
            rpc_url=config.rpc_url,
            account=account,
            chain=config.chain_id,
            timeout=config.timeout,
            retry_count=config.retry_count,
            **kwargs,
        )

    @property
    def account(self) -> Optional[Any]:
        return self.dispatcher.account

    @property
    def chain(self) -> Optional[ChainDescriptor]:
        return self.dispatcher.chain

    @property
    def address(self) -> str:
        """
        Get the default account's address

        Raises:
            ValueError: If no default account is configured
        """
        if self.dispatcher.account is None:
            raise ValueError("No account available")
        return parse_account(self.dispatcher.account).address

    def get_chain_id(self) -> int:
        """Query the node's current chain id."""
        return hex_to_number(self.transport.request("eth_chainId", []))

    def dispatch(
        self,
        intent: Union[TransactionIntent, Mapping[str, Any], None] = None,
        *,
        account: Optional[Any] = None,
        chain: Any = INHERIT,
        mode: Union[DispatchMode, str] = DispatchMode.SIGN_AND_SUBMIT,
        **fields: Any
    ) -> SigningResult:
        """
        Dispatch a transaction built from `intent` and/or keyword fields.

        Keyword fields override fields of the same name in `intent`.

        Raises:
            DispatchError: If any stage of the dispatch fails
        """
        return self.dispatcher.dispatch(_build_intent(intent, fields), account=account, chain=chain, mode=mode)

    def sign_transaction(
        self,
        intent: Union[TransactionIntent, Mapping[str, Any], None] = None,
        *,
        account: Optional[Any] = None,
        chain: Any = INHERIT,
        **fields: Any
    ) -> SignedTransaction:
        """
        Sign a transaction without submitting it.

        Returns:
            The serialized signed transaction

        Raises:
            DispatchError: If any stage of the dispatch fails
        """
        return self.dispatch(intent, account=account, chain=chain, mode=DispatchMode.SIGN_ONLY, **fields)

    def send_transaction(
        self,
        intent: Union[TransactionIntent, Mapping[str, Any], None] = None,
        *,
        account: Optional[Any] = None,
        chain: Any = INHERIT,
        **fields: Any
    ) -> SubmissionReference:
        """
        Sign and submit a transaction.

        Returns:
            Reference holding the transaction hash

        Raises:
            DispatchError: If any stage of the dispatch fails
        """
        return self.dispatch(intent, account=account, chain=chain, mode=DispatchMode.SIGN_AND_SUBMIT, **fields)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "DispatchClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _build_intent(
    intent: Union[TransactionIntent, Mapping[str, Any], None],
    fields: Dict[str, Any],
) -> Union[TransactionIntent, Mapping[str, Any], None]:
    if not fields:
        return intent
    if isinstance(intent, TransactionIntent):
        merged = intent.model_dump(exclude_none=True)
    elif isinstance(intent, Mapping):
        merged = dict(intent)
    elif intent is None:
        merged = {}
    else:
        return intent
    # Keyword fields replace the intent's field under either spelling
    overridden = {field_name(key) for key in fields}
    merged = {k: v for k, v in merged.items() if field_name(k) not in overridden}
    merged.update(fields)
    return merged
