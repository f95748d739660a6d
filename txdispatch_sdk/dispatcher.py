"""
The transaction dispatcher.

One pipeline serves both sign-only and sign-and-submit:

    resolve account -> validate intent -> chain check -> prepare fields
        -> local branch (sign here, optionally broadcast raw bytes)
        -> remote branch (one request to the signer behind the transport)

Any failure along the way is wrapped once, at the `dispatch` boundary, into
a DispatchError.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Union

from .accounts import resolve_account
from .chain import INHERIT, ChainDescriptor, ChainGuard, resolve_chain
from .errors import get_transaction_error
from .exceptions import InvalidRequestError, TransportError
from .fees import FeeEstimator, RpcFeeEstimator
from .formatters import number_to_hex
from .models import DispatchMode, SignedTransaction, SigningResult, SubmissionReference, TransactionIntent
from .prepare import prepare_local_record, prepare_remote_request
from .signer import Account, LocalAccount, RemoteAccount
from .transport import Transport
from .validation import assert_request

logger = logging.getLogger(__name__)


class TransactionDispatcher:
    """
    Signs (and optionally submits) transactions for local and remote accounts.

    The dispatcher holds no per-call state; each dispatch builds its own
    record and chain guard, so one dispatcher can serve concurrent calls.
    """

    def __init__(
        self,
        transport: Transport,
        account: Optional[Any] = None,
        chain: Union[ChainDescriptor, int, None] = None,
        estimator: Optional[FeeEstimator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            transport: Transport used for every round-trip
            account: Default account (LocalAccount, RemoteAccount, eth_account account or address)
            chain: Default chain, or a bare chain id
            estimator: Fee/nonce estimator for local signing (defaults to RpcFeeEstimator)
            logger: Optional logger instance
        """
        self.transport = transport
        self.account = account
        self.chain = ChainDescriptor.coerce(chain)
        self.estimator = estimator or RpcFeeEstimator(transport)
        self.logger = logger or logging.getLogger(__name__)

    def dispatch(
        self,
        intent: Union[TransactionIntent, Mapping[str, Any], None],
        account: Optional[Any] = None,
        chain: Any = INHERIT,
        mode: Union[DispatchMode, str] = DispatchMode.SIGN_AND_SUBMIT,
    ) -> SigningResult:
        """
        Sign, and for SIGN_AND_SUBMIT also submit, a transaction.

        Args:
            intent: Transaction fields (TransactionIntent or mapping)
            account: Account to dispatch from; defaults to the dispatcher's account
            chain: Declared chain or chain id; INHERIT uses the dispatcher's
                chain, None skips the chain check
            mode: DispatchMode.SIGN_ONLY or DispatchMode.SIGN_AND_SUBMIT

        Returns:
            SignedTransaction for SIGN_ONLY, SubmissionReference for SIGN_AND_SUBMIT

        Raises:
            DispatchError: For any failure; `cause` holds the original error
        """
        parsed_intent: Optional[TransactionIntent] = intent if isinstance(intent, TransactionIntent) else None
        resolved_account: Optional[Account] = None
        declared: Optional[ChainDescriptor] = None

        try:
            mode = _dispatch_mode(mode)
            parsed_intent = TransactionIntent.coerce(intent)
            resolved_account = resolve_account(account, self.account)
            assert_request(parsed_intent, resolved_account)
            declared = resolve_chain(chain, self.chain)

            guard = ChainGuard(self.transport, declared, logger=self.logger)
            guard.verify()

            if isinstance(resolved_account, LocalAccount):
                return self._dispatch_local(parsed_intent, resolved_account, declared, guard, mode)
            return self._dispatch_remote(parsed_intent, resolved_account, declared, guard, mode)
        except Exception as err:
            self.logger.error(f"Transaction dispatch ({getattr(mode, 'value', mode)}) failed: {err}")
            raise get_transaction_error(err, parsed_intent, resolved_account, declared) from err

    def _dispatch_local(
        self,
        intent: TransactionIntent,
        account: LocalAccount,
        chain: Optional[ChainDescriptor],
        guard: ChainGuard,
        mode: DispatchMode,
    ) -> SigningResult:
        record = prepare_local_record(intent, account, chain, self.estimator)
        record["chain_id"] = guard.chain_id()

        serializer = chain.serializer if chain is not None else None
        raw = "0x" + bytes(account.sign_transaction(record, serializer)).hex()
        self.logger.debug(f"Signed transaction locally for {account.address} on chain {record['chain_id']}")

        if mode is DispatchMode.SIGN_ONLY:
            return SignedTransaction(raw_transaction=raw, chain_id=record["chain_id"])

        tx_hash = self.transport.request("eth_sendRawTransaction", [raw])
        self.logger.info(f"Transaction sent: {tx_hash}")
        return SubmissionReference(transaction_hash=_expect_hex(tx_hash, "eth_sendRawTransaction"))

    def _dispatch_remote(
        self,
        intent: TransactionIntent,
        account: RemoteAccount,
        chain: Optional[ChainDescriptor],
        guard: ChainGuard,
        mode: DispatchMode,
    ) -> SigningResult:
        request: Dict[str, Any] = prepare_remote_request(intent, account, chain)
        if mode is DispatchMode.SIGN_ONLY or guard.fetched:
            request = {"chainId": number_to_hex(guard.chain_id()), **request}

        result = self.transport.request(mode.rpc_method, [request])

        if mode is DispatchMode.SIGN_ONLY:
            raw = result.get("raw") if isinstance(result, dict) else result
            self.logger.debug(f"Remote signer signed transaction for {account.address}")
            return SignedTransaction(
                raw_transaction=_expect_hex(raw, mode.rpc_method),
                chain_id=guard.chain_id(),
                rpc_response=result,
            )

        self.logger.info(f"Transaction sent: {result}")
        return SubmissionReference(transaction_hash=_expect_hex(result, mode.rpc_method))


def _dispatch_mode(mode: Union[DispatchMode, str]) -> DispatchMode:
    try:
        return DispatchMode(mode)
    except ValueError as e:
        raise InvalidRequestError(f"Unsupported dispatch mode: {mode!r}", field="mode") from e


def _expect_hex(value: Any, method: str) -> str:
    if not isinstance(value, str) or not value.startswith("0x"):
        raise TransportError(f"Unexpected response for {method}: {value!r}", method=method)
    return value
