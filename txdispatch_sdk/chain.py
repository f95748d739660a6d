"""
Chain descriptors and the chain consistency guard.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Union

from ._rate_limited_log import rate_limited_log
from .exceptions import ChainMismatchError, ChainNotFoundError, InvalidRequestError, TransportError
from .formatters import hex_to_number
from .signer import Serializer
from .transport import Transport

logger = logging.getLogger(__name__)


class _Inherit:
    """Sentinel: use the chain configured on the client."""

    def __repr__(self) -> str:
        return "INHERIT"


INHERIT: Any = _Inherit()


@dataclass(frozen=True)
class ChainDescriptor:
    """
    Declared identity of a chain plus its optional formatting hooks.

    Attributes:
        id: Numeric chain id
        name: Human-readable name used in error messages
        formatter: Reshapes a canonical request into the remote wire shape
        serializer: Serializes a record (and signature) into wire bytes
        extension_fields: Extra intent fields the chain understands
        defaults: Chain default fields, overridden by anything the caller sets
        default_priority_fee: Priority fee used when estimating EIP-1559 fees
    """
    id: int
    name: Optional[str] = None
    formatter: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None
    serializer: Optional[Serializer] = None
    extension_fields: FrozenSet[str] = frozenset()
    defaults: Mapping[str, Any] = field(default_factory=dict, hash=False)
    default_priority_fee: Optional[int] = None

    @classmethod
    def coerce(cls, chain: Union["ChainDescriptor", int, None]) -> Optional["ChainDescriptor"]:
        """Accept a descriptor, a bare chain id, or None (no chain check)."""
        if chain is None or isinstance(chain, cls):
            return chain
        if isinstance(chain, int) and not isinstance(chain, bool):
            return cls(id=chain)
        raise InvalidRequestError(f"Unsupported chain of type {type(chain).__name__}", field="chain")

    @property
    def label(self) -> str:
        return f"{self.name} (id: {self.id})" if self.name else f"id: {self.id}"


MAINNET = ChainDescriptor(id=1, name="Ethereum")
SEPOLIA = ChainDescriptor(id=11155111, name="Sepolia")


def resolve_chain(chain: Any = INHERIT, default: Any = None) -> Optional[ChainDescriptor]:
    """
    Resolve the declared chain of a dispatch.

    Returns None when the caller explicitly passed chain=None (no check).

    Raises:
        ChainNotFoundError: If the chain is inherited but the client has none
    """
    if chain is INHERIT:
        if default is None:
            raise ChainNotFoundError()
        return ChainDescriptor.coerce(default)
    return ChainDescriptor.coerce(chain)


def assert_current_chain(current_chain_id: int, chain: Optional[ChainDescriptor]) -> None:
    """
    Raises:
        ChainNotFoundError: If no chain is declared
        ChainMismatchError: If the node's chain id differs from the declared one
    """
    if chain is None:
        raise ChainNotFoundError()
    if current_chain_id != chain.id:
        raise ChainMismatchError(chain.id, current_chain_id, chain_name=chain.name)


class ChainGuard:
    """
    Cross-checks the node's chain id against the declared chain.

    One guard lives for exactly one dispatch; the node's chain id is fetched
    at most once per guard.
    """

    def __init__(self, transport: Transport, declared: Optional[ChainDescriptor],
                 logger: Optional[logging.Logger] = None):
        self.transport = transport
        self.declared = declared
        self.logger = logger or logging.getLogger(__name__)
        self._chain_id: Optional[int] = None

    @property
    def fetched(self) -> bool:
        return self._chain_id is not None

    def chain_id(self) -> int:
        """Return the node's chain id, fetching it on first use."""
        if self._chain_id is None:
            result = self.transport.request("eth_chainId", [])
            try:
                self._chain_id = hex_to_number(result)
            except (TypeError, ValueError) as e:
                raise TransportError(f"Node returned an invalid chain id: {result!r}", method="eth_chainId") from e
            self.logger.debug(f"Node reports chain id {self._chain_id}")
        return self._chain_id

    def verify(self) -> Optional[int]:
        """
        Run the chain check unless it was opted out of.

        Returns:
            The node's chain id, or None if the check was skipped
        """
        if self.declared is None:
            rate_limited_log(
                "Chain check disabled (chain=None); dispatching without verifying the node's chain id",
                logger_instance=self.logger,
            )
            return None
        current = self.chain_id()
        assert_current_chain(current, self.declared)
        return current
