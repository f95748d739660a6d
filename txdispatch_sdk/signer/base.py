"""
Base types shared by local and remote accounts.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Optional


class AccountKind(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


# serializer(transaction, signature) -> wire bytes; signature is None for the unsigned payload
Serializer = Callable[[Dict[str, Any], Optional[Any]], bytes]


class LocalAccount(ABC):
    """
    An account whose key material is available to this process.

    Subclass this to plug in a custom signer (HSM client, keystore, ...).
    `sign_transaction` must not touch the network and must be deterministic
    for identical input.
    """
    kind = AccountKind.LOCAL

    @property
    @abstractmethod
    def address(self) -> str:
        pass

    @abstractmethod
    def sign_transaction(self, record: Dict[str, Any], serializer: Optional[Serializer] = None) -> bytes:
        """
        Sign a fully resolved transaction record.

        Args:
            record: Canonical transaction record with `chain_id` attached
            serializer: Chain-specific serializer hook, or None for the default

        Returns:
            Signed transaction wire bytes
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.address!r})"
