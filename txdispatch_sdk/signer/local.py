"""
Local signer backed by an eth_account key.
"""
import logging
from typing import Any, Dict, Optional

from eth_account import Account as EthAccount
from eth_account.signers.base import BaseAccount
from web3 import Web3

from ..formatters import to_signable
from .base import LocalAccount, Serializer

logger = logging.getLogger(__name__)


class LocalSigner(LocalAccount):
    """
    Signs transactions with a private key held in this process.

    Without a serializer hook the transaction is encoded and signed by
    eth_account. With a hook, the hook produces the unsigned payload, the key
    signs its keccak hash and the hook is called again with the signature.
    """

    def __init__(self, priv_key: Optional[str] = None, account: Optional[BaseAccount] = None):
        """
        Args:
            priv_key: Hex private key (optional if account provided)
            account: Existing eth_account account (optional if priv_key provided)

        Raises:
            ValueError: If neither priv_key nor account is provided
        """
        if account is None:
            if not priv_key:
                raise ValueError("Either priv_key or account must be provided")
            account = EthAccount.from_key(priv_key)
        self._account = account

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, record: Dict[str, Any], serializer: Optional[Serializer] = None) -> bytes:
        if serializer is None:
            signed = self._account.sign_transaction(to_signable(record))
            return bytes(signed.raw_transaction)

        transaction = dict(record)
        unsigned = serializer(transaction, None)
        signature = self._account.unsafe_sign_hash(Web3.keccak(unsigned))
        logger.debug(f"Signed transaction for {self.address} with custom serializer")
        return serializer(transaction, signature)
