"""
Account resolution: turn a loosely-typed account reference into a local or
remote account.
"""
from typing import Any, Optional

from eth_account.signers.base import BaseAccount
from web3 import Web3

from .exceptions import AccountNotFoundError, InvalidRequestError
from .signer import Account, LocalAccount, LocalSigner, RemoteAccount


def parse_account(ref: Any) -> Account:
    """
    Normalize an account reference.

    Args:
        ref: A LocalAccount, RemoteAccount, eth_account account or address string

    Returns:
        LocalAccount or RemoteAccount

    Raises:
        InvalidRequestError: If the reference is not an account or address
    """
    if isinstance(ref, (LocalAccount, RemoteAccount)):
        return ref
    if isinstance(ref, BaseAccount):
        return LocalSigner(account=ref)
    if isinstance(ref, str):
        if not Web3.is_address(ref):
            raise InvalidRequestError(f"Invalid account address: {ref}", field="account")
        return RemoteAccount(Web3.to_checksum_address(ref))
    raise InvalidRequestError(f"Unsupported account reference of type {type(ref).__name__}", field="account")


def resolve_account(ref: Any, default: Optional[Any] = None) -> Account:
    """
    Resolve the account to dispatch from, falling back to the client default.

    Raises:
        AccountNotFoundError: If neither ref nor default is set
    """
    account = ref if ref is not None else default
    if account is None:
        raise AccountNotFoundError()
    return parse_account(account)
