"""
Remote (JSON-RPC) accounts.
"""
from dataclasses import dataclass

from .base import AccountKind


@dataclass(frozen=True)
class RemoteAccount:
    """
    An account whose keys live behind the transport (node, browser wallet,
    hardware device). Only the address is known locally.
    """
    address: str
    kind = AccountKind.REMOTE
