"""
Accounts that can be dispatched from.

An account is either local (key material in this process, signing is a pure
function) or remote (address only, the node or wallet behind the transport
signs).
"""
from typing import Union

from .base import AccountKind, LocalAccount, Serializer
from .local import LocalSigner
from .remote import RemoteAccount

Account = Union[LocalAccount, RemoteAccount]

__all__ = ["Account", "AccountKind", "LocalAccount", "LocalSigner", "RemoteAccount", "Serializer"]
