"""
Data models for the txdispatch SDK.
"""
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import InvalidRequestError

# Canonical (snake_case) name -> JSON-RPC (camelCase) name
FIELD_ALIASES: Dict[str, str] = {
    "from_address": "from",
    "to": "to",
    "value": "value",
    "data": "data",
    "gas": "gas",
    "gas_price": "gasPrice",
    "max_fee_per_gas": "maxFeePerGas",
    "max_priority_fee_per_gas": "maxPriorityFeePerGas",
    "nonce": "nonce",
    "access_list": "accessList",
    "type": "type",
    "chain_id": "chainId",
}


class DispatchMode(str, Enum):
    """Whether a dispatch stops after signing or also submits the transaction."""
    SIGN_ONLY = "sign"
    SIGN_AND_SUBMIT = "sign-and-submit"

    @property
    def rpc_method(self) -> str:
        """JSON-RPC method used when the signing is delegated to the node."""
        if self is DispatchMode.SIGN_ONLY:
            return "eth_signTransaction"
        return "eth_sendTransaction"


class TransactionIntent(BaseModel):
    """
    Caller-supplied, unvalidated description of a transaction.

    Every field is optional. Keys that are not standard transaction fields are
    kept as chain-specific extension fields (see `extensions`).
    """
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    to: Optional[str] = None
    value: Optional[int] = None
    data: Optional[Union[str, bytes]] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = Field(None, alias="gasPrice")
    max_fee_per_gas: Optional[int] = Field(None, alias="maxFeePerGas")
    max_priority_fee_per_gas: Optional[int] = Field(None, alias="maxPriorityFeePerGas")
    nonce: Optional[int] = None
    access_list: Optional[List[Dict[str, Any]]] = Field(None, alias="accessList")
    type: Optional[str] = None
    from_address: Optional[str] = Field(None, alias="from")

    @classmethod
    def coerce(cls, intent: Union["TransactionIntent", Mapping[str, Any], None]) -> "TransactionIntent":
        """
        Build an intent from an intent instance or a mapping of fields.

        Raises:
            InvalidRequestError: If the fields cannot form an intent
        """
        if isinstance(intent, cls):
            return intent
        if intent is None:
            return cls()
        if not isinstance(intent, Mapping):
            raise InvalidRequestError(
                f"Transaction intent must be a mapping or TransactionIntent, got {type(intent).__name__}"
            )
        fields = canonical_fields(intent)
        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            raise InvalidRequestError(f"Malformed transaction intent: {e}") from e

    @property
    def extensions(self) -> Dict[str, Any]:
        """Chain-specific fields the caller set beyond the standard ones."""
        return {
            k: v for k, v in (self.model_extra or {}).items()
            if v is not None and k not in _STANDARD_KEYS
        }

    def explicit_fields(self) -> Dict[str, Any]:
        """
        Return the fields the caller explicitly set, keyed by canonical name.

        `from_address` is excluded; the sender is always the resolved account.
        """
        fields = {
            name: getattr(self, name)
            for name in FIELD_ALIASES
            if name not in ("from_address", "chain_id") and getattr(self, name) is not None
        }
        fields.update(self.extensions)
        return fields


# JSON-RPC alias -> field name, for the standard intent fields
_INTENT_ALIASES: Dict[str, str] = {
    field.alias: name for name, field in TransactionIntent.model_fields.items() if field.alias
}
_STANDARD_KEYS = frozenset(TransactionIntent.model_fields) | frozenset(_INTENT_ALIASES)


def field_name(key: str) -> str:
    """Intent field name for a key given under its field name or JSON-RPC alias."""
    return _INTENT_ALIASES.get(key, key)


def canonical_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Rename JSON-RPC aliases (`gasPrice`, `from`, ...) to intent field names.

    A field may be given under either name, but not twice with different
    values. Unset (None) duplicates are ignored.

    Raises:
        InvalidRequestError: If a field is given under both names with different values
    """
    canonical: Dict[str, Any] = {}
    for key, value in fields.items():
        name = field_name(key)
        if value is None and name in canonical:
            continue
        current = canonical.get(name)
        if current is not None and value is not None and current != value:
            raise InvalidRequestError(
                f"Field `{name}` given twice with different values ({current!r}, {value!r})", field=name
            )
        canonical[name] = value
    return canonical


class SignedTransaction(BaseModel):
    """Serialized signed transaction returned by a sign-only dispatch."""
    raw_transaction: str
    chain_id: Optional[int] = None
    rpc_response: Optional[Any] = None

    @property
    def raw_bytes(self) -> bytes:
        return bytes.fromhex(self.raw_transaction[2:] if self.raw_transaction.startswith("0x") else self.raw_transaction)


class SubmissionReference(BaseModel):
    """Opaque reference (transaction hash) returned by a sign-and-submit dispatch."""
    transaction_hash: str


SigningResult = Union[SignedTransaction, SubmissionReference]
