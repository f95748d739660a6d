"""
Conversions between canonical transaction fields and their JSON-RPC shape.
"""
from typing import Any, Dict, List, Mapping

from .models import FIELD_ALIASES

QUANTITY_FIELDS = frozenset({
    "value", "gas", "gas_price", "max_fee_per_gas", "max_priority_fee_per_gas", "nonce", "chain_id",
})

# Transaction type name -> EIP-2718 type byte
TRANSACTION_TYPES: Dict[str, int] = {
    "legacy": 0,
    "eip2930": 1,
    "eip1559": 2,
}


def number_to_hex(value: int) -> str:
    """Encode a non-negative integer as a JSON-RPC quantity."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Cannot hex-encode negative number {value}")
    return hex(value)


def hex_to_number(value: Any) -> int:
    """Decode a JSON-RPC quantity (or pass an int through)."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        return int(value, 16) if value.lower().startswith("0x") else int(value)
    raise TypeError(f"Cannot decode quantity from {type(value).__name__}")


def bytes_to_hex(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return value


def type_to_hex(tx_type: str) -> str:
    if tx_type in TRANSACTION_TYPES:
        return hex(TRANSACTION_TYPES[tx_type])
    return tx_type


def type_name(tx_type: Any) -> Any:
    """Map a type byte (`0x2`) to its name (`eip1559`); names and unknown values pass through."""
    for name, number in TRANSACTION_TYPES.items():
        if tx_type == hex(number):
            return name
    return tx_type


def format_transaction_request(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Baseline formatter for the remote wire-request shape.

    Renames canonical fields to their JSON-RPC names, hex-encodes quantities
    and bytes, maps transaction type names to type bytes and drops unset
    fields. Unknown (extension) fields pass through unchanged.
    """
    request: Dict[str, Any] = {}
    for name, value in fields.items():
        if value is None:
            continue
        if name in QUANTITY_FIELDS:
            value = number_to_hex(value)
        elif name == "type":
            value = type_to_hex(value)
        elif name == "access_list":
            value = _format_access_list(value)
        else:
            value = bytes_to_hex(value)
        request[FIELD_ALIASES.get(name, name)] = value
    return request


def to_signable(record: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert a resolved record into the camelCase dict eth_account signs.

    Integers stay integers; the transaction type becomes its hex type byte,
    except legacy transactions which eth_account expects untyped.
    """
    signable: Dict[str, Any] = {}
    for name, value in record.items():
        if value is None:
            continue
        if name == "type":
            if value in ("legacy", "0x0"):
                continue
            value = type_to_hex(value)
        elif name == "data":
            value = bytes_to_hex(value)
        signable[FIELD_ALIASES.get(name, name)] = value
    return signable


def _format_access_list(access_list: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "address": entry.get("address"),
            "storageKeys": list(entry.get("storageKeys", entry.get("storage_keys", []))),
        }
        for entry in access_list
    ]
