"""
Field preparation: merge chain defaults, caller fields and estimates into one
canonical transaction record.

Merge priority, lowest first:
    1. chain default fields
    2. estimated fields (only for keys the caller left unset)
    3. caller fields
A caller field is never overwritten. Once the caller commits to a fee shape
(legacy `gas_price` or EIP-1559 fee fields, or an explicit `type`), the
lower layers cannot add fields or a type of the other shape.
"""
import logging
from typing import Any, Dict, Mapping, Optional

from ._rate_limited_log import rate_limited_log
from .chain import ChainDescriptor
from .exceptions import RequestPreparationError
from .fees import FEE_SHAPE_FIELDS, FeeEstimator, fee_shape
from .formatters import format_transaction_request
from .models import TransactionIntent

logger = logging.getLogger(__name__)

FEE_FIELDS = ("gas_price", "max_fee_per_gas")


def merge_fields(
    chain_defaults: Optional[Mapping[str, Any]],
    caller_fields: Optional[Mapping[str, Any]],
    estimated: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Merge the three field sets into a new dict with keys in sorted order.

    None values never overwrite anything. Estimated values only fill keys the
    caller left unset.
    """
    caller_fields = caller_fields or {}
    shape = fee_shape(caller_fields)
    merged: Dict[str, Any] = {
        k: v for k, v in (chain_defaults or {}).items()
        if v is not None and not _conflicts_with_shape(shape, k, v)
    }
    for key, value in (estimated or {}).items():
        if value is not None and caller_fields.get(key) is None and not _conflicts_with_shape(shape, key, value):
            merged[key] = value
    merged.update({k: v for k, v in caller_fields.items() if v is not None})
    return {key: merged[key] for key in sorted(merged)}


def _conflicts_with_shape(shape: Optional[str], key: str, value: Any) -> bool:
    if shape is None:
        return False
    if key == "type":
        return fee_shape({"type": value}) != shape
    return any(key in names for other, names in FEE_SHAPE_FIELDS.items() if other != shape)


def extract_extensions(intent: TransactionIntent, chain: Optional[ChainDescriptor]) -> Dict[str, Any]:
    """Keep the intent's extension fields that the chain declares."""
    extensions = intent.extensions
    if not extensions:
        return {}
    allowed = chain.extension_fields if chain is not None else frozenset()
    kept = {k: v for k, v in extensions.items() if k in allowed}
    dropped = sorted(set(extensions) - set(kept))
    if dropped:
        rate_limited_log(
            f"Ignoring extension fields not declared by the chain: {', '.join(dropped)}",
            logger_instance=logger,
        )
    return kept


def caller_fields(intent: TransactionIntent, chain: Optional[ChainDescriptor]) -> Dict[str, Any]:
    extensions = intent.extensions
    fields = {k: v for k, v in intent.explicit_fields().items() if k not in extensions}
    fields.update(extract_extensions(intent, chain))
    return fields


def _chain_defaults(chain: Optional[ChainDescriptor]) -> Mapping[str, Any]:
    return chain.defaults if chain is not None else {}


def prepare_local_record(
    intent: TransactionIntent,
    account: Any,
    chain: Optional[ChainDescriptor],
    estimator: FeeEstimator,
) -> Dict[str, Any]:
    """
    Build a fully populated record for local signing.

    Raises:
        RequestPreparationError: If estimation fails or leaves a gap
    """
    defaults = _chain_defaults(chain)
    fields = caller_fields(intent, chain)
    base = merge_fields(defaults, fields)

    try:
        estimated = estimator.estimate(dict(base), account, chain)
    except RequestPreparationError:
        raise
    except Exception as e:
        raise RequestPreparationError(f"Failed to estimate transaction fields: {e}") from e

    record = merge_fields(defaults, fields, estimated)

    missing = [name for name in ("nonce", "gas") if record.get(name) is None]
    if not any(record.get(name) is not None for name in FEE_FIELDS):
        missing.append("gas_price or max_fee_per_gas")
    if missing:
        raise RequestPreparationError(f"Transaction fields still unset after estimation: {', '.join(missing)}")

    logger.debug(f"Prepared local record with fields: {list(record)}")
    return record


def prepare_remote_request(
    intent: TransactionIntent,
    account: Any,
    chain: Optional[ChainDescriptor],
) -> Dict[str, Any]:
    """
    Build the wire request for a remote signer. Gaps are left for the remote
    side to fill.

    Raises:
        RequestPreparationError: If the chain's formatter fails
    """
    fields = merge_fields(_chain_defaults(chain), caller_fields(intent, chain))
    fields["from_address"] = account.address

    format_request = chain.formatter if chain is not None and chain.formatter is not None else format_transaction_request
    try:
        return format_request(fields)
    except Exception as e:
        raise RequestPreparationError(f"Failed to format transaction request: {e}") from e
