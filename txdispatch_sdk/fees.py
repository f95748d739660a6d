"""
Fee, nonce and gas estimation for locally signed transactions.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

from .chain import ChainDescriptor
from .exceptions import RequestPreparationError
from .formatters import format_transaction_request, hex_to_number, type_name
from .transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY_FEE = 1_500_000_000  # 1.5 gwei
FEE_MULTIPLIER_PERCENT = 120

LEGACY = "legacy"
EIP1559 = "eip1559"

# Fee fields of each fee shape
FEE_SHAPE_FIELDS: Dict[str, Tuple[str, ...]] = {
    LEGACY: ("gas_price",),
    EIP1559: ("max_fee_per_gas", "max_priority_fee_per_gas"),
}


def fee_shape(fields: Mapping[str, Any]) -> Optional[str]:
    """
    Fee shape (`legacy` or `eip1559`) the fields commit to, or None.

    Fee fields decide first; otherwise an explicit `type` does. Legacy and
    EIP-2930 transactions both pay a `gas_price`.
    """
    if fields.get("gas_price") is not None:
        return LEGACY
    if any(fields.get(name) is not None for name in FEE_SHAPE_FIELDS[EIP1559]):
        return EIP1559
    tx_type = type_name(fields.get("type"))
    if tx_type is None:
        return None
    return EIP1559 if tx_type == EIP1559 else LEGACY


class FeeEstimator(Protocol):
    """Fills the fee, nonce and gas fields a caller left unset."""

    def estimate(self, fields: Dict[str, Any], account: Any,
                 chain: Optional[ChainDescriptor]) -> Dict[str, Any]:
        """
        Args:
            fields: Merged caller and chain fields (canonical names)
            account: Account the transaction is sent from
            chain: Declared chain, or None if the chain check was skipped

        Returns:
            Estimated values for the fields missing from `fields`
        """
        ...


class RpcFeeEstimator:
    """
    Estimates missing fields with node queries.

    An explicit `type` or fee field fixes the fee shape. Otherwise EIP-1559
    fees are used when the latest block carries a base fee; the max fee is the
    base fee plus 20% headroom plus the priority fee. Legacy fees are the
    node's gas price plus 20%. Only missing fields are fetched; nothing is
    retried.
    """

    def __init__(self, transport: Transport, logger: Optional[logging.Logger] = None):
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)

    def estimate(self, fields: Dict[str, Any], account: Any,
                 chain: Optional[ChainDescriptor]) -> Dict[str, Any]:
        estimated: Dict[str, Any] = {}

        if fields.get("nonce") is None:
            estimated["nonce"] = hex_to_number(
                self.transport.request("eth_getTransactionCount", [account.address, "pending"])
            )

        estimated.update(self._estimate_fees(fields, chain))

        if fields.get("gas") is None:
            request_fields = {k: v for k, v in {**estimated, **fields}.items() if k != "type"}
            request_fields["from_address"] = account.address
            request = format_transaction_request(request_fields)
            estimated["gas"] = hex_to_number(self.transport.request("eth_estimateGas", [request]))

        self.logger.debug(f"Estimated fields for {account.address}: {sorted(estimated)}")
        return estimated

    def _estimate_fees(self, fields: Dict[str, Any], chain: Optional[ChainDescriptor]) -> Dict[str, Any]:
        tx_type = type_name(fields.get("type"))
        shape = fee_shape(fields)

        if fields.get("gas_price") is not None and (
            tx_type == EIP1559
            or any(fields.get(name) is not None for name in FEE_SHAPE_FIELDS[EIP1559])
        ):
            raise RequestPreparationError("Cannot combine gasPrice with EIP-1559 fee fields or type")

        if shape == LEGACY:
            if tx_type is None:
                tx_type = "eip2930" if fields.get("access_list") else LEGACY
            return {"type": tx_type, **self._legacy_fees(fields)}

        if fields.get("max_fee_per_gas") is not None and fields.get("max_priority_fee_per_gas") is not None:
            return {"type": EIP1559}

        base_fee = self._base_fee()
        if base_fee is None:
            if shape == EIP1559:
                raise RequestPreparationError(
                    "Chain does not support EIP-1559 fees (no baseFeePerGas on latest block)"
                )
            return {"type": "eip2930" if fields.get("access_list") else LEGACY, **self._legacy_fees(fields)}

        return {"type": EIP1559, **self._eip1559_fees(fields, chain, base_fee)}

    def _base_fee(self) -> Optional[int]:
        block = self.transport.request("eth_getBlockByNumber", ["latest", False])
        base_fee = block.get("baseFeePerGas") if isinstance(block, dict) else None
        return hex_to_number(base_fee) if base_fee is not None else None

    def _legacy_fees(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        if fields.get("gas_price") is not None:
            return {}
        node_price = hex_to_number(self.transport.request("eth_gasPrice", []))
        return {"gas_price": node_price * FEE_MULTIPLIER_PERCENT // 100}

    def _eip1559_fees(self, fields: Dict[str, Any], chain: Optional[ChainDescriptor],
                      base_fee: int) -> Dict[str, Any]:
        estimated: Dict[str, Any] = {}
        max_fee = fields.get("max_fee_per_gas")
        priority_fee = fields.get("max_priority_fee_per_gas")
        if priority_fee is None:
            priority_fee = DEFAULT_PRIORITY_FEE
            if chain is not None and chain.default_priority_fee is not None:
                priority_fee = chain.default_priority_fee
            estimated["max_priority_fee_per_gas"] = priority_fee
        if max_fee is None:
            max_fee = base_fee * FEE_MULTIPLIER_PERCENT // 100 + priority_fee
            estimated["max_fee_per_gas"] = max_fee
        if priority_fee > max_fee:
            raise RequestPreparationError(
                f"maxFeePerGas ({max_fee}) cannot be lower than maxPriorityFeePerGas ({priority_fee})"
            )
        return estimated
