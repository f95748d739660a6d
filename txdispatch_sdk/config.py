"""
Client configuration.
"""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError


class ClientConfig(BaseModel):
    """
    Settings for a DispatchClient.

    Attributes:
        rpc_url: Node endpoint URL
        chain_id: Declared chain id; None leaves the client without a default chain
        private_key: Hex private key for a local signer
        account_address: Address of a remote (node-managed) account
        timeout: HTTP timeout in seconds
        retry_count: Number of connection retries
    """
    rpc_url: str
    chain_id: Optional[int] = None
    private_key: Optional[str] = Field(default=None, repr=False)
    account_address: Optional[str] = None
    timeout: int = 30
    retry_count: int = 3

    @classmethod
    def from_env(cls, prefix: str = "TXDISPATCH_", environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Read the configuration from environment variables.

        Variables (with the default prefix): TXDISPATCH_RPC_URL (required),
        TXDISPATCH_CHAIN_ID, TXDISPATCH_PRIVATE_KEY, TXDISPATCH_ACCOUNT,
        TXDISPATCH_TIMEOUT, TXDISPATCH_RETRY_COUNT.

        Raises:
            ValueError: If the RPC URL is missing or a value is malformed
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            value = env.get(f"{prefix}{name}")
            if value is None:
                return None
            value = value.strip()
            return value or None

        rpc_url = _get("RPC_URL")
        if not rpc_url:
            raise ValueError(f"{prefix}RPC_URL environment variable not set")

        values = {
            "rpc_url": rpc_url,
            "chain_id": _get("CHAIN_ID"),
            "private_key": _get("PRIVATE_KEY"),
            "account_address": _get("ACCOUNT"),
            "timeout": _get("TIMEOUT"),
            "retry_count": _get("RETRY_COUNT"),
        }
        try:
            return cls.model_validate({k: v for k, v in values.items() if v is not None})
        except ValidationError as e:
            raise ValueError(f"Invalid {prefix}* configuration: {e}") from e
