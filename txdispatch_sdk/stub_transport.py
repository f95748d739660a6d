"""
In-memory transport serving canned JSON-RPC results.

Useful for dry runs and tests: every call is recorded, and each method's
response may be a value, a callable taking the request params, or an
exception instance to raise.
"""
import logging
import threading
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .exceptions import RpcError
from .transport import Transport

logger = logging.getLogger(__name__)


class StubTransport(Transport):
    """
    A transport that never leaves the process.

    Example:
        transport = StubTransport({
            "eth_chainId": "0x1",
            "eth_sendRawTransaction": lambda raw: "0x" + "ab" * 32,
        })
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses: Dict[str, Any] = dict(responses or {})
        self.calls: List[Tuple[str, List[Any]]] = []
        self._lock = threading.Lock()

    def request(self, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        params = list(params or [])
        with self._lock:
            self.calls.append((method, params))
        logger.debug(f"StubTransport.request called with method={method}")

        if method not in self.responses:
            raise RpcError(f"Method {method} is not supported by the stub transport", code=-32601, method=method)

        response = self.responses[method]
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(*params)
        return response

    @property
    def methods(self) -> List[str]:
        """Names of the methods called so far, in order."""
        return [method for method, _ in self.calls]
