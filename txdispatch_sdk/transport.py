"""
Transport layer for JSON-RPC round-trips to a node.

The dispatcher only needs `request(method, params)`. Two implementations
talk to real nodes: `HTTPTransport` (requests session) and `Web3Transport`
(an existing web3 provider). `StubTransport` in `stub_transport.py` serves
canned responses.
"""
import itertools
import logging
import threading
import urllib.parse
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from web3 import Web3
from web3.exceptions import Web3Exception

from .exceptions import RpcError, TransportError

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Carries one JSON-RPC request to a node and returns its result."""

    @abstractmethod
    def request(self, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        """
        Perform one round-trip.

        Args:
            method: JSON-RPC method name
            params: Positional parameters

        Returns:
            The `result` member of the response

        Raises:
            RpcError: If the node answered with an error object
            TransportError: If the round-trip itself failed
        """
        pass

    def close(self) -> None:
        """Release any open connections."""
        pass


def validate_rpc_url(rpc_url: str) -> None:
    """
    Require https unless the node is on localhost.

    Raises:
        ValueError: If the URL is plain http to a remote host
    """
    parsed = urllib.parse.urlparse(rpc_url)
    host = parsed.netloc.split(':')[0] if parsed.netloc else ''
    is_local = host in ('localhost', '127.0.0.1')
    if parsed.scheme != 'https' and not is_local:
        raise ValueError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")


def unwrap_response(response: Any, method: str) -> Any:
    """Return the result of a JSON-RPC response or raise its error."""
    if not isinstance(response, dict):
        raise TransportError(f"Malformed JSON-RPC response for {method}: {response!r}", method=method)
    error = response.get("error")
    if error:
        if isinstance(error, dict):
            raise RpcError(
                str(error.get("message", "Unknown RPC error")),
                code=error.get("code"),
                data=error.get("data"),
                method=method,
            )
        raise RpcError(str(error), method=method)
    if "result" not in response:
        raise TransportError(f"JSON-RPC response for {method} has no result", method=method)
    return response["result"]


class HTTPTransport(Transport):
    """
    JSON-RPC over HTTP using a requests session.

    Only connection establishment is retried: a request that may have
    reached the node is never sent twice.
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: int = 30,
        retry_count: int = 3,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            rpc_url: Node endpoint URL
            timeout: Timeout for each request in seconds
            retry_count: Number of connection retries
            session: Optional preconfigured session

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        validate_rpc_url(rpc_url)
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._ids = itertools.count(1)
        self._ids_lock = threading.Lock()

        self.session = session or requests.Session()
        retries = Retry(
            total=retry_count,
            connect=retry_count,
            read=0,
            status=0,
            other=0,
            backoff_factor=0.5,
            raise_on_status=False,
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))

    def _next_id(self) -> int:
        with self._ids_lock:
            return next(self._ids)

    def request(self, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        payload: Dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": self._next_id(),
            "method": method,
            "params": list(params or []),
        }
        logger.debug(f"RPC request {method} (id={payload['id']})")
        try:
            response = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"RPC request {method} failed: {e}")
            raise TransportError(f"HTTP request for {method} failed: {e}", method=method) from e

        # requests' JSONDecodeError is also a ValueError
        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON response from node for {method}: {e}")
            raise TransportError(f"Invalid JSON response for {method}: {e}", method=method) from e
        return unwrap_response(body, method)

    def close(self) -> None:
        self.session.close()


class Web3Transport(Transport):
    """Routes requests through the provider of an existing Web3 instance."""

    def __init__(self, w3: Web3):
        self.w3 = w3

    @classmethod
    def from_rpc_url(cls, rpc_url: str, timeout: int = 30) -> "Web3Transport":
        validate_rpc_url(rpc_url)
        return cls(Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout})))

    def request(self, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        try:
            response = self.w3.provider.make_request(method, list(params or []))
        except (Web3Exception, requests.RequestException) as e:
            logger.error(f"Web3 provider request {method} failed: {e}")
            raise TransportError(f"Provider request for {method} failed: {e}", method=method) from e
        return unwrap_response(response, method)
