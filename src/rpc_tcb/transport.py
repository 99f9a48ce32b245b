"""
Transport contract and adapters.

A transport is any callable with the signature::

    transport(name, data, on_success, on_failure) -> None

It invokes the remote function ``name`` with ``data`` and later calls
exactly one of ``on_success(response)`` or ``on_failure(error)``. The
response carries a ``result`` field holding the response envelope.

Hosts that already expose such a primitive pass it straight to
create_client(). The adapters below build one from a coroutine or from an
HTTP-triggered cloud function.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol

import httpx

__all__ = [
    "SuccessCallback",
    "FailureCallback",
    "Transport",
    "AsyncTransport",
    "HttpTransport",
]

logger = logging.getLogger(__name__)


SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[Any], None]


class Transport(Protocol):
    """Callback-style remote function invoker supplied by the host."""

    def __call__(
        self,
        name: str,
        data: dict[str, Any],
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None: ...


class AsyncTransport(ABC):
    """
    Base class for transports written as coroutines.

    Subclasses implement send(); calling the instance with the callback
    signature schedules send() on the running event loop and reports its
    return value or exception through the callbacks.

    Example:
        class LoopbackTransport(AsyncTransport):
            async def send(self, name, data):
                return {"result": {"success": True, "data": data}}
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    @abstractmethod
    async def send(self, name: str, data: dict[str, Any]) -> Any:
        """Invoke the remote function and return its response."""
        raise NotImplementedError

    def __call__(
        self,
        name: str,
        data: dict[str, Any],
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        task = asyncio.get_running_loop().create_task(
            self._deliver(name, data, on_success, on_failure)
        )
        # Keep a reference until done so the task is not collected mid-flight
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _deliver(
        self,
        name: str,
        data: dict[str, Any],
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        try:
            response = await self.send(name, data)
        except Exception as e:
            on_failure(e)
            return
        on_success(response)


class HttpTransport(AsyncTransport):
    """
    Transport for cloud functions exposed over HTTP.

    POSTs the call data as JSON to ``{base_url}/{name}`` and reports the
    decoded body as the response ``result``. HTTP status errors, network
    errors and undecodable bodies are reported as failures.

    Args:
        base_url: HTTP access root, e.g. "https://env-id.service.tcloudbase.com"
        headers: Extra request headers (e.g. Authorization)
        timeout: Request timeout in seconds
        http_transport: Optional httpx transport (used by tests)

    Example:
        transport = HttpTransport(
            "https://env-id.service.tcloudbase.com",
            headers={"Authorization": f"Bearer {token}"},
        )
        rpc = create_client({"functionName": "rpcEntry"}, transport=transport)
        info = await rpc.user.getInfo("123")
    """

    def __init__(
        self,
        base_url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout = timeout
        self._http_transport = http_transport

    def url_for(self, name: str) -> str:
        return f"{self.base_url}/{name.lstrip('/')}"

    async def send(self, name: str, data: dict[str, Any]) -> Any:
        url = self.url_for(name)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._http_transport,
            ) as client:
                response = await client.post(
                    url,
                    json=data,
                    headers={
                        "Content-Type": "application/json",
                        **self.headers,
                    },
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.warning("HTTP call to %s failed: %s", url, e)
            raise
        except ValueError as e:
            logger.warning("Invalid JSON in response from %s: %s", url, e)
            raise

        return {"result": body}

    def __repr__(self) -> str:
        return f"HttpTransport({self.base_url})"
