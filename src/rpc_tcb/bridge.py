"""
Invocation bridge between a Call and a callback-style transport.

invoke() sends one call through the transport, waits for the first
callback and maps the response envelope to a value or an error:

- ``{"success": true, "data": D}`` returns D
- ``{"error": {"message": M, "code": C}}`` raises BusinessError(M, code=C)
- anything else raises UnknownResponseFormatError

A failure reported by the transport is raised unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .errors import BusinessError, TransportError, UnknownResponseFormatError
from .types import Call, parse_result

if TYPE_CHECKING:
    from .transport import Transport

__all__ = ["invoke", "resolve_response"]

logger = logging.getLogger(__name__)

_SUCCESS = "success"
_FAILURE = "failure"


def _extract_result(response: Any) -> Any:
    """Get the ``result`` field from a transport response."""
    if isinstance(response, Mapping):
        return response.get("result")
    return getattr(response, "result", None)


def resolve_response(response: Any) -> Any:
    """
    Map a successful transport response to the call's value.

    Args:
        response: The value passed to the transport's success callback

    Returns:
        The ``data`` of a success envelope

    Raises:
        BusinessError: If the envelope carries an error
        UnknownResponseFormatError: If the envelope matches neither case
    """
    envelope = parse_result(_extract_result(response))

    if envelope.success:
        return envelope.data

    if envelope.error is not None:
        raise BusinessError(envelope.error.message, code=envelope.error.code)

    raise UnknownResponseFormatError()


async def invoke(transport: Transport, function_name: str, call: Call) -> Any:
    """
    Execute a call through the transport.

    The first callback fired by the transport decides the outcome; any
    later callback is ignored. Callbacks may fire from any thread.

    Args:
        transport: The callback-style transport
        function_name: Remote function identifier
        call: The module, action and params to send

    Returns:
        The ``data`` of the success envelope

    Raises:
        BusinessError: If the remote function reported an error
        UnknownResponseFormatError: If the response has no known shape
        Exception: Whatever the transport reported as a failure
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[tuple[str, Any]] = loop.create_future()

    def settle(kind: str, value: Any) -> None:
        if future.cancelled():
            logger.debug("Dropping %s for cancelled call %s", kind, call.method)
            return
        if future.done():
            logger.warning(
                "Transport reported a second outcome (%s) for %s; ignoring",
                kind,
                call.method,
            )
            return
        future.set_result((kind, value))

    def on_success(response: Any) -> None:
        loop.call_soon_threadsafe(settle, _SUCCESS, response)

    def on_failure(error: Any) -> None:
        loop.call_soon_threadsafe(settle, _FAILURE, error)

    logger.debug("Calling %s via %s", call.method, function_name)
    transport(function_name, call.to_payload(), on_success, on_failure)

    kind, value = await future

    if kind == _FAILURE:
        logger.debug("Transport failed for %s: %r", call.method, value)
        if isinstance(value, BaseException):
            raise value
        raise TransportError(value)

    try:
        return resolve_response(value)
    except BusinessError as e:
        logger.debug("%s returned business error %r", call.method, e.code)
        raise
