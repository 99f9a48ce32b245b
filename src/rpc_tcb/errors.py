"""
Error types for rpc-client-tcb.

Error Hierarchy:
- RpcTcbError (base)
  - ConfigurationError: Missing or invalid client configuration
  - BusinessError: The remote function ran and reported a failure
  - UnknownResponseFormatError: The response matched no known envelope
  - TransportError: Non-exception value reported by a transport failure

Transport failures that are already exceptions are never wrapped; they
reach the caller exactly as the transport reported them.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "RpcTcbError",
    "ConfigurationError",
    "BusinessError",
    "UnknownResponseFormatError",
    "TransportError",
    "UNKNOWN_RESPONSE_FORMAT_MESSAGE",
    "is_business_error",
]


UNKNOWN_RESPONSE_FORMAT_MESSAGE = "Unknown server response format."


# ============================================================================
# Base Error Class
# ============================================================================


class RpcTcbError(Exception):
    """
    Base error class for all rpc-client-tcb errors.

    Example:
        ```python
        try:
            await client.user.getInfo("123")
        except RpcTcbError as error:
            print(f"RPC failed: {error.message}")
        ```

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "name": self.__class__.__name__,
            "message": self.message,
        }


# ============================================================================
# Specific Error Types
# ============================================================================


class ConfigurationError(RpcTcbError):
    """
    Error raised when a client cannot be constructed.

    Raised synchronously by create_client(); no client is produced.

    Common causes:
    - `functionName` missing, empty or not a string
    - No transport passed and no default transport configured
    """


class BusinessError(RpcTcbError):
    """
    Error raised when the remote function reports an application failure.

    The transport call itself succeeded; the remote side returned
    ``{"error": {"message": ..., "code": ...}}``.

    Example:
        ```python
        try:
            await client.order.create(item_id)
        except BusinessError as error:
            if error.code == "OUT_OF_STOCK":
                show_sold_out()
        ```

    Attributes:
        code: Machine-readable code from the remote side (str or int).
    """

    def __init__(self, message: str, code: Any = None) -> None:
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        if self.code is not None:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code!r})"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["code"] = self.code
        return data


class UnknownResponseFormatError(RpcTcbError):
    """
    Error raised when a successful response has no recognizable envelope.

    Signals a protocol mismatch between client and remote function rather
    than a business condition.
    """

    def __init__(self, message: str = UNKNOWN_RESPONSE_FORMAT_MESSAGE) -> None:
        super().__init__(message)


class TransportError(RpcTcbError):
    """
    Error raised when a transport fails with a value that is not an exception.

    Attributes:
        reason: The value the transport passed to its failure callback.
    """

    def __init__(self, reason: Any) -> None:
        super().__init__(f"Transport call failed: {reason!r}")
        self.reason = reason


# ============================================================================
# Error Utilities
# ============================================================================


def is_business_error(error: BaseException) -> bool:
    """
    Check if an error was reported by the remote function itself.

    Example:
        ```python
        try:
            await client.user.get(uid)
        except Exception as error:
            if is_business_error(error):
                notify_user(error.message)
            else:
                raise
        ```
    """
    return isinstance(error, BusinessError)
