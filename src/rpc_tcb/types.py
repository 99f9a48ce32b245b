"""
Type definitions for rpc-client-tcb

This module contains the data types shared by the proxy and the bridge:
the client configuration, the per-invocation call and the validated
response envelope.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from .errors import UnknownResponseFormatError

__all__ = [
    "ClientConfig",
    "Call",
    "ErrorDetail",
    "ResponseEnvelope",
    "parse_result",
    "is_truthy",
]


@dataclass(frozen=True)
class ClientConfig:
    """Client configuration options."""
    function_name: str


@dataclass(frozen=True)
class Call:
    """A single remote invocation of ``module.action(*params)``."""
    module_name: str
    action_name: str
    params: tuple[Any, ...] = ()

    @property
    def method(self) -> str:
        return f"{self.module_name}.{self.action_name}"

    def to_payload(self) -> dict[str, Any]:
        """Build the data sent to the remote function."""
        return {
            "rpcModule": str(self.module_name),
            "rpcAction": str(self.action_name),
            "rpcParams": list(self.params),
        }


_ENVELOPE_FIELDS = ("success", "data", "error")


def is_truthy(value: Any) -> bool:
    """Truthiness as the remote side's JavaScript sees it.

    Only None, False, zero, NaN and the empty string are falsy; every
    container and object is truthy, including empty ones.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return not (value == 0 or value != value)
    return True


def _fields_of(obj: Any, names: tuple[str, ...]) -> dict[str, Any]:
    """Read ``names`` from a mapping or from attributes; absent names are skipped."""
    if isinstance(obj, Mapping):
        return {name: obj[name] for name in names if name in obj}
    return {name: getattr(obj, name) for name in names if hasattr(obj, name)}


class ErrorDetail(BaseModel):
    """Business error reported by the remote function.

    ``message`` is empty when missing or None, and str() of anything else.
    """

    message: str = ""
    code: Any = None

    model_config = {
        "extra": "ignore",
    }

    @field_validator("message", mode="before")
    @classmethod
    def coerce_message(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)


class ResponseEnvelope(BaseModel):
    """Pydantic model for the ``result`` returned by the remote function.

    ``success`` and ``error`` follow is_truthy(). A present ``error`` that is
    not an object yields an empty message and no code. Extra fields are
    ignored for forward compatibility.
    """

    success: bool = False
    data: Any = None
    error: ErrorDetail | None = None

    model_config = {
        "extra": "ignore",
    }

    @model_validator(mode="before")
    @classmethod
    def success_wins(cls, values: Any) -> Any:
        """A truthy success ignores whatever sits in ``error``."""
        if isinstance(values, Mapping) and is_truthy(values.get("success")):
            return {k: v for k, v in values.items() if k != "error"}
        return values

    @field_validator("success", mode="before")
    @classmethod
    def truthy_success(cls, v: Any) -> bool:
        return is_truthy(v)

    @field_validator("error", mode="before")
    @classmethod
    def truthy_error(cls, v: Any) -> Any:
        if not is_truthy(v):
            return None
        return _fields_of(v, ("message", "code"))


def parse_result(result: Any) -> ResponseEnvelope:
    """Validate the ``result`` of a successful transport response.

    ``result`` may be a mapping or an object exposing ``success``, ``data``
    and ``error`` as attributes.

    Raises:
        UnknownResponseFormatError: If result is missing or cannot be read
            as an envelope.
    """
    if result is None:
        raise UnknownResponseFormatError()

    try:
        return ResponseEnvelope.model_validate(_fields_of(result, _ENVELOPE_FIELDS))
    except ValidationError as e:
        raise UnknownResponseFormatError() from e
