"""
Configuration management for rpc-client-tcb

This module validates client options and holds the process-wide default
transport used when create_client() is not given one.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .errors import ConfigurationError
from .types import ClientConfig

if TYPE_CHECKING:
    from .transport import Transport


FUNCTION_NAME_ENV = "RPC_TCB_FUNCTION_NAME"


def _get_env(key: str) -> str | None:
    """Get environment variable value."""
    return os.environ.get(key)


# Global configuration
_global_config: dict[str, Any] = {
    "transport": None,
}


def configure(*, transport: Transport | None = None) -> None:
    """
    Configure process-wide defaults.

    Args:
        transport: Transport used by clients created without an explicit one

    Example::

        from rpc_tcb import configure, create_client, HttpTransport

        configure(transport=HttpTransport("https://env-id.service.tcloudbase.com"))
        rpc = create_client({"functionName": "rpcEntry"})
    """
    global _global_config

    if transport is not None:
        _global_config["transport"] = transport


def get_default_transport() -> Transport | None:
    """Get the transport registered with configure(), if any."""
    return _global_config["transport"]


def reset() -> None:
    """Forget every default registered with configure()."""
    _global_config["transport"] = None


def normalize_options(options: ClientConfig | Mapping[str, Any] | None) -> ClientConfig:
    """
    Validate client options and build a ClientConfig.

    Accepts a ClientConfig or a mapping holding ``functionName`` (or
    ``function_name``).

    Raises:
        ConfigurationError: If the function name is missing or falsy
    """
    if isinstance(options, ClientConfig):
        function_name: Any = options.function_name
    elif isinstance(options, Mapping):
        function_name = options.get("functionName") or options.get("function_name")
    else:
        function_name = None

    if not function_name:
        raise ConfigurationError("`options.functionName` is required.")
    if not isinstance(function_name, str):
        raise ConfigurationError(
            f"`options.functionName` must be a string, got {type(function_name).__name__}."
        )

    return ClientConfig(function_name=function_name)


def load_config_from_env() -> ClientConfig:
    """
    Build a ClientConfig from environment variables.

    Reads from:
        - RPC_TCB_FUNCTION_NAME

    Raises:
        ConfigurationError: If RPC_TCB_FUNCTION_NAME is unset or empty
    """
    function_name = _get_env(FUNCTION_NAME_ENV)
    if not function_name:
        raise ConfigurationError(f"{FUNCTION_NAME_ENV} is not set.")
    return ClientConfig(function_name=function_name)
