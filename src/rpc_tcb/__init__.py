"""
rpc-client-tcb - Zero-schema RPC client for cloud function entry points.

All calls go to one remote function; the module, action and parameters
travel in the payload:

    {"rpcModule": "user", "rpcAction": "getInfo", "rpcParams": ["123"]}

The remote function answers with ``{"success": true, "data": ...}`` or
``{"error": {"message": ..., "code": ...}}``.

Example usage:
    from rpc_tcb import BusinessError, HttpTransport, create_client

    async def main():
        transport = HttpTransport("https://env-id.service.tcloudbase.com")
        rpc = create_client({"functionName": "rpcEntry"}, transport=transport)

        # Zero-schema module/action calls
        info = await rpc.user.getInfo("123")
        print(info)

        try:
            await rpc.order.cancel("A-1")
        except BusinessError as error:
            print(error.code, error.message)

    import asyncio
    asyncio.run(main())
"""

from __future__ import annotations

__version__ = "0.1.0"

from .client import ModuleProxy, RemoteAction, RpcClient, create_client
from .config import configure, get_default_transport, load_config_from_env, reset
from .errors import (
    BusinessError,
    ConfigurationError,
    RpcTcbError,
    TransportError,
    UnknownResponseFormatError,
    is_business_error,
)
from .transport import AsyncTransport, HttpTransport, Transport
from .types import Call, ClientConfig

__all__ = [
    # Main API
    "create_client",
    "RpcClient",
    "ModuleProxy",
    "RemoteAction",
    "ClientConfig",
    "Call",
    # Configuration
    "configure",
    "get_default_transport",
    "load_config_from_env",
    "reset",
    # Transports
    "Transport",
    "AsyncTransport",
    "HttpTransport",
    # Errors
    "RpcTcbError",
    "ConfigurationError",
    "BusinessError",
    "UnknownResponseFormatError",
    "TransportError",
    "is_business_error",
    # Version
    "__version__",
]
