"""
RpcClient - Zero-schema cloud function client using __getattr__.

Attribute access on the client picks a module, attribute access on the
module picks an action, and calling the action sends
``{rpcModule, rpcAction, rpcParams}`` to a single remote function through
the transport.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Coroutine

from .bridge import invoke
from .config import get_default_transport, normalize_options
from .errors import ConfigurationError
from .transport import Transport
from .types import Call, ClientConfig

__all__ = ["RpcClient", "ModuleProxy", "RemoteAction", "create_client"]


# Never dispatched as module names: promise detection probes ``then``.
RESERVED_NAMES = frozenset({"then"})


def _check_name(owner: object, name: str) -> None:
    if name.startswith("_") or name in RESERVED_NAMES:
        raise AttributeError(f"'{type(owner).__name__}' has no attribute '{name}'")


class _ReadOnly:
    """Prevent accidental attribute setting on proxies."""

    __slots__ = ()

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"Cannot set attribute '{name}' on {type(self).__name__}. "
            "Use RPC calls to modify remote state."
        )


class RemoteAction(_ReadOnly):
    """
    A callable bound to one ``(module, action)`` pair.

    Calling it returns a coroutine that performs the call when awaited:

        info = await client.user.getInfo("123")
    """

    __slots__ = ("_client", "_module", "_action")

    def __init__(self, client: RpcClient, module: str, action: str) -> None:
        object.__setattr__(self, "_client", client)
        object.__setattr__(self, "_module", module)
        object.__setattr__(self, "_action", action)

    def __call__(self, *params: Any) -> Coroutine[Any, Any, Any]:
        return self._client.call(self._module, self._action, *params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteAction):
            return NotImplemented
        return (
            self._client is other._client
            and self._module == other._module
            and self._action == other._action
        )

    def __hash__(self) -> int:
        return hash((id(self._client), self._module, self._action))

    def __repr__(self) -> str:
        return f"RemoteAction({self._module}.{self._action})"


class ModuleProxy(_ReadOnly):
    """
    Handle for a remote module.

    Any attribute (or subscript) names an action on the module:

        get_info = client.user.getInfo
        get_info = client.user["get-info"]
    """

    __slots__ = ("_client", "_module")

    def __init__(self, client: RpcClient, module: str) -> None:
        object.__setattr__(self, "_client", client)
        object.__setattr__(self, "_module", module)

    def __getattr__(self, name: str) -> RemoteAction:
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' has no attribute '{name}'")
        return RemoteAction(self._client, self._module, name)

    def __getitem__(self, name: Any) -> RemoteAction:
        return RemoteAction(self._client, self._module, str(name))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleProxy):
            return NotImplemented
        return self._client is other._client and self._module == other._module

    def __hash__(self) -> int:
        return hash((id(self._client), self._module))

    def __repr__(self) -> str:
        return f"ModuleProxy({self._module})"


class RpcClient(_ReadOnly):
    """
    Zero-schema client for a single cloud function entry point.

    Any attribute access returns a ModuleProxy; no module or action needs to
    be declared up front. Use create_client() to build one.

    Example:
        rpc = create_client({"functionName": "rpcEntry"}, transport=transport)

        info = await rpc.user.getInfo("123")

        # Names that are not identifiers, reserved, or shadowed by methods
        items = await rpc["order-service"]["list-items"](1, 20)
        value = await rpc.call("then", "run")
        value = await rpc["call"].history()
    """

    __slots__ = ("_config", "_transport")

    def __init__(self, config: ClientConfig, transport: Transport) -> None:
        object.__setattr__(self, "_config", config)
        object.__setattr__(self, "_transport", transport)

    @property
    def function_name(self) -> str:
        return self._config.function_name

    def __getattr__(self, name: str) -> ModuleProxy:
        """
        Zero-schema module access.

        ``then`` and names starting with "_" raise AttributeError so that
        awaitable and thenable detection never mistakes the client for a
        pending result.
        """
        _check_name(self, name)
        return ModuleProxy(self, name)

    def __getitem__(self, name: Any) -> ModuleProxy:
        return ModuleProxy(self, str(name))

    def call(self, module: Any, action: Any, *params: Any) -> Coroutine[Any, Any, Any]:
        """
        Call ``module.action(*params)`` on the remote function.

        Args:
            module: Module name (converted with str())
            action: Action name (converted with str())
            *params: Positional parameters, sent in order

        Returns:
            A coroutine resolving to the remote ``data``
        """
        call = Call(str(module), str(action), params)
        return invoke(self._transport, self._config.function_name, call)

    def __repr__(self) -> str:
        return f"RpcClient({self._config.function_name})"


def create_client(
    options: ClientConfig | Mapping[str, Any] | None,
    *,
    transport: Transport | None = None,
) -> RpcClient:
    """
    Create an RPC client for a cloud function entry point.

    Args:
        options: ``{"functionName": ...}`` or a ClientConfig
        transport: Callback-style transport; defaults to the one set with
            configure()

    Returns:
        An RpcClient addressing ``client.<module>.<action>(*params)``

    Raises:
        ConfigurationError: If functionName is missing or no usable
            transport is available

    Example:
        rpc = create_client({"functionName": "rpcEntry"}, transport=transport)
        info = await rpc.user.getInfo("123")
    """
    config = normalize_options(options)

    if transport is None:
        transport = get_default_transport()
    if transport is None:
        raise ConfigurationError(
            "No transport given and no default transport configured."
        )
    if not callable(transport):
        raise ConfigurationError(
            f"Transport must be callable, got {type(transport).__name__}."
        )

    return RpcClient(config, transport)
