"""Network configuration -> adapter instance resolution.

Adapters are imported lazily (off the event loop) and initialized once per
network id. Concurrent requests for the same network share one in-flight
instantiation task; only successfully initialized adapters are cached.
"""

from __future__ import annotations

import asyncio
import importlib
from typing import Any, Dict, Mapping, Optional

from ..errors import UnsupportedEcosystemError
from ..observability.logging import get_logger, log_event
from .base import ContractAdapter

logger = get_logger(__name__)

ADAPTER_MODULES: Dict[str, str] = {
    "evm": "chainform.adapters.evm.adapter",
    "solana": "chainform.adapters.solana.adapter",
    "stellar": "chainform.adapters.stellar.adapter",
    "midnight": "chainform.adapters.midnight.adapter",
}


class AdapterRegistry:
    """Cache of adapter singletons keyed by network id."""

    def __init__(
        self,
        modules: Optional[Mapping[str, str]] = None,
        *,
        adapter_options: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ):
        self._modules: Dict[str, str] = dict(ADAPTER_MODULES if modules is None else modules)
        self._options: Dict[str, Dict[str, Any]] = {
            ecosystem: dict(options) for ecosystem, options in (adapter_options or {}).items()
        }
        self._adapters: Dict[str, ContractAdapter] = {}
        self._pending: Dict[str, asyncio.Task] = {}
        self._lock = asyncio.Lock()

    @property
    def ecosystems(self) -> list:
        return sorted(self._modules)

    def __len__(self) -> int:
        return len(self._adapters)

    def __contains__(self, network_id: object) -> bool:
        return network_id in self._adapters

    def peek(self, network_id: str) -> Optional[ContractAdapter]:
        """Return the cached adapter for ``network_id`` without instantiating one."""
        return self._adapters.get(network_id)

    def reset(self) -> None:
        """Drop cached adapters.

        In-flight instantiations still complete for their callers, but their
        adapters are not cached; the next request creates a new instance.
        """
        self._adapters.clear()
        self._pending.clear()

    async def get_adapter(self, network_config: Any) -> ContractAdapter:
        """Return the adapter for ``network_config``, creating it on first use.

        Raises:
            UnsupportedEcosystemError: if no adapter exists for the network's ecosystem
        """
        ecosystem = str(getattr(network_config, "ecosystem", "") or "")
        if ecosystem not in self._modules:
            raise UnsupportedEcosystemError(ecosystem or "<missing>")
        network_id = network_config.id

        async with self._lock:
            adapter = self._adapters.get(network_id)
            if adapter is not None:
                return adapter
            task = self._pending.get(network_id)
            if task is None:
                task = asyncio.ensure_future(self._instantiate(network_config, ecosystem))
                task.add_done_callback(_retrieve_exception)
                self._pending[network_id] = task

        # Shielded so one cancelled caller does not abort the shared instantiation.
        return await asyncio.shield(task)

    async def _instantiate(self, network_config: Any, ecosystem: str) -> ContractAdapter:
        network_id = network_config.id
        try:
            module = await asyncio.to_thread(importlib.import_module, self._modules[ecosystem])
            adapter_class = getattr(module, "ADAPTER_CLASS")
            adapter = adapter_class(network_config, **self._options.get(ecosystem, {}))
            await adapter.initialize()
        except Exception:
            logger.warning("Adapter instantiation failed for network %s", network_id, exc_info=True)
            raise
        finally:
            still_pending = self._pending.get(network_id) is asyncio.current_task()
            if still_pending:
                del self._pending[network_id]

        if not still_pending:
            # reset() ran meanwhile: hand the adapter to its waiters without caching it.
            return adapter
        self._adapters[network_id] = adapter
        log_event(
            "adapter.instantiated",
            f"Initialized {adapter_class.__name__} for {network_id}",
            logger=logger,
            ecosystem=ecosystem,
            network_id=network_id,
        )
        return adapter


def _retrieve_exception(task: "asyncio.Task") -> None:
    # Marks the exception as retrieved when every waiter was cancelled.
    if not task.cancelled():
        task.exception()


def create_default_registry(*, rpc_timeout: Optional[float] = None) -> AdapterRegistry:
    """Registry wired to the built-in adapters."""
    options: Dict[str, Dict[str, Any]] = {}
    if rpc_timeout is not None:
        options["evm"] = {"rpc_timeout": rpc_timeout}
    return AdapterRegistry(adapter_options=options)


__all__ = ["ADAPTER_MODULES", "AdapterRegistry", "create_default_registry"]
