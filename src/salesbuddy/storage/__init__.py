"""
Store registry for analysis persistence.

Maps backend names (from configuration) to their implementation classes.
Backends are lazily imported so the memory store never touches sqlite.

Supported backends:
- ``memory`` -- per-process list, lost on exit
- ``sqlite`` -- SQLite database at ``db_path``

Example:
    >>> from salesbuddy.storage import get_store
    >>> store = get_store("sqlite", {"db_path": "data/db/salesbuddy.db"})
    >>> store.list(limit=5)
"""

import importlib
from typing import Any, Dict, Optional

from salesbuddy.config import Config
from salesbuddy.errors import StoreError
from salesbuddy.storage.base import AnalysisStore


# ---------------------------------------------------------------------------
#  Store registry
# ---------------------------------------------------------------------------

_STORE_REGISTRY: Dict[str, str] = {
    "memory": "salesbuddy.storage.memory.InMemoryAnalysisStore",
    "sqlite": "salesbuddy.storage.sqlite.SqliteAnalysisStore",
}


def get_store(
    name: str,
    config: Optional[Dict[str, Any]] = None,
) -> AnalysisStore:
    """
    Get an instantiated store by name.

    Args:
        name: Backend name (e.g., "sqlite")
        config: Backend-specific configuration dictionary

    Returns:
        An initialized AnalysisStore instance

    Raises:
        StoreError: If the backend name is not found in the registry
    """
    if name not in _STORE_REGISTRY:
        available = ", ".join(sorted(_STORE_REGISTRY.keys()))
        raise StoreError(
            f"Unknown analysis store '{name}'. "
            f"Available stores: {available}"
        )

    class_path = _STORE_REGISTRY[name]
    module_path, class_name = class_path.rsplit(".", 1)

    module = importlib.import_module(module_path)
    store_class = getattr(module, class_name)

    return store_class(config or {})


def store_from_config(config: Config) -> AnalysisStore:
    """Build the store selected by ``Config.store_backend``."""
    return get_store(config.store_backend, {"db_path": config.db_path})


def list_stores() -> Dict[str, str]:
    """
    List all registered store names and their class paths.

    Returns:
        Dictionary mapping store name to fully qualified class path
    """
    return dict(_STORE_REGISTRY)


__all__ = [
    "AnalysisStore",
    "get_store",
    "list_stores",
    "store_from_config",
]
