"""Backend registry and run-time settings for combparse.

This module records which solving backends can be used (that is, whose
underlying Python library is importable) and the settings read from the
environment when the package is first imported.
"""
import importlib.util
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Debug flag - can be set via environment variable COMBPARSE_DEBUG
COMBPARSE_DEBUG = os.environ.get("COMBPARSE_DEBUG", "False").lower() in ("true", "1", "yes")

DEFAULT_BACKEND = "z3"
DEFAULT_PYSAT_SOLVER = "cd"  # cadical in PySAT
DEFAULT_CHUNK_SIZE = 65536


class BackendConfig:
    """Configuration container for a solving backend.

    Attributes:
        name: The name of the backend.
        module_names: The Python modules the backend is built on.
        is_available: Whether all of them can be imported.
    """
    def __init__(self, name: str, *module_names: str):
        self.name = name
        self.module_names = module_names
        self.is_available: bool = False

    def __repr__(self) -> str:
        status = "available" if self.is_available else "unavailable"
        return f"BackendConfig(name={self.name}, modules={','.join(self.module_names)}, status={status})"


class BackendRegistry(type):
    """Metaclass implementing singleton pattern for GlobalConfig."""
    _instance = None

    def __call__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class GlobalConfig(metaclass=BackendRegistry):
    """Global configuration manager for the solving backends.

    Attributes:
        BACKENDS: Dictionary mapping backend names to their configurations.
        default_backend: Backend used when ``parse`` is given no factory.
        pysat_solver: Name of the PySAT oracle used by the PySAT backends.
        chunk_size: Number of characters handed to the XML parser at a time.
    """
    BACKENDS = {
        "z3": BackendConfig("z3", "z3"),
        # constraint networks are kept symbolically with sympy
        "pysat": BackendConfig("pysat", "pysat", "sympy"),
    }

    def __init__(self):
        self.default_backend: str = os.environ.get("COMBPARSE_BACKEND", DEFAULT_BACKEND)
        self.pysat_solver: str = os.environ.get("COMBPARSE_PYSAT_SOLVER", DEFAULT_PYSAT_SOLVER)
        self.chunk_size: int = int(os.environ.get("COMBPARSE_CHUNK_SIZE", DEFAULT_CHUNK_SIZE))
        if self.chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive: {self.chunk_size}")
        self._locate_all_backends()

    def _locate_backend(self, backend_config: BackendConfig) -> None:
        """Check whether the modules behind a backend can be imported."""
        for module_name in backend_config.module_names:
            if importlib.util.find_spec(module_name) is None:
                logger.warning("Could not locate %s module for the %s backend",
                               module_name, backend_config.name)
                return
        backend_config.is_available = True

    def _locate_all_backends(self) -> None:
        for backend_config in self.BACKENDS.values():
            self._locate_backend(backend_config)

    def is_backend_available(self, backend_name: str) -> bool:
        """Check if a backend can be used.

        Args:
            backend_name: Name of the backend to check.

        Returns:
            True if the backend is available, False otherwise.

        Raises:
            ValueError: If the backend name is unknown.
        """
        if backend_name not in self.BACKENDS:
            raise ValueError(f"Unknown backend: {backend_name}")
        return self.BACKENDS[backend_name].is_available

    def set_default_backend(self, backend_name: str) -> None:
        """Select the backend used when no factory is given.

        Raises:
            ValueError: If the backend name is unknown.
        """
        if backend_name not in self.BACKENDS:
            raise ValueError(f"Unknown backend: {backend_name}")
        self.default_backend = backend_name

    def get_backends_config(self) -> Dict[str, Dict[str, Any]]:
        """Get a summary of every registered backend."""
        return {
            name: {"modules": list(cfg.module_names), "available": cfg.is_available}
            for name, cfg in self.BACKENDS.items()
        }


global_config = GlobalConfig()
