"""
Solving backends: the interfaces used by the parsers and their
implementations on top of Z3, PySAT and SymPy.
"""
from typing import Optional

from combparse.backends.base import CspBackend, PseudoBooleanBackend, SatBackend, SolverFactory
from combparse.global_params import global_config
from combparse.utils.exceptions import NoBackendAvailableError


def get_solver_factory(name: Optional[str] = None) -> SolverFactory:
    """
    Get the factory of a registered backend.

    :param name: "z3" or "pysat" (default: the configured default backend)
    :raises ValueError: if the name is unknown
    :raises NoBackendAvailableError: if the backend's library cannot be imported
    """
    name = name or global_config.default_backend
    if not global_config.is_backend_available(name):
        raise NoBackendAvailableError(f"Backend {name} is not available")

    # the backend modules import their library, so only load the one asked for
    if name == "z3":
        from combparse.backends.z3_backend import Z3SolverFactory
        return Z3SolverFactory()
    from combparse.backends.pysat_backend import PySATSolverFactory
    return PySATSolverFactory(global_config.pysat_solver)


__all__ = [
    "SatBackend",
    "PseudoBooleanBackend",
    "CspBackend",
    "SolverFactory",
    "get_solver_factory",
]
