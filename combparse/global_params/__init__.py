"""Global parameters module for combparse.

This module provides access to the backend registry and the settings read from the environment.
"""
from .config import global_config, GlobalConfig, BackendConfig, COMBPARSE_DEBUG
