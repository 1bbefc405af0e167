# src/sourcetrust/core/__init__.py

"""
Configuration for sourcetrust.
"""

from .config import RegistryConfig, load_config

__all__ = [
    "RegistryConfig",
    "load_config",
]
