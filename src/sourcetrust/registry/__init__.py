# src/sourcetrust/registry/__init__.py

"""
Trusted source registry.
Reconciles trusted sources against the settings store.
"""

from .provider import TrustedSourceRegistry
from .snapshot import RegistrySnapshot

__all__ = [
    "RegistrySnapshot",
    "TrustedSourceRegistry",
]
