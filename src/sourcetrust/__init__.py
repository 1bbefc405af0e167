# src/sourcetrust/__init__.py

"""
sourcetrust
Registry of certificates trusted to sign content from each package source.
"""

__version__ = "0.1.0"
__author__ = "sourcetrust Development Team"

# No direct exports from root; subpackages are accessed explicitly
# e.g., from sourcetrust.registry import TrustedSourceRegistry
