# src/sourcetrust/normalize/__init__.py

"""
Value types for trusted sources.
Structured entities, the store-facing nested value, and hash algorithm helpers.
"""

from .hash_utils import (
    HashAlgorithmName,
    compute_fingerprint,
    get_hash_algorithm_name,
    normalize_hash_algorithm_name,
)
from .schema import CertificateTrustEntry, SettingValue, TrustedSource

__all__ = [
    "HashAlgorithmName",
    "CertificateTrustEntry",
    "SettingValue",
    "TrustedSource",
    "compute_fingerprint",
    "get_hash_algorithm_name",
    "normalize_hash_algorithm_name",
]
