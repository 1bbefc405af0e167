# src/sourcetrust/normalize/schema.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from sourcetrust.normalize.hash_utils import (
    DEFAULT_HASH_ALGORITHM,
    HashAlgorithmName,
    normalize_hash_algorithm_name,
)

FINGERPRINT_ALGORITHM_KEY = "fingerprintAlgorithm"
SERVICE_INDEX_KEY = "serviceIndex"


class CertificateTrustEntry(BaseModel):
    fingerprint: str = Field(..., description="Certificate hash fingerprint")
    subject_name: str = Field("", description="Certificate subject, e.g. 'CN=Contoso'")
    fingerprint_algorithm: HashAlgorithmName = Field(
        DEFAULT_HASH_ALGORITHM, description="Algorithm the fingerprint was computed with"
    )
    priority: int = Field(0, description="Ordering weight assigned by operator or store")

    @field_validator("fingerprint")
    @classmethod
    def validate_fingerprint(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("fingerprint must not be empty")
        if v.strip().lower() == SERVICE_INDEX_KEY.lower():
            raise ValueError(f"fingerprint must not be the reserved key '{SERVICE_INDEX_KEY}'")
        return v.strip()

    @field_validator("fingerprint_algorithm", mode="before")
    @classmethod
    def validate_fingerprint_algorithm(cls, v: Any) -> HashAlgorithmName:
        return normalize_hash_algorithm_name(v)

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v: Any) -> int:
        return 0 if v is None else v

    class Config:
        validate_assignment = True


class TrustedSource(BaseModel):
    source_name: str = Field(..., description="Package source name, case-insensitive")
    service_index: Optional[str] = Field(None, description="Trusted service index URL")
    certificates: List[CertificateTrustEntry] = Field(default_factory=list)

    @field_validator("source_name")
    @classmethod
    def validate_source_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("source_name must not be empty")
        return v

    def matches(self, name: Optional[str]) -> bool:
        """Case-insensitive comparison against another source name."""
        return name is not None and self.source_name.casefold() == name.casefold()

    def find_certificate(self, fingerprint: str) -> Optional[CertificateTrustEntry]:
        for cert in self.certificates:
            if cert.fingerprint == fingerprint:
                return cert
        return None

    class Config:
        validate_assignment = True


class SettingValue(BaseModel):
    """
    One nested key/value entry as exchanged with a settings store.

    The algorithm is kept as the raw token found in the store so that a
    read never fails on a value written by a newer or foreign tool; the
    registry decides how to interpret it.
    """

    key: str
    value: str
    priority: Optional[int] = None
    fingerprint_algorithm: Optional[str] = None

    def additional_data(self) -> Dict[str, str]:
        """Wire form of the side-channel metadata."""
        if self.fingerprint_algorithm is None:
            return {}
        return {FINGERPRINT_ALGORITHM_KEY: self.fingerprint_algorithm}

    @classmethod
    def from_additional_data(
        cls,
        key: str,
        value: str,
        priority: Optional[int] = None,
        additional_data: Optional[Dict[str, str]] = None,
    ) -> "SettingValue":
        algorithm = None
        for name, data in (additional_data or {}).items():
            if name.lower() == FINGERPRINT_ALGORITHM_KEY.lower():
                algorithm = data
                break
        return cls(key=key, value=value, priority=priority, fingerprint_algorithm=algorithm)

    class Config:
        frozen = True
