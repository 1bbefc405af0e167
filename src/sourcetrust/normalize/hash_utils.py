# src/sourcetrust/normalize/hash_utils.py

import base64
import hashlib
import logging
import re
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)

_PEM_PATTERN = re.compile(
    rb"-----BEGIN CERTIFICATE-----(.+?)-----END CERTIFICATE-----", re.DOTALL
)


class HashAlgorithmName(str, Enum):
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"


DEFAULT_HASH_ALGORITHM = HashAlgorithmName.SHA256

_HASHLIB_NAMES = {
    HashAlgorithmName.SHA256: "sha256",
    HashAlgorithmName.SHA384: "sha384",
    HashAlgorithmName.SHA512: "sha512",
}


def get_hash_algorithm_name(token: Optional[str]) -> Optional[HashAlgorithmName]:
    """
    Parse a hash algorithm token.

    Args:
        token: Algorithm name as stored or typed by a user, e.g. "sha384"
            or "SHA-512". Comparison is case-insensitive.

    Returns:
        The matching HashAlgorithmName, or None when the token is empty
        or not a supported algorithm.

    Examples:
        >>> get_hash_algorithm_name("sha-384")
        <HashAlgorithmName.SHA384: 'SHA384'>

        >>> get_hash_algorithm_name("MD5LEGACY") is None
        True
    """
    if isinstance(token, HashAlgorithmName):
        return token
    if not token or not isinstance(token, str):
        return None

    candidate = token.strip().upper().replace("-", "")
    try:
        return HashAlgorithmName(candidate)
    except ValueError:
        return None


def normalize_hash_algorithm_name(token: Optional[str]) -> HashAlgorithmName:
    """Parse an algorithm token, falling back to SHA256 for anything unrecognized."""
    algorithm = get_hash_algorithm_name(token)
    if algorithm is None:
        if token:
            logger.warning(
                f"Unrecognized fingerprint algorithm '{token}', using {DEFAULT_HASH_ALGORITHM.value}"
            )
        return DEFAULT_HASH_ALGORITHM
    return algorithm


def _new_hash(algorithm: Union[HashAlgorithmName, str]):
    return hashlib.new(_HASHLIB_NAMES[normalize_hash_algorithm_name(algorithm)])


def _pem_to_der(data: bytes) -> bytes:
    match = _PEM_PATTERN.search(data)
    if not match:
        return data
    return base64.b64decode(b"".join(match.group(1).split()))


def compute_fingerprint(
    data: Union[bytes, str],
    algorithm: Union[HashAlgorithmName, str] = DEFAULT_HASH_ALGORITHM,
) -> str:
    """
    Compute the fingerprint of a certificate.

    Args:
        data: DER or PEM encoded certificate. Strings are treated as PEM text.
        algorithm: Hash algorithm to fingerprint with (default: SHA256)

    Returns:
        Upper-case hexadecimal digest.
    """
    if isinstance(data, str):
        data = data.encode("ascii")
    elif not isinstance(data, bytes):
        raise TypeError("Input must be bytes or str")

    digest = _new_hash(algorithm)
    digest.update(_pem_to_der(data))
    return digest.hexdigest().upper()


def compute_fingerprint_from_file(
    file_path: str,
    algorithm: Union[HashAlgorithmName, str] = DEFAULT_HASH_ALGORITHM,
    chunk_size: int = 65536,
) -> str:
    """
    Compute the fingerprint of a certificate file.

    DER files are hashed incrementally. PEM files are decoded first, since
    the fingerprint is defined over the DER bytes.

    Args:
        file_path: Path to .cer/.crt/.pem file
        algorithm: Hash algorithm to fingerprint with (default: SHA256)
        chunk_size: Bytes to read at a time (default: 64KB)

    Returns:
        Upper-case hexadecimal digest.
    """
    with open(file_path, "rb") as f:
        head = f.read(chunk_size)
        if b"-----BEGIN" in head:
            return compute_fingerprint(head + f.read(), algorithm)

        digest = _new_hash(algorithm)
        digest.update(head)
        for chunk in iter(lambda: f.read(chunk_size), b""):
            digest.update(chunk)
    return digest.hexdigest().upper()
