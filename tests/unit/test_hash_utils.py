# tests/unit/test_hash_utils.py

import base64
import hashlib

import pytest

from sourcetrust.normalize.hash_utils import (
    HashAlgorithmName,
    compute_fingerprint,
    compute_fingerprint_from_file,
    get_hash_algorithm_name,
    normalize_hash_algorithm_name,
)

DER_BYTES = b"\x30\x82\x01\x0a" + bytes(range(256)) * 4


def _pem(der: bytes) -> str:
    body = base64.b64encode(der).decode("ascii")
    lines = [body[i:i + 64] for i in range(0, len(body), 64)]
    return "-----BEGIN CERTIFICATE-----\n" + "\n".join(lines) + "\n-----END CERTIFICATE-----\n"


class TestAlgorithmNames:
    """Test parsing of hash algorithm tokens."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("SHA256", HashAlgorithmName.SHA256),
            ("sha384", HashAlgorithmName.SHA384),
            ("Sha512", HashAlgorithmName.SHA512),
            ("SHA-512", HashAlgorithmName.SHA512),
            ("  sha256 ", HashAlgorithmName.SHA256),
            (HashAlgorithmName.SHA384, HashAlgorithmName.SHA384),
        ],
    )
    def test_recognized_tokens(self, token, expected):
        assert get_hash_algorithm_name(token) == expected

    @pytest.mark.parametrize("token", [None, "", "MD5LEGACY", "SHA1", "unknown"])
    def test_unrecognized_tokens_return_none(self, token):
        assert get_hash_algorithm_name(token) is None

    def test_normalize_falls_back_to_sha256(self):
        """Unrecognized tokens never produce an unknown algorithm."""
        assert normalize_hash_algorithm_name("MD5LEGACY") == HashAlgorithmName.SHA256
        assert normalize_hash_algorithm_name(None) == HashAlgorithmName.SHA256
        assert normalize_hash_algorithm_name("sha512") == HashAlgorithmName.SHA512

    def test_normalize_logs_unrecognized_token(self, caplog):
        normalize_hash_algorithm_name("MD5LEGACY")
        assert "MD5LEGACY" in caplog.text


class TestFingerprints:
    """Test certificate fingerprint computation."""

    def test_der_bytes(self):
        expected = hashlib.sha256(DER_BYTES).hexdigest().upper()
        assert compute_fingerprint(DER_BYTES) == expected

    def test_other_algorithms(self):
        assert compute_fingerprint(DER_BYTES, HashAlgorithmName.SHA384) == (
            hashlib.sha384(DER_BYTES).hexdigest().upper()
        )
        assert compute_fingerprint(DER_BYTES, "sha512") == (
            hashlib.sha512(DER_BYTES).hexdigest().upper()
        )

    def test_pem_text_is_decoded(self):
        """PEM input fingerprints the same as its DER body."""
        assert compute_fingerprint(_pem(DER_BYTES)) == compute_fingerprint(DER_BYTES)

    def test_invalid_input_type(self):
        with pytest.raises(TypeError):
            compute_fingerprint(12345)

    def test_der_file_read_in_chunks(self, tmp_path):
        cert_file = tmp_path / "signer.cer"
        cert_file.write_bytes(DER_BYTES)

        result = compute_fingerprint_from_file(str(cert_file), chunk_size=100)

        assert result == hashlib.sha256(DER_BYTES).hexdigest().upper()

    def test_pem_file(self, tmp_path):
        cert_file = tmp_path / "signer.pem"
        cert_file.write_text(_pem(DER_BYTES), encoding="ascii")

        result = compute_fingerprint_from_file(str(cert_file), HashAlgorithmName.SHA384)

        assert result == hashlib.sha384(DER_BYTES).hexdigest().upper()
