# tests/integration/test_trusted_sources_cli.py

import hashlib
from pathlib import Path

import pytest
import yaml

from scripts.trusted_sources import main
from sourcetrust.normalize.hash_utils import HashAlgorithmName
from sourcetrust.registry.provider import TrustedSourceRegistry
from sourcetrust.settings.yaml_store import YamlSettingsStore


class TestTrustedSourcesCli:
    """End-to-end tests of the command line against a YAML settings file."""

    @pytest.fixture
    def settings_file(self, tmp_path):
        return tmp_path / "config" / "trusted_sources.yaml"

    @pytest.fixture
    def run(self, tmp_path, settings_file, monkeypatch):
        monkeypatch.delenv("SOURCETRUST_SETTINGS_FILE", raising=False)
        monkeypatch.delenv("SOURCETRUST_LOG_LEVEL", raising=False)

        def _run(*args):
            return main(
                [
                    "--config",
                    str(tmp_path / "no_config.yaml"),
                    "--settings-file",
                    str(settings_file),
                    *args,
                ]
            )

        return _run

    @pytest.fixture
    def registry(self, settings_file):
        return TrustedSourceRegistry(YamlSettingsStore(settings_file))

    def test_add_and_list(self, run, registry, capsys):
        assert run(
            "add", "nuget.org",
            "--fingerprint", "AA11",
            "--subject", "CN=Test",
            "--service-index", "https://api.nuget.org/v3/index.json",
        ) == 0

        source = registry.load_one("nuget.org")
        assert source.service_index == "https://api.nuget.org/v3/index.json"
        assert source.certificates[0].fingerprint == "AA11"

        assert run("list") == 0
        out = capsys.readouterr().out
        assert "nuget.org" in out
        assert "SHA256 AA11 CN=Test" in out

    def test_add_certificate_file(self, run, registry, tmp_path):
        der = b"\x30\x82\x00\x10certificate-bytes"
        cert_file = tmp_path / "signer.cer"
        cert_file.write_bytes(der)

        assert run(
            "add", "feedA",
            "--certificate-file", str(cert_file),
            "--subject", "CN=Contoso",
            "--algorithm", "SHA512",
        ) == 0

        cert = registry.load_one("feedA").certificates[0]
        assert cert.fingerprint == hashlib.sha512(der).hexdigest().upper()
        assert cert.fingerprint_algorithm == HashAlgorithmName.SHA512

    def test_add_keeps_existing_priority(self, run, registry):
        run("add", "feedA", "--fingerprint", "AA11", "--subject", "CN=Test", "--priority", "5")
        run("add", "feedA", "--fingerprint", "AA11", "--subject", "CN=Renamed", "--priority", "9")
        run("add", "FEEDA", "--fingerprint", "BB22", "--subject", "CN=Second", "--priority", "2")

        snapshot = registry.load_all()
        assert snapshot.names() == ["feedA"]
        certs = {c.fingerprint: (c.subject_name, c.priority) for c in snapshot.find("feedA").certificates}
        assert certs == {"AA11": ("CN=Renamed", 5), "BB22": ("CN=Second", 2)}

    def test_show_missing_source(self, run):
        assert run("show", "nowhere") == 1

    def test_remove(self, run, registry, settings_file):
        run("add", "feedA", "--fingerprint", "AA11", "--subject", "CN=A")
        run("add", "feedB", "--fingerprint", "BB22", "--subject", "CN=B")

        assert run("remove", "FeedA") == 0
        assert run("remove", "FeedA") == 0

        data = yaml.safe_load(Path(settings_file).read_text(encoding="utf-8"))
        assert list(data["trustedSources"]) == ["feedB"]

    def test_malformed_settings_file(self, run, settings_file):
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text("trustedSources: [unclosed\n", encoding="utf-8")

        assert run("list") == 1
