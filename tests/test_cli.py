"""Tests for the cratefind command line entry point."""

import json
import logging
from unittest.mock import patch

import pytest

from constants import ExitCodes
from cratefind import main

CARGO_TOML = """
[package]
name = "demo"
version = "0.1.0"

[dependencies]
serde = "1.0"
futures03 = { package = "futures", version = "0.3" }

[dev-dependencies]
futures = "0.1"

[build-dependencies]
cc = "1"
"""


@pytest.fixture(autouse=True)
def _quiet_logging():
    with patch("cratefind.configure_logging"):
        yield


@pytest.fixture
def manifest_file(tmp_path, monkeypatch):
    path = tmp_path / "Cargo.toml"
    path.write_text(CARGO_TOML, encoding="utf-8")
    monkeypatch.setenv("CARGO_MANIFEST_DIR", str(tmp_path))
    monkeypatch.delenv("CRATEFIND_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return path


class TestMainOutput:
    """Test what main() prints."""

    def test_prints_identifier(self, manifest_file, capsys):
        assert main(["futures"]) == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out == "futures03\n"

    def test_prints_original_name(self, manifest_file, capsys):
        assert main(["futures03", "--original"]) == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out == "futures\n"

    def test_json_output(self, manifest_file, capsys):
        assert main(["futures", "--json"]) == ExitCodes.SUCCESS.value
        data = json.loads(capsys.readouterr().out)
        assert data == {"name": "futures", "version": "0.3", "key": "futures03", "ident": "futures03"}

    def test_all_matches(self, manifest_file, capsys):
        assert main(["futures", "--all", "--original"]) == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out == "futures\nfutures\n"

    def test_alternation_first_declared_wins(self, manifest_file, capsys):
        assert main(["cc", "serde"]) == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out == "serde\n"

    def test_explicit_manifest_path(self, tmp_path, monkeypatch, capsys):
        monkeypatch.delenv("CARGO_MANIFEST_DIR", raising=False)
        monkeypatch.delenv("CRATEFIND_CONFIG", raising=False)
        path = tmp_path / "Cargo.toml"
        path.write_text('[dependencies]\nmy-core = "0.1"\n', encoding="utf-8")
        assert main(["my-core", "-m", str(path)]) == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out == "my_core\n"


class TestMainSelectors:
    """Test --dependencies."""

    def test_build_excluded_by_default(self, manifest_file, capsys, caplog):
        with caplog.at_level(logging.WARNING):
            assert main(["cc"]) == ExitCodes.NOT_FOUND.value
        assert capsys.readouterr().out == ""
        assert "cc" in caplog.text

    def test_build_selector(self, manifest_file, capsys):
        assert main(["cc", "-d", "build"]) == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out == "cc\n"

    def test_build_selector_covers_target_tables(self, tmp_path, monkeypatch, capsys):
        monkeypatch.delenv("CRATEFIND_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "Cargo.toml"
        path.write_text("[target.'cfg(windows)'.build-dependencies]\nembed-resource = \"2\"\n", encoding="utf-8")
        assert main(["embed-resource", "-m", str(path), "-d", "build"]) == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out == "embed_resource\n"
        assert main(["embed-resource", "-m", str(path), "-d", "build+no-target"]) == ExitCodes.NOT_FOUND.value

    def test_dev_selector(self, manifest_file, capsys):
        assert main(["futures", "-d", "dev", "--json"]) == ExitCodes.SUCCESS.value
        assert json.loads(capsys.readouterr().out)["version"] == "0.1"

    def test_unknown_selector(self, manifest_file, caplog):
        with caplog.at_level(logging.ERROR):
            assert main(["cc", "-d", "optional"]) == ExitCodes.FILE_ERROR.value
        assert "optional" in caplog.text


class TestMainErrors:
    """Test error exit codes."""

    def test_missing_manifest_dir(self, monkeypatch, caplog):
        monkeypatch.delenv("CARGO_MANIFEST_DIR", raising=False)
        monkeypatch.delenv("CRATEFIND_CONFIG", raising=False)
        with caplog.at_level(logging.ERROR):
            assert main(["serde"]) == ExitCodes.FILE_ERROR.value
        assert "CARGO_MANIFEST_DIR" in caplog.text

    def test_malformed_manifest(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CRATEFIND_CONFIG", raising=False)
        path = tmp_path / "Cargo.toml"
        path.write_text('[dependencies]\nalias = { package = "" }\n', encoding="utf-8")
        assert main(["alias", "-m", str(path)]) == ExitCodes.FILE_ERROR.value

    def test_logfile(self, manifest_file, tmp_path):
        log_path = tmp_path / "cratefind.log"
        root = logging.getLogger()
        before = list(root.handlers)
        try:
            assert main(["serde", "--logfile", str(log_path)]) == ExitCodes.SUCCESS.value
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
        assert log_path.exists()
