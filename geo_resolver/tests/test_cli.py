"""
Tests for the CLI resolve command.
Uses a JSON Lines reference file; no database required.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from geo_resolver import __main__ as cli
from geo_resolver.config import ReferenceConfig, Settings

SAMPLE = Path(__file__).resolve().parents[2] / "data" / "reference_sample.jsonl"


@pytest.fixture
def reference_file(tmp_path):
    path = tmp_path / "reference.jsonl"
    shutil.copy(SAMPLE, path)
    return path


class TestResolveCommand:
    def test_explicit_file(self, reference_file, capsys):
        cli._resolve_once("г Майкоп", reference_file)
        body = json.loads(capsys.readouterr().out)
        assert body["found"] is True
        assert body["city"]["name"] == "Майкоп"

    def test_falls_back_to_configured_file(self, reference_file, monkeypatch, capsys):
        settings = Settings(reference=ReferenceConfig(reference_file=str(reference_file)))
        monkeypatch.setattr(cli, "get_settings", lambda: settings)

        def no_database():
            raise AssertionError("Postgres must not be used when a reference file is configured")

        monkeypatch.setattr(cli, "_load_from_db", no_database)

        cli._resolve_once("живу в Адыгее", None)
        body = json.loads(capsys.readouterr().out)
        assert body["match_kind"] == "region"
        assert body["postal_code"] == "385000"
