"""Tests for engine settings."""

import pytest
from pydantic import ValidationError

from ledger_cashflow.config import EngineSettings, load_settings


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings()
        assert settings == EngineSettings()
        assert settings.reconciliation_tolerance == 0.01
        assert settings.cash_total_markers == ["total bank", "total cash"]
        assert settings.combine_interest_dividend is True
        assert settings.rule_table == "default"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "rule_table: legacy\n"
            "reconciliation_tolerance: 1.5\n"
            "cash_total_markers: [total checking]\n"
            "combine_interest_dividend: false\n",
            encoding="utf-8",
        )
        settings = load_settings(path)
        assert settings.rule_table == "legacy"
        assert settings.reconciliation_tolerance == 1.5
        assert settings.cash_total_markers == ["total checking"]
        assert settings.combine_interest_dividend is False

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == EngineSettings()

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("tolerance: 1\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_settings(path)

    def test_negative_tolerance_rejected(self):
        with pytest.raises(ValidationError):
            EngineSettings(reconciliation_tolerance=-1)
