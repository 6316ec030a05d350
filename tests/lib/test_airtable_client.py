"""Tests for the Airtable store helpers that do not need network access."""

import pytest

from lib import airtable_client, config
from lib.airtable_client import StatusStore, match_formula
from utils.errors import AirtableError, ConfigError


def test_match_formula_builds_exact_match() -> None:
    assert match_formula("Intake ID", "DATA COE - 10035") == "{Intake ID} = 'DATA COE - 10035'"


def test_match_formula_escapes_single_quotes() -> None:
    assert match_formula("Intake ID", "O'Brien") == "{Intake ID} = 'O\\'Brien'"


def test_from_env_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "AIRTABLE_API_KEY", None)
    monkeypatch.setattr(config, "AIRTABLE_BASE_ID", "appBase")

    with pytest.raises(ConfigError):
        StatusStore.from_env()


def test_safe_table_call_wraps_failures_with_table_context() -> None:
    class BrokenTable:
        name = "Status Notes"

        def all(self, **kwargs):
            raise RuntimeError("422 Unprocessable Entity")

    with pytest.raises(AirtableError, match="Status Notes.all"):
        airtable_client._safe_table_call(BrokenTable(), "all", formula="TRUE()")
