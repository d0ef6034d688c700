"""Tests for pydantic-settings-backed codec configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from packages.service_errors.config import load_settings


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop any ambient SERVICE_ERRORS_ variables."""
    for key in (
        "SERVICE_ERRORS_LOGGING__LEVEL",
        "SERVICE_ERRORS_CODEC__MAX_CAUSE_DEPTH",
        "SERVICE_ERRORS_CODEC__DEPTH_POLICY",
    ):
        monkeypatch.delenv(key, raising=False)


def _write_config(path: Path) -> Path:
    path.write_text(
        "\n".join(
            [
                "logging:",
                "  level: WARNING",
                "  json_output: false",
                "codec:",
                "  max_cause_depth: 8",
                "  depth_policy: truncate",
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_load_settings_uses_model_defaults_when_sources_missing(tmp_path: Path) -> None:
    """Settings should fall back to model defaults when env and YAML are absent."""
    settings = load_settings(config_path=tmp_path / "service-errors.yaml")

    assert settings.logging.level == "INFO"
    assert settings.logging.json_output is True
    assert settings.logging.service == "service-errors"
    assert settings.codec.max_cause_depth == 32
    assert settings.codec.depth_policy == "reject"


def test_load_settings_reads_yaml_file(tmp_path: Path) -> None:
    """Values present in the YAML file should replace model defaults."""
    config_file = _write_config(tmp_path / "service-errors.yaml")

    settings = load_settings(config_path=config_file)

    assert settings.logging.level == "WARNING"
    assert settings.logging.json_output is False
    assert settings.codec.max_cause_depth == 8
    assert settings.codec.depth_policy == "truncate"


def test_load_settings_uses_precedence_cascade(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Init params should override env, env should override YAML, then defaults."""
    config_file = _write_config(tmp_path / "service-errors.yaml")
    monkeypatch.setenv("SERVICE_ERRORS_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("SERVICE_ERRORS_CODEC__MAX_CAUSE_DEPTH", "4")

    settings = load_settings(
        cli_params={"logging": {"level": "DEBUG"}},
        config_path=config_file,
    )

    assert settings.logging.level == "DEBUG"
    assert settings.codec.max_cause_depth == 4
    assert settings.codec.depth_policy == "truncate"
    assert settings.logging.json_output is False


def test_load_settings_rejects_non_positive_depth(tmp_path: Path) -> None:
    """The cause depth limit must be a positive integer."""
    with pytest.raises(ValidationError):
        load_settings(
            cli_params={"codec": {"max_cause_depth": 0}},
            config_path=tmp_path / "service-errors.yaml",
        )


def test_load_settings_rejects_unknown_depth_policy(tmp_path: Path) -> None:
    """Only the reject and truncate policies are accepted."""
    with pytest.raises(ValidationError):
        load_settings(
            cli_params={"codec": {"depth_policy": "ignore"}},
            config_path=tmp_path / "service-errors.yaml",
        )
