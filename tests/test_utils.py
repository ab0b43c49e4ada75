# tests/test_utils.py
"""Unit tests for configuration helpers in the `linetoggle.utils.utils` module."""

from pathlib import Path

import pytest

from linetoggle.utils import utils


def test_deep_merge() -> None:
    """Verify that `deep_merge` correctly merges nested dictionaries.

    This test ensures:
    - Existing values are preserved if not overridden.
    - Nested dictionaries are merged recursively.
    - Conflicting keys are overridden by values from the second dictionary.
    """
    base = {"a": 1, "b": {"x": 10, "y": 20}}
    override = {"b": {"y": 99, "z": 100}, "c": 3}
    result = utils.deep_merge(base, override)
    expected = {"a": 1, "b": {"x": 10, "y": 99, "z": 100}, "c": 3}
    assert result == expected
    assert base == {"a": 1, "b": {"x": 10, "y": 20}}


def test_load_config_defaults_without_user_file() -> None:
    config = utils.load_config()
    assert config == utils.DEFAULT_CONFIG
    # The caller gets its own copy.
    config["limits"]["max_batch_lines"] = 1
    assert utils.DEFAULT_CONFIG["limits"]["max_batch_lines"] == 512


def test_load_config_merges_user_file(tmp_path: Path) -> None:
    user_file = tmp_path / "config.toml"
    user_file.write_text('[indent]\nspaces = 2\n\n[backup]\nprefix = "bak_"\n', encoding="utf-8")

    config = utils.load_config(user_file)

    assert config["indent"]["spaces"] == 2
    assert config["backup"]["prefix"] == "bak_"
    assert config["backup"]["temp_prefix"] == "temp_toggle_"
    assert config["limits"] == utils.DEFAULT_CONFIG["limits"]


def test_load_config_from_env_var(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    user_file = tmp_path / "custom.toml"
    user_file.write_text("[limits]\nmax_range_lines = 10\n", encoding="utf-8")
    monkeypatch.setenv(utils.CONFIG_ENV_VAR, str(user_file))

    assert utils.load_config()["limits"]["max_range_lines"] == 10


def test_load_config_from_user_config_dir() -> None:
    config_dir = utils.get_user_config_dir()
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text("[comments]\ntolerate_indent = true\n", encoding="utf-8")

    config = utils.load_config()

    assert config["comments"]["tolerate_indent"] is True
    assert "rs" in config["comments"]["line"]["//"]


def test_load_config_invalid_toml_falls_back(tmp_path: Path) -> None:
    broken = tmp_path / "broken.toml"
    broken.write_text("[indent\nspaces = ", encoding="utf-8")
    assert utils.load_config(broken) == utils.DEFAULT_CONFIG


def test_load_environment_reads_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(f"{utils.DEBUG_ENV_VAR}=1\n", encoding="utf-8")

    assert utils.load_environment(env_file) is True
    assert utils.is_debug_enabled()
    monkeypatch.delenv(utils.DEBUG_ENV_VAR)


def test_load_environment_does_not_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(f"{utils.DEBUG_ENV_VAR}=yes\n", encoding="utf-8")
    monkeypatch.setenv(utils.DEBUG_ENV_VAR, "0")

    utils.load_environment(env_file)

    assert not utils.is_debug_enabled()


def test_load_environment_missing_file(tmp_path: Path) -> None:
    assert utils.load_environment(tmp_path / "absent.env") is False


@pytest.mark.parametrize(("value", "expected"), [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("", False)])
def test_is_debug_enabled(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv(utils.DEBUG_ENV_VAR, value)
    assert utils.is_debug_enabled() is expected
