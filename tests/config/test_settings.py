"""Tests for ErclintSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from erclint.config.settings import ErclintSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ERCLINT_CONFIG", "ERCLINT_VERBOSE", "ERCLINT_GRAMMAR__REQUIRE_DOMAIN"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ErclintSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.grammar.require_domain is False
        assert settings.lint.extensions == [".sol", ".yaml", ".yml", ".txt"]

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ErclintSettings.from_cli(project_root=tmp_path)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "erclint.toml").write_text(
            '[grammar]\ndomains = ["ERC4626"]\n\n[grammar.renames.ERC4626]\nBalance = "Shares"\n'
        )
        settings = ErclintSettings.from_cli(project_root=tmp_path)
        assert settings.grammar.domains == ["ERC4626"]
        assert settings.grammar.renames == {"ERC4626": {"Balance": "Shares"}}
        assert settings.config_path == tmp_path / "erclint.toml"

    def test_project_root_from_discovered_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "erclint.toml").write_text("")
        child = tmp_path / "contracts"
        child.mkdir()
        monkeypatch.chdir(child)
        settings = ErclintSettings.from_cli()
        assert settings.project_root.resolve() == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "conf" / "strict.toml"
        custom.parent.mkdir()
        custom.write_text("[lint]\nfail_on_warning = true\n")
        settings = ErclintSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.lint.fail_on_warning is True
        assert settings.config_path == custom

    def test_explicit_config_path_missing(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            ErclintSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "erclint.toml").write_text("[grammar\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ErclintSettings.from_cli(project_root=tmp_path)


class TestPriority:
    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = ErclintSettings.from_cli(
            project_root=tmp_path, json_output=True, quiet=True, verbose=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "erclint.toml").write_text("[grammar]\nrequire_domain = false\n")
        monkeypatch.setenv("ERCLINT_GRAMMAR__REQUIRE_DOMAIN", "true")
        settings = ErclintSettings.from_cli(project_root=tmp_path)
        assert settings.grammar.require_domain is True

    def test_cli_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ERCLINT_VERBOSE", "true")
        settings = ErclintSettings.from_cli(project_root=tmp_path, verbose=False)
        assert settings.verbose is False
