"""Tests for the validate CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from erclint.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestValidateCommand:
    def test_conformant(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "validate",
                "ERC20InsufficientBalance(address sender, uint256 balance, uint256 needed)",
            ],
        )
        assert result.exit_code == 0
        assert "no issues" in result.stdout

    def test_renamed_subject_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate", "ERC721InvalidBalance(address owner)"])
        assert result.exit_code == 1
        assert "UNRECOGNIZED_SUBJECT" in result.stdout
        assert "Owner" in result.stdout

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "validate",
                "InsufficientApproval(address operator, uint256 amount)",
                "InsufficientApproval(address operator, uint256 tokenId)",
            ],
        )
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "validate"
        assert data["data"]["conformant"] is False
        assert [i["code"] for i in data["data"]["issues"]] == ["COLLISION", "COLLISION"]

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "validate", "ERC20InvalidSender(uint256 amount)"])
        assert result.exit_code == 1
        assert result.stdout.strip() == (
            "arg:1: MISSING_WHO First argument is amount, expected the acting address"
        )

    def test_malformed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "validate", "not a signature"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["data"]["issues"][0]["code"] == "MALFORMED_SIGNATURE"

    def test_duplicate_passes_by_default(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["validate", "ERC20InvalidSender(address)", "ERC20InvalidSender(address)"],
        )
        assert result.exit_code == 0
        assert "DUPLICATE" in result.stdout

    def test_fail_on_warning_from_config(self, cli_runner: CliRunner, tmp_path) -> None:
        (tmp_path / "erclint.toml").write_text("[lint]\nfail_on_warning = true\n")
        result = cli_runner.invoke(
            cli,
            ["validate", "ERC20InvalidSender(address)", "ERC20InvalidSender(address)"],
        )
        assert result.exit_code == 1

    def test_require_domain_from_env(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ERCLINT_GRAMMAR__REQUIRE_DOMAIN", "true")
        result = cli_runner.invoke(cli, ["-q", "validate", "InvalidSender(address)"])
        assert result.exit_code == 1
        assert "UNRECOGNIZED_DOMAIN" in result.stdout

    def test_requires_arguments(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate"])
        assert result.exit_code == 2

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate", "--examples"])
        assert result.exit_code == 0
        assert "erclint validate" in result.stdout
