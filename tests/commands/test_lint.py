"""Tests for the lint CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from erclint.cli import cli

_ERC20_ERRORS = """\
// SPDX-License-Identifier: MIT
pragma solidity ^0.8.20;

interface IERC20Errors {
    error ERC20InsufficientBalance(address sender, uint256 balance, uint256 needed);
    error ERC20InvalidSender(address sender);
    error ERC20InvalidReceiver(address receiver);
    error ERC20InsufficientAllowance(address spender, uint256 allowance, uint256 needed);
    error ERC20InvalidApprover(address approver);
    error ERC20InvalidSpender(address spender);
}
"""


@pytest.mark.usefixtures("_isolated_project")
class TestLintCommand:
    def test_clean_contract(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "IERC20Errors.sol").write_text(_ERC20_ERRORS)
        result = cli_runner.invoke(cli, ["lint", "IERC20Errors.sol"])
        assert result.exit_code == 0
        assert "6 declarations checked, no issues." in result.stdout
        assert "1 file read" in result.stdout

    def test_violations_exit_one(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "Token.sol").write_text("error ERC20InsufficientApproval(address, uint256);\n")
        result = cli_runner.invoke(cli, ["lint", "."])
        assert result.exit_code == 1
        assert "UNRECOGNIZED_SUBJECT" in result.stdout
        assert "Token.sol:1" in result.stdout

    def test_skipped_errors_warn_on_stderr(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "Token.sol").write_text("error Unauthorized(address caller);\n")
        (tmp_path / "errors.txt").write_text("ERC20InvalidSender(address)\n")
        result = cli_runner.invoke(cli, ["lint", "."])
        assert result.exit_code == 0
        assert "WARNING: Skipped 1 custom error outside the grammar" in result.stderr
        assert "WARNING" not in result.stdout

    def test_json_collisions_across_files(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "a.yaml").write_text("- InsufficientApproval(address, amount)\n")
        (tmp_path / "b.yaml").write_text("- InsufficientApproval(address, id)\n")
        result = cli_runner.invoke(cli, ["--json", "lint", "a.yaml", "b.yaml"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["meta"]["files"] == 2
        assert {i["code"] for i in data["data"]["issues"]} == {"COLLISION"}

    def test_no_sources(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "README.md").write_text("# nothing\n")
        result = cli_runner.invoke(cli, ["lint", "."])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "No source files found" in result.stderr

    def test_missing_path_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["lint", "missing.sol"])
        assert result.exit_code == 2

    def test_config_extends_vocabulary(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "erclint.toml").write_text(
            '[grammar]\ndomains = ["ERC4626"]\n\n[grammar.subjects]\nDeposit = ["Insufficient"]\n'
        )
        (tmp_path / "Vault.sol").write_text(
            "error ERC4626InsufficientDeposit(address owner, uint256 assets);\n"
        )
        result = cli_runner.invoke(cli, ["lint", "Vault.sol"])
        assert result.exit_code == 0, result.output

    def test_explicit_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "strict.toml").write_text("[grammar]\nrequire_domain = true\n")
        (tmp_path / "errors.txt").write_text("InvalidSender(address)\n")
        result = cli_runner.invoke(cli, ["-c", "strict.toml", "-q", "lint", "errors.txt"])
        assert result.exit_code == 1
        assert "UNRECOGNIZED_DOMAIN" in result.stdout
