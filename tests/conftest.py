"""Shared pytest fixtures for erclint tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from erclint.domain.declarations import ErrorDeclaration
from erclint.domain.signature import parse_params
from erclint.domain.vocabulary import Vocabulary
from erclint.services.validate import GrammarValidator


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vocabulary() -> Vocabulary:
    """The built-in EIP-6093 vocabulary."""
    return Vocabulary()


@pytest.fixture
def validator(vocabulary: Vocabulary) -> GrammarValidator:
    return GrammarValidator(vocabulary)


@pytest.fixture
def decl() -> Callable[..., ErrorDeclaration]:
    """Build a declaration from axes and a comma-separated parameter list.

    ``decl("ERC20", "Insufficient", "Balance", "address, amount, amount")``
    """

    def _build(
        domain: str | None,
        prefix: str,
        subject: str,
        params: str = "address",
        origin: str | None = None,
    ) -> ErrorDeclaration:
        return ErrorDeclaration(
            domain=domain,
            prefix=prefix,
            subject=subject,
            params=parse_params(params),
            origin=origin,
        )

    return _build


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp directory with no config in scope.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes. Tests that need the path can request ``tmp_path``
    directly (pytest deduplicates, so it is the same directory).
    """
    monkeypatch.delenv("ERCLINT_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
