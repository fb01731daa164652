"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, erclint.toml only contains
overrides. A project using the stock EIP-6093 vocabulary needs no
config file at all. Grammar tables extend the built-in vocabulary;
they never remove from it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GrammarConfig(BaseModel):
    """[grammar] section.

    Example::

        [grammar]
        domains = ["ERC4626"]
        prefixes = ["Exceeded"]
        require_domain = true

        [grammar.subjects]
        Deposit = ["Exceeded"]

        [grammar.renames.ERC4626]
        Balance = "Shares"
    """

    model_config = {"frozen": True}

    domains: list[str] = Field(default_factory=list)
    prefixes: list[str] = Field(default_factory=list)
    subjects: dict[str, list[str]] = Field(default_factory=dict)
    renames: dict[str, dict[str, str]] = Field(default_factory=dict)
    rename_prefixes: dict[str, list[str]] = Field(default_factory=dict)
    require_domain: bool = False


class LintConfig(BaseModel):
    """[lint] section."""

    model_config = {"frozen": True}

    fail_on_warning: bool = False
    extensions: list[str] = Field(default_factory=lambda: [".sol", ".yaml", ".yml", ".txt"])


class ErclintConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    grammar: GrammarConfig = Field(default_factory=GrammarConfig)
    lint: LintConfig = Field(default_factory=LintConfig)
