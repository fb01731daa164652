"""Shared service-layer helper functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from erclint.domain.vocabulary import Vocabulary

if TYPE_CHECKING:
    from erclint.config.models import GrammarConfig


def vocabulary_from_config(grammar: GrammarConfig) -> Vocabulary:
    """Built-in vocabulary extended with the ``[grammar]`` tables."""
    return Vocabulary().extend(
        domains=grammar.domains,
        prefixes=grammar.prefixes,
        subjects=grammar.subjects,
        renames=grammar.renames,
        rename_prefixes=grammar.rename_prefixes,
    )


def plural(count: int, noun: str) -> str:
    """``plural(1, "error") -> "1 error"``, ``plural(2, "error") -> "2 errors"``."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
