"""Grammar vocabulary: domains, prefixes, subjects, and per-domain renames.

The three axes of ``<Domain><ErrorPrefix><Subject>`` plus the rename
table form the whole configuration surface of the grammar. Defaults
follow the final EIP-6093 draft:

- ERC20 renames ``Approval`` to ``Allowance`` and ``Operator`` to ``Spender``.
- ERC721 renames ``Balance`` to ``Owner`` (an actor, so it takes ``Invalid``).
- ERC1155 uses the canonical subjects unchanged.

INVARIANT: A renamed canonical subject is not a term of the renaming
domain, and a rename term is a term of no other domain.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from erclint.domain.declarations import SignatureError
from erclint.domain.types import ErrorPrefix, Subject

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DEFAULT_DOMAINS: tuple[str, ...] = ("ERC20", "ERC721", "ERC1155")

DEFAULT_PREFIXES: tuple[str, ...] = tuple(p.value for p in ErrorPrefix)

DEFAULT_SUBJECTS: dict[str, frozenset[str]] = {
    Subject.SENDER.value: frozenset({ErrorPrefix.INVALID.value}),
    Subject.RECEIVER.value: frozenset({ErrorPrefix.INVALID.value}),
    Subject.BALANCE.value: frozenset({ErrorPrefix.INSUFFICIENT.value}),
    Subject.APPROVER.value: frozenset({ErrorPrefix.INVALID.value}),
    Subject.OPERATOR.value: frozenset({ErrorPrefix.INVALID.value}),
    Subject.APPROVAL.value: frozenset({ErrorPrefix.INSUFFICIENT.value}),
}

DEFAULT_RENAMES: dict[str, dict[str, str]] = {
    "ERC20": {Subject.APPROVAL.value: "Allowance", Subject.OPERATOR.value: "Spender"},
    "ERC721": {Subject.BALANCE.value: "Owner"},
}

# Rename terms whose meaning changes the prefixes they pair with.
DEFAULT_RENAME_PREFIXES: dict[str, frozenset[str]] = {
    "Owner": frozenset({ErrorPrefix.INVALID.value}),
}


@dataclass(frozen=True)
class Vocabulary:
    """Recognized values for every grammar axis.

    Attributes:
        domains: Token-standard identifiers usable as name prefixes.
        prefixes: Recognized error prefixes.
        subjects: Canonical subject -> prefixes it may be combined with.
        renames: Domain -> {canonical subject -> domain-specific term}.
        rename_prefixes: Term -> prefixes, overriding the canonical set.
    """

    domains: tuple[str, ...] = DEFAULT_DOMAINS
    prefixes: tuple[str, ...] = DEFAULT_PREFIXES
    subjects: Mapping[str, frozenset[str]] = field(default_factory=lambda: dict(DEFAULT_SUBJECTS))
    renames: Mapping[str, Mapping[str, str]] = field(
        default_factory=lambda: {d: dict(table) for d, table in DEFAULT_RENAMES.items()}
    )
    rename_prefixes: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: dict(DEFAULT_RENAME_PREFIXES)
    )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def extend(
        self,
        *,
        domains: Iterable[str] = (),
        prefixes: Iterable[str] = (),
        subjects: Mapping[str, Iterable[str]] | None = None,
        renames: Mapping[str, Mapping[str, str]] | None = None,
        rename_prefixes: Mapping[str, Iterable[str]] | None = None,
    ) -> Vocabulary:
        """Return a new vocabulary with the given additions merged in.

        Existing entries are kept; a subject or rename given here replaces
        the entry of the same name.
        """
        merged_subjects = dict(self.subjects)
        for name, allowed in (subjects or {}).items():
            merged_subjects[name] = frozenset(allowed)

        merged_renames = {d: dict(table) for d, table in self.renames.items()}
        for domain, table in (renames or {}).items():
            merged_renames.setdefault(domain, {}).update(table)

        merged_rename_prefixes = dict(self.rename_prefixes)
        for term, allowed in (rename_prefixes or {}).items():
            merged_rename_prefixes[term] = frozenset(allowed)

        return Vocabulary(
            domains=_dedupe((*self.domains, *domains)),
            prefixes=_dedupe((*self.prefixes, *prefixes)),
            subjects=merged_subjects,
            renames=merged_renames,
            rename_prefixes=merged_rename_prefixes,
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def is_domain(self, domain: str) -> bool:
        return domain in self.domains

    def is_prefix(self, prefix: str) -> bool:
        return prefix in self.prefixes

    def terms_for(self, domain: str | None) -> dict[str, str]:
        """Map each subject term spelled under *domain* to its canonical subject.

        Unknown or omitted domains see the canonical terms only.
        """
        table = self.renames.get(domain, {}) if domain and self.is_domain(domain) else {}
        return {table.get(canonical, canonical): canonical for canonical in self.subjects}

    def resolve_subject(self, domain: str | None, term: str) -> str | None:
        """Return the canonical subject *term* stands for under *domain*, or None."""
        return self.terms_for(domain).get(term)

    def allowed_prefixes(self, domain: str | None, term: str) -> frozenset[str]:
        canonical = self.resolve_subject(domain, term)
        if canonical is None:
            return frozenset()
        if term != canonical and term in self.rename_prefixes:
            return self.rename_prefixes[term]
        return self.subjects[canonical]

    def defining_domains(self, term: str) -> list[str]:
        """Domains under which *term* is a recognized subject."""
        return [d for d in self.domains if term in self.terms_for(d)]

    # ------------------------------------------------------------------
    # Name splitting
    # ------------------------------------------------------------------

    def split_name(self, identifier: str) -> tuple[str | None, str, str]:
        """Split an error identifier into ``(domain, prefix, subject)``.

        Recognized domains and prefixes match longest-first, and a domain
        only counts when a recognized prefix follows it. Otherwise the name
        splits at the first recognized prefix, so ``ERC2098InvalidSender``
        yields the unknown domain ``ERC2098``. A known domain with an
        unknown prefix splits at a known subject term suffix. Raises
        :class:`SignatureError` otherwise.

        Examples:
            >>> Vocabulary().split_name("ERC20InsufficientAllowance")
            ('ERC20', 'Insufficient', 'Allowance')
            >>> Vocabulary().split_name("InvalidSender")
            (None, 'Invalid', 'Sender')
        """
        if not _IDENTIFIER.match(identifier):
            msg = f"Not a valid identifier: {identifier!r}"
            raise SignatureError(msg)

        domain = _longest_prefix(identifier, self.domains)
        rest = identifier[len(domain) :] if domain else identifier

        prefix = _longest_prefix(rest, self.prefixes)
        if prefix:
            return domain, prefix, rest[len(prefix) :]

        for idx in range(1, len(identifier)):
            prefix = _longest_prefix(identifier[idx:], self.prefixes)
            if prefix:
                return identifier[:idx], prefix, identifier[idx + len(prefix) :]

        if domain:
            for term in sorted(self._all_terms(), key=len, reverse=True):
                if rest.endswith(term) and len(rest) > len(term):
                    return domain, rest[: -len(term)], term

        msg = f"{identifier!r} does not match <Domain><ErrorPrefix><Subject>"
        raise SignatureError(msg)

    def _all_terms(self) -> set[str]:
        terms = set(self.subjects)
        for table in self.renames.values():
            terms.update(table.values())
        return terms

    def to_dict(self) -> dict[str, object]:
        return {
            "domains": list(self.domains),
            "prefixes": list(self.prefixes),
            "subjects": {name: sorted(allowed) for name, allowed in self.subjects.items()},
            "renames": {d: dict(table) for d, table in self.renames.items() if table},
            "terms": {d: sorted(self.terms_for(d)) for d in self.domains},
        }


def _longest_prefix(text: str, candidates: Iterable[str]) -> str | None:
    """Longest candidate that *text* starts with, leaving a non-empty remainder."""
    best: str | None = None
    for candidate in candidates:
        if text.startswith(candidate) and len(text) > len(candidate):
            if best is None or len(candidate) > len(best):
                best = candidate
    return best


def _dedupe(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))
