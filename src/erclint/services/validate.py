"""GrammarValidator: conformance of declarations to the naming grammar.

Checks follow the linter pattern: every rule runs and contributes
violations, in a fixed order (domain, prefix, subject, prefix/subject
consistency, argument order). Collision detection runs across a set of
declarations in :meth:`GrammarValidator.check_all`.

Validation is pure. Nothing here performs I/O or mutates its input.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, Field

from erclint.domain.declarations import ErrorDeclaration, Parameter
from erclint.domain.types import ParamKind, ViolationCode
from erclint.domain.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class Violation(BaseModel):
    """One broken grammar rule."""

    model_config = {"frozen": True}

    code: ViolationCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class Verdict(BaseModel):
    """Conformance verdict for one declaration."""

    model_config = {"frozen": True}

    declaration: ErrorDeclaration
    violations: list[Violation] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def codes(self) -> list[ViolationCode]:
        return [v.code for v in self.violations]


# ---------------------------------------------------------------------------
# Argument ordering
# ---------------------------------------------------------------------------


def check_order(params: Sequence[Parameter]) -> list[Violation]:
    """Check ``who [, what [, why...]] [, itemId]`` ordering.

    - ``who`` is a leading address and is required.
    - An item id may appear only in the final position.
    - Between them, a quantity (``what``) may not follow address context
      (``why``).
    """
    kinds = [p.kind for p in params]
    if not kinds:
        return [
            Violation(
                code=ViolationCode.MISSING_WHO,
                message="No arguments: the acting address must come first",
            )
        ]

    violations: list[Violation] = []
    if kinds[0] is not ParamKind.ADDRESS:
        violations.append(
            Violation(
                code=ViolationCode.MISSING_WHO,
                message=f"First argument is {kinds[0]}, expected the acting address",
                detail={"position": 0, "kind": str(kinds[0])},
            )
        )

    last = len(kinds) - 1
    misplaced = [i for i, k in enumerate(kinds) if k is ParamKind.ID and i != last]
    if misplaced:
        violations.append(
            Violation(
                code=ViolationCode.ITEM_ID_NOT_LAST,
                message=f"Item identifier at position {misplaced[0]} must be the last argument",
                detail={"positions": misplaced},
            )
        )

    end = last if kinds[last] is ParamKind.ID else len(kinds)
    seen_context = False
    for position in range(1, end):
        kind = kinds[position]
        if kind is ParamKind.ADDRESS:
            seen_context = True
        elif kind is ParamKind.AMOUNT and seen_context:
            violations.append(
                Violation(
                    code=ViolationCode.ARGUMENT_ORDER,
                    message=f"Quantity at position {position} follows address context",
                    detail={"position": position},
                )
            )
            break

    return violations


# ---------------------------------------------------------------------------
# GrammarValidator
# ---------------------------------------------------------------------------


class GrammarValidator:
    """Decides conformance of declarations against a :class:`Vocabulary`.

    Args:
        vocabulary: Recognized domains, prefixes, subjects, and renames.
        require_domain: Report domain-less names as ``UNRECOGNIZED_DOMAIN``.
    """

    def __init__(self, vocabulary: Vocabulary, *, require_domain: bool = False) -> None:
        self._vocabulary = vocabulary
        self._require_domain = require_domain

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary

    def check(self, declaration: ErrorDeclaration) -> Verdict:
        """Validate a single declaration in isolation."""
        return Verdict(declaration=declaration, violations=self._rule_violations(declaration))

    def check_all(self, declarations: Iterable[ErrorDeclaration]) -> list[Verdict]:
        """Validate every declaration and detect collisions across the set.

        Declarations sharing ``(domain, prefix, subject)`` must share a
        parameter shape. Every member of a group with differing shapes
        gets a ``COLLISION``; identical redeclarations only warn.
        """
        items = list(declarations)
        violations = [self._rule_violations(d) for d in items]
        warnings: list[list[str]] = [[] for _ in items]

        groups: dict[tuple[str | None, str, str], list[int]] = defaultdict(list)
        for index, declaration in enumerate(items):
            groups[declaration.key].append(index)

        for indices in groups.values():
            if len(indices) < 2:
                continue
            shapes = {items[i].shape for i in indices}
            if len(shapes) > 1:
                for i in indices:
                    others = [items[j] for j in indices if items[j].shape != items[i].shape]
                    violations[i].append(_collision(items[i], others))
            else:
                for i in indices[1:]:
                    warnings[i].append(f"Duplicate declaration of {items[i].name}")

        verdicts = [
            Verdict(declaration=d, violations=v, warnings=w)
            for d, v, w in zip(items, violations, warnings, strict=True)
        ]
        logger.debug(
            "Checked %d declarations, %d non-conformant",
            len(verdicts),
            sum(1 for v in verdicts if not v.ok),
        )
        return verdicts

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _rule_violations(self, declaration: ErrorDeclaration) -> list[Violation]:
        vocab = self._vocabulary
        domain, prefix, subject = declaration.domain, declaration.prefix, declaration.subject
        violations: list[Violation] = []

        if domain is None:
            if self._require_domain:
                violations.append(
                    Violation(
                        code=ViolationCode.UNRECOGNIZED_DOMAIN,
                        message=f"{declaration.name} has no domain prefix",
                        detail={"known": list(vocab.domains)},
                    )
                )
        elif not vocab.is_domain(domain):
            violations.append(
                Violation(
                    code=ViolationCode.UNRECOGNIZED_DOMAIN,
                    message=f"Unknown domain {domain!r}",
                    detail={"domain": domain, "known": list(vocab.domains)},
                )
            )

        prefix_known = vocab.is_prefix(prefix)
        if not prefix_known:
            violations.append(
                Violation(
                    code=ViolationCode.UNRECOGNIZED_PREFIX,
                    message=f"Unknown error prefix {prefix!r}",
                    detail={"prefix": prefix, "known": list(vocab.prefixes)},
                )
            )

        canonical = vocab.resolve_subject(domain, subject)
        if canonical is None:
            violations.append(_unrecognized_subject(vocab, domain, subject))
        elif prefix_known:
            allowed = vocab.allowed_prefixes(domain, subject)
            if prefix not in allowed:
                violations.append(
                    Violation(
                        code=ViolationCode.INCONSISTENT_PREFIX,
                        message=f"{subject} takes {' or '.join(sorted(allowed))}, not {prefix}",
                        detail={"prefix": prefix, "subject": subject, "allowed": sorted(allowed)},
                    )
                )

        violations.extend(check_order(declaration.params))
        return violations


def _unrecognized_subject(vocab: Vocabulary, domain: str | None, subject: str) -> Violation:
    scope = domain if domain and vocab.is_domain(domain) else None
    detail: dict[str, Any] = {
        "subject": subject,
        "domain": domain,
        "known": sorted(vocab.terms_for(scope)),
    }
    message = f"Unknown subject {subject!r}"
    if scope:
        message += f" for {scope}"
        renamed = vocab.renames.get(scope, {}).get(subject)
        if renamed:
            message += f" (spelled {renamed!r} in {scope})"
            detail["use"] = renamed
    defined_in = vocab.defining_domains(subject)
    if defined_in and scope not in defined_in:
        detail["defined_in"] = defined_in
    return Violation(code=ViolationCode.UNRECOGNIZED_SUBJECT, message=message, detail=detail)


def _collision(declaration: ErrorDeclaration, others: list[ErrorDeclaration]) -> Violation:
    shapes = len({o.shape for o in others}) + 1
    return Violation(
        code=ViolationCode.COLLISION,
        message=f"{declaration.name} is declared with {shapes} different argument lists",
        detail={
            "shape": [str(k) for k in declaration.shape],
            "conflicts_with": [o.origin or o.signature for o in others],
        },
    )
