"""LintService: validate signatures and source files against the grammar.

Single entry point per input style, following the linter pattern:
collect every declaration, run all rules plus collision detection over
the whole set, then flatten verdicts into issues. A run that finds
violations is still ``ok``; ``data["conformant"]`` carries the outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from erclint.domain.catalog import REFERENCE_SIGNATURES, reference_declarations
from erclint.domain.declarations import ErrorDeclaration, SignatureError
from erclint.domain.signature import parse_signature
from erclint.domain.types import ViolationCode
from erclint.infrastructure.sources import (
    DEFAULT_EXTENSIONS,
    MalformedEntry,
    SourceError,
    find_sources,
    load_declarations,
)
from erclint.services._helpers import plural
from erclint.services.base import BaseService
from erclint.services.contracts import (
    CatalogResultData,
    LintResultData,
    VocabularyResultData,
    dump_validated,
)
from erclint.services.result import ServiceResult
from erclint.services.validate import Verdict

if TYPE_CHECKING:
    from erclint.domain.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


class LintService(BaseService):
    """Runs the grammar validator over user input and reports results."""

    def __init__(
        self,
        vocabulary: Vocabulary,
        *,
        require_domain: bool = False,
        fail_on_warning: bool = False,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        super().__init__(vocabulary, require_domain=require_domain)
        self._fail_on_warning = fail_on_warning
        self._extensions = tuple(extensions)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate_signatures(self, signatures: Iterable[str]) -> ServiceResult:
        """Validate textual signatures given directly (e.g. on the command line)."""
        declarations: list[ErrorDeclaration] = []
        malformed: list[MalformedEntry] = []
        for index, text in enumerate(signatures, start=1):
            origin = f"arg:{index}"
            try:
                declarations.append(parse_signature(text, self._vocabulary, origin=origin))
            except SignatureError as exc:
                malformed.append(MalformedEntry(origin=origin, text=text, reason=str(exc)))

        verdicts = self._validator.check_all(declarations)
        return ServiceResult(
            ok=True,
            op="validate",
            data=self._lint_payload(verdicts, malformed),
        )

    def lint_paths(self, paths: Iterable[Path]) -> ServiceResult:
        """Load declarations from files and directories, then validate them together.

        Collisions are detected across every file in the run.
        """
        try:
            files = find_sources(list(paths), self._extensions)
        except SourceError as exc:
            return _source_error(exc)
        if not files:
            return ServiceResult.failure(
                "lint",
                "NO_SOURCES",
                "No source files found",
                extensions=list(self._extensions),
            )

        declarations: list[ErrorDeclaration] = []
        malformed: list[MalformedEntry] = []
        skipped: list[str] = []
        for path in files:
            try:
                loaded = load_declarations(path, self._vocabulary)
            except SourceError as exc:
                return _source_error(exc)
            declarations.extend(loaded.declarations)
            malformed.extend(loaded.malformed)
            skipped.extend(loaded.skipped)

        warnings: list[str] = []
        if skipped:
            warnings.append(f"Skipped {plural(len(skipped), 'custom error')} outside the grammar")

        verdicts = self._validator.check_all(declarations)
        return ServiceResult(
            ok=True,
            op="lint",
            data=self._lint_payload(verdicts, malformed),
            warnings=warnings,
            meta={"files": len(files), "skipped": skipped},
        )

    def catalog(self, domain: str | None = None) -> ServiceResult:
        """List the reference EIP-6093 declarations, optionally for one domain."""
        if domain is not None and domain not in REFERENCE_SIGNATURES:
            return ServiceResult.failure(
                "catalog",
                "UNKNOWN_DOMAIN",
                f"No reference declarations for {domain!r}",
                known=list(REFERENCE_SIGNATURES),
            )
        items = [d.to_dict() for d in reference_declarations(domain)]
        data = {"domain": domain, "count": len(items), "items": items}
        return ServiceResult(
            ok=True,
            op="catalog",
            data=dump_validated(CatalogResultData, data),
        )

    def vocabulary(self) -> ServiceResult:
        """Describe the active grammar: axes, renames, and per-domain terms."""
        data = {**self._vocabulary.to_dict(), "require_domain": self._require_domain}
        return ServiceResult(
            ok=True,
            op="vocabulary",
            data=dump_validated(VocabularyResultData, data),
        )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _lint_payload(
        self,
        verdicts: list[Verdict],
        malformed: list[MalformedEntry],
    ) -> dict[str, Any]:
        issues: list[dict[str, Any]] = []
        for entry in malformed:
            issues.append(
                {
                    "code": ViolationCode.MALFORMED_SIGNATURE.value,
                    "severity": SEVERITY_ERROR,
                    "name": None,
                    "origin": entry.origin,
                    "message": entry.reason,
                }
            )
        for verdict in verdicts:
            decl = verdict.declaration
            for violation in verdict.violations:
                issues.append(
                    {
                        "code": violation.code.value,
                        "severity": SEVERITY_ERROR,
                        "name": decl.name,
                        "origin": decl.origin,
                        "message": violation.message,
                    }
                )
            for warning in verdict.warnings:
                issues.append(
                    {
                        "code": "DUPLICATE",
                        "severity": SEVERITY_WARNING,
                        "name": decl.name,
                        "origin": decl.origin,
                        "message": warning,
                    }
                )

        error_count = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        warning_count = len(issues) - error_count
        conformant = error_count == 0 and not (self._fail_on_warning and warning_count)
        logger.debug(
            "Lint payload: %d declarations, %d errors, %d warnings",
            len(verdicts),
            error_count,
            warning_count,
        )

        data = {
            "declarations": [_report(v) for v in verdicts],
            "issues": issues,
            "count": len(verdicts) + len(malformed),
            "error_count": error_count,
            "warning_count": warning_count,
            "conformant": conformant,
        }
        return dump_validated(LintResultData, data)


def _report(verdict: Verdict) -> dict[str, Any]:
    return {
        **verdict.declaration.to_dict(),
        "ok": verdict.ok,
        "violations": [v.model_dump(mode="json") for v in verdict.violations],
        "warnings": list(verdict.warnings),
    }


def _source_error(exc: SourceError) -> ServiceResult:
    logger.debug("Source error: %s", exc)
    return ServiceResult.failure(
        "lint", "SOURCE_ERROR", str(exc), path=str(exc.path), reason=exc.reason
    )
