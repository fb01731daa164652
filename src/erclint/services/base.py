"""BaseService: shared foundation for erclint services.

Every service receives the active :class:`Vocabulary` at construction
time and builds its :class:`GrammarValidator` from it. Services never
print; they return :class:`ServiceResult` for the CLI to render.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from erclint.services.validate import GrammarValidator

if TYPE_CHECKING:
    from erclint.domain.vocabulary import Vocabulary


class BaseService:
    """Base for service-layer classes.

    Usage::

        class LintService(BaseService):
            def lint_paths(self, paths) -> ServiceResult:
                verdicts = self._validator.check_all(...)
                ...
    """

    def __init__(self, vocabulary: Vocabulary, *, require_domain: bool = False) -> None:
        self._vocabulary = vocabulary
        self._require_domain = require_domain
        self._validator = GrammarValidator(vocabulary, require_domain=require_domain)
