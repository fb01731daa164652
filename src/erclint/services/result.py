"""ServiceResult and ServiceError: the contract between services and the CLI.

INVARIANT: Every public service operation returns a ServiceResult.
Expected failures (unreadable sources, unknown catalog domains) are
reported through ``error``. Grammar violations are data, not errors:
a lint run that finds them is still ``ok``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation could not run."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of a service operation.

    Attributes:
        ok: Whether the operation ran to completion.
        op: Operation name; selects the renderer (``"lint"``, ``"catalog"``).
        data: Payload validated against the op's contract.
        warnings: Notes about the run itself, such as skipped entries.
        error: Set exactly when ``ok`` is False.
        meta: Run bookkeeping (files read, skipped locations).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """``ServiceResult(ok=False, ...)`` with a populated :class:`ServiceError`."""
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
