"""Typed payload contracts for service results.

These models validate payload shapes before they leave the service
layer, so renderers and JSON consumers can rely on stable keys.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class LintIssue(BaseModel):
    """One finding, flattened for display."""

    code: str
    severity: Literal["warning", "error"]
    name: str | None = None
    origin: str | None = None
    message: str


class DeclarationReport(BaseModel):
    """Verdict for one declaration."""

    model_config = ConfigDict(extra="allow")

    name: str
    signature: str
    domain: str | None = None
    prefix: str
    subject: str
    params: list[str]
    origin: str | None = None
    ok: bool
    violations: list[dict[str, Any]]
    warnings: list[str]


class LintResultData(BaseModel):
    """Payload contract for ``validate`` and ``lint``."""

    declarations: list[DeclarationReport]
    issues: list[LintIssue]
    count: int
    error_count: int
    warning_count: int
    conformant: bool


class CatalogItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    signature: str
    domain: str | None = None
    prefix: str
    subject: str
    params: list[str]


class CatalogResultData(BaseModel):
    """Payload contract for ``catalog``."""

    domain: str | None = None
    count: int
    items: list[CatalogItem]


class VocabularyResultData(BaseModel):
    """Payload contract for ``vocabulary``."""

    domains: list[str]
    prefixes: list[str]
    subjects: dict[str, list[str]]
    renames: dict[str, dict[str, str]]
    terms: dict[str, list[str]]
    require_domain: bool
