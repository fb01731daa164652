"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from erclint.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="lint", data={"count": 3})
        assert result.ok is True
        assert result.op == "lint"
        assert result.data == {"count": 3}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NO_SOURCES", message="No source files found")
        result = ServiceResult(ok=False, op="lint", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NO_SOURCES"

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="lint",
            data={"conformant": True},
            meta={"files": 2},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["conformant"] is True
        assert parsed["meta"]["files"] == 2

    def test_failure_constructor(self) -> None:
        result = ServiceResult.failure("lint", "SOURCE_ERROR", "unreadable", path="a.sol")
        assert result.ok is False
        assert result.error == ServiceError(
            code="SOURCE_ERROR", message="unreadable", detail={"path": "a.sol"}
        )

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="lint")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(
            code="UNKNOWN_DOMAIN",
            message="No reference declarations for 'ERC4626'",
            detail={"known": ["ERC20", "ERC721", "ERC1155"]},
        )
        assert error.detail["known"][0] == "ERC20"

    def test_default_detail(self) -> None:
        assert ServiceError(code="X", message="y").detail == {}
