"""Tests for payload contracts."""

import pytest
from pydantic import ValidationError

from erclint.services.contracts import LintResultData, dump_validated


class TestDumpValidated:
    def test_normalizes(self) -> None:
        data = {
            "declarations": [],
            "issues": [{"code": "COLLISION", "severity": "error", "message": "m"}],
            "count": 0,
            "error_count": 1,
            "warning_count": 0,
            "conformant": False,
        }
        dumped = dump_validated(LintResultData, data)
        assert dumped["issues"][0]["name"] is None
        assert dumped["issues"][0]["origin"] is None

    def test_rejects_bad_severity(self) -> None:
        data = {
            "declarations": [],
            "issues": [{"code": "X", "severity": "fatal", "message": "m"}],
            "count": 0,
            "error_count": 1,
            "warning_count": 0,
            "conformant": False,
        }
        with pytest.raises(ValidationError):
            dump_validated(LintResultData, data)
