"""Service results: what every AnalysisService operation hands back.

A result is either a success carrying an operation payload or a failure
carrying one :class:`ErrorCode`. Both serialize straight to the ``--json``
output, so the field names here are part of the CLI contract.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Failure categories a caller can branch on."""

    TREE_LOAD_FAILED = "TREE_LOAD_FAILED"
    CYCLE_DETECTED = "CYCLE_DETECTED"
    REPORT_WRITE_FAILED = "REPORT_WRITE_FAILED"


class ServiceError(BaseModel):
    """Why an operation failed.

    ``detail`` holds machine-readable context: the lockfile path for load
    failures, the ``stuck`` names and ``cycles`` for layering failures.
    """

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one operation (``edges``, ``layers``, ``classify``, ``report``)."""

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        op: str,
        data: dict[str, Any],
        *,
        warnings: list[str] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [], meta=meta)

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
            warnings=warnings or [],
        )
