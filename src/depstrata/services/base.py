"""BaseService: the workspace plumbing shared by service classes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from depstrata.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from depstrata.domain.errors import TreeLoadError
    from depstrata.infrastructure.workspace import Workspace


class BaseService:
    """Holds the :class:`Workspace` a service reads its inputs from."""

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _warnings(self) -> list[str]:
        """Snapshot of warnings collected while loading workspace inputs."""
        return list(self._workspace.warnings)

    def _ok(self, op: str, data: dict[str, Any], **meta: object) -> ServiceResult:
        return ServiceResult.success(op, data, warnings=self._warnings(), meta=meta or None)

    def _fail(
        self, op: str, code: ErrorCode, message: str, **detail: object
    ) -> ServiceResult:
        return ServiceResult.failure(op, code, message, detail=detail, warnings=self._warnings())

    def _load_failed(self, op: str, exc: TreeLoadError) -> ServiceResult:
        return self._fail(
            op,
            ErrorCode.TREE_LOAD_FAILED,
            str(exc),
            lockfile=str(self._workspace.lockfile_path),
        )
