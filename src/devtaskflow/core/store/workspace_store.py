"""WorkspaceStore 文件系统实现

每个任务一个 JSON 文件：<workspaces_dir>/workspace_<task_id>.json，
内容为 {"open_files": [...]}。保存即整体覆盖，读取即原样返回，
不校验路径在本地是否仍然存在。
"""

import json
import re
from pathlib import Path

import structlog

from ..errors import NotFoundError, StoreError, ValidationError
from ..models.workspace import WorkspaceSnapshot

log = structlog.get_logger()

# task_id 会拼进文件名，只允许安全字符
_TASK_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def validate_workspace_task_id(task_id: str) -> str:
    """校验工作区 task_id，防止路径穿越

    Raises:
        ValidationError: task_id 含非法字符或长度超限
    """
    if not _TASK_ID_PATTERN.match(task_id):
        raise ValidationError("Invalid task id")
    return task_id


class FileWorkspaceStore:
    """WorkspaceStore 的文件系统实现"""

    def __init__(self, workspaces_dir: Path) -> None:
        self._workspaces_dir = workspaces_dir

    @property
    def workspaces_dir(self) -> Path:
        return self._workspaces_dir

    def _get_snapshot_path(self, task_id: str) -> Path:
        return self._workspaces_dir / f"workspace_{task_id}.json"

    async def save(self, task_id: str, open_files: list[str]) -> WorkspaceSnapshot:
        """整体覆盖写入快照，目录不存在时自动创建"""
        validate_workspace_task_id(task_id)
        snapshot = WorkspaceSnapshot(task_id=task_id, open_files=open_files)
        path = self._get_snapshot_path(task_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps({"open_files": snapshot.open_files}, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            log.error("workspace_save_failed", task_id=task_id, error=str(e))
            raise StoreError("Failed to save workspace", original_error=e) from e

        log.info("workspace_saved", task_id=task_id, file_count=len(open_files))
        return snapshot

    async def restore(self, task_id: str) -> WorkspaceSnapshot:
        """读取快照

        Raises:
            NotFoundError: 该 task_id 没有保存过快照
        """
        validate_workspace_task_id(task_id)
        path = self._get_snapshot_path(task_id)
        if not path.exists():
            raise NotFoundError("Workspace not found")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            log.error("workspace_restore_failed", task_id=task_id, error=str(e))
            raise StoreError("Failed to restore workspace", original_error=e) from e

        return WorkspaceSnapshot(task_id=task_id, open_files=data.get("open_files", []))
