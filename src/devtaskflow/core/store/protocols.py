"""Store Protocol 接口定义

定义 TaskStore、WorkspaceStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from pathlib import Path
from typing import Protocol

from ..models.enums import TaskStatus
from ..models.task import Task
from ..models.workspace import WorkspaceSnapshot


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(
        self,
        title: str,
        user_id: str,
        commit_sha: str | None = None,
        status: TaskStatus = TaskStatus.OPEN,
    ) -> Task:
        """创建任务记录，由存储层分配 id"""
        ...

    async def get_task(self, task_id: int, user_id: str) -> Task | None:
        """按 id + owner 查询任务"""
        ...

    async def list_tasks(self, user_id: str) -> list[Task]:
        """查询指定用户的任务列表"""
        ...

    async def update_task_status(
        self,
        task_id: int,
        user_id: str,
        status: TaskStatus,
    ) -> int:
        """更新任务状态，返回命中行数"""
        ...


class WorkspaceStore(Protocol):
    """Workspace 快照存储接口 -- key(task_id) -> JSON blob"""

    @property
    def workspaces_dir(self) -> Path:
        """快照所在目录（就绪检查使用）"""
        ...

    async def save(self, task_id: str, open_files: list[str]) -> WorkspaceSnapshot:
        """整体覆盖保存"""
        ...

    async def restore(self, task_id: str) -> WorkspaceSnapshot:
        """整体读取，不存在时抛 NotFoundError"""
        ...
