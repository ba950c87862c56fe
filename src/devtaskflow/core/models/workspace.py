"""Workspace Snapshot 模型"""

from pydantic import BaseModel, Field


class WorkspaceSnapshot(BaseModel):
    """编辑器打开文件快照 -- 整体保存、整体读取，无合并语义"""

    task_id: str = Field(description="关联的任务 ID")
    open_files: list[str] = Field(default_factory=list, description="有序文件路径列表")
