"""DevTaskFlow Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import AuthState, PushEventType, TaskStatus, parse_task_status
from .event import PushEvent
from .identity import Identity, Session
from .task import Task
from .workspace import WorkspaceSnapshot

__all__ = [
    # 枚举
    "TaskStatus",
    "PushEventType",
    "AuthState",
    "parse_task_status",
    # Task
    "Task",
    # Identity
    "Identity",
    "Session",
    # Workspace
    "WorkspaceSnapshot",
    # Event
    "PushEvent",
]
