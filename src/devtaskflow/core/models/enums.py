"""枚举定义

包含 TaskStatus 三值状态、PushEventType 推送事件名、AuthState 登录状态机。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 状态 -- 闭合三值枚举"""

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    CLOSED = "closed"


class PushEventType(StrEnum):
    """推送通道事件名（与前端监听的事件名一致）"""

    TASK_UPDATE = "task_update"
    TASK_STATUS_UPDATE = "task_status_update"


class AuthState(StrEnum):
    """Identity Bridge 状态机

    unauthenticated -> pending-exchange -> authenticated
    unauthenticated -> pending-exchange -> failed
    authenticated -> unauthenticated（登出）
    """

    UNAUTHENTICATED = "unauthenticated"
    PENDING_EXCHANGE = "pending-exchange"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


def parse_task_status(value: object) -> TaskStatus | None:
    """解析状态值，非法值返回 None

    Args:
        value: 请求体中的原始状态值

    Returns:
        TaskStatus 或 None（值不在三值枚举内）
    """
    if not isinstance(value, str):
        return None
    try:
        return TaskStatus(value)
    except ValueError:
        return None
