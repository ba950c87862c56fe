"""TaskService -- 任务创建/状态变更/查询业务逻辑

所有操作都以显式传入的 Identity 限定范围；
每次成功的创建/状态变更恰好广播一次事件。
"""

import structlog
from devtaskflow.core.errors import NotFoundError, ValidationError
from devtaskflow.core.models import (
    Identity,
    PushEvent,
    PushEventType,
    Task,
    TaskStatus,
    parse_task_status,
)
from devtaskflow.core.store import StoreGroup

from .event_hub import EventHub

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup, event_hub: EventHub | None = None) -> None:
        self._stores = store_group
        self._event_hub = event_hub

    async def list_tasks(self, identity: Identity) -> list[Task]:
        """查询调用者拥有的全部任务"""
        tasks = await self._stores.task_store.list_tasks(identity.id)
        log.debug("tasks_listed", user_id=identity.id, count=len(tasks))
        return tasks

    async def create_task(
        self,
        identity: Identity,
        title: object,
        commit_sha: str | None = None,
    ) -> Task:
        """创建任务并广播 task_update

        Args:
            identity: 调用者身份（即任务 owner）
            title: 任务标题，必须为非空字符串
            commit_sha: 可选关联提交，原样保存

        Raises:
            ValidationError: 标题缺失或为空
        """
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Title is required")

        task = await self._stores.task_store.create_task(
            title=title,
            user_id=identity.id,
            commit_sha=commit_sha,
            status=TaskStatus.OPEN,
        )
        log.info("task_created", task_id=task.id, user_id=identity.id)

        await self._broadcast(PushEventType.TASK_UPDATE, task)
        return task

    async def update_task_status(
        self,
        identity: Identity,
        task_id: int,
        status: object,
    ) -> Task:
        """变更任务状态并广播 task_status_update

        更新语句同时按 id 和 owner 限定，命中 0 行视为任务不存在。

        Raises:
            ValidationError: 状态值不在 open/in-progress/closed 内（不写库）
            NotFoundError: 任务不存在或不属于调用者（不广播）
        """
        new_status = parse_task_status(status)
        if new_status is None:
            log.warning("invalid_task_status", task_id=task_id, status=str(status))
            raise ValidationError("Invalid status")

        matched = await self._stores.task_store.update_task_status(
            task_id, identity.id, new_status
        )
        if matched == 0:
            raise NotFoundError("Task not found")

        task = await self._stores.task_store.get_task(task_id, identity.id)
        if task is None:
            raise NotFoundError("Task not found")

        log.info(
            "task_status_updated",
            task_id=task_id,
            user_id=identity.id,
            status=new_status.value,
        )
        await self._broadcast(PushEventType.TASK_STATUS_UPDATE, task)
        return task

    async def _broadcast(self, event_type: PushEventType, task: Task) -> None:
        if self._event_hub:
            await self._event_hub.broadcast(
                PushEvent(type=event_type, data=task.to_payload())
            )
