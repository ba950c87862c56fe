"""任务路由

GET   /api/tasks:               调用者的任务列表
POST  /api/tasks:               创建任务，201
PATCH /api/tasks/{id}/status:   变更状态，200；非法状态 400；不存在 404
"""

from devtaskflow.core.models import Identity
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from ..deps import get_identity, get_task_service
from ..services.task_service import TaskService

router = APIRouter()


class TaskCreateRequest(BaseModel):
    """创建任务请求体（标题在服务层校验，以便统一返回 400）"""

    title: str | None = Field(default=None, description="任务标题")
    commit_sha: str | None = Field(default=None, description="关联提交 SHA")


class TaskStatusRequest(BaseModel):
    """状态变更请求体"""

    status: str | None = Field(default=None, description="open / in-progress / closed")


@router.get("/api/tasks")
async def list_tasks(
    identity: Identity = Depends(get_identity),
    service: TaskService = Depends(get_task_service),
):
    """查询调用者拥有的任务"""
    tasks = await service.list_tasks(identity)
    return [t.to_payload() for t in tasks]


@router.post("/api/tasks")
async def create_task(
    body: TaskCreateRequest,
    identity: Identity = Depends(get_identity),
    service: TaskService = Depends(get_task_service),
):
    """创建任务，状态固定为 open，并广播 task_update"""
    task = await service.create_task(identity, body.title, body.commit_sha)
    return JSONResponse(status_code=201, content=task.to_payload())


@router.patch("/api/tasks/{task_id}/status")
async def update_task_status(
    task_id: int,
    body: TaskStatusRequest,
    identity: Identity = Depends(get_identity),
    service: TaskService = Depends(get_task_service),
):
    """变更任务状态，并广播 task_status_update"""
    task = await service.update_task_status(identity, task_id, body.status)
    return task.to_payload()
