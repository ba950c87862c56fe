"""工作区快照路由 -- 供编辑器插件保存/恢复打开的文件

POST /api/workspace:            保存快照，201
GET  /api/workspace/{task_id}:  读取快照，不存在返回 404
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from ..deps import get_store_group

router = APIRouter()


class WorkspaceSaveRequest(BaseModel):
    """保存快照请求体"""

    task_id: str | int = Field(description="任务 ID")
    open_files: list[str] = Field(description="有序文件路径列表")


@router.post("/api/workspace")
async def save_workspace(
    body: WorkspaceSaveRequest,
    store_group=Depends(get_store_group),
):
    """整体覆盖保存"""
    await store_group.workspace_store.save(str(body.task_id), body.open_files)
    return JSONResponse(status_code=201, content={"message": "Workspace saved"})


@router.get("/api/workspace/{task_id}")
async def restore_workspace(
    task_id: str,
    store_group=Depends(get_store_group),
):
    """原样返回保存的文件列表"""
    snapshot = await store_group.workspace_store.restore(task_id)
    return snapshot.model_dump()
