"""根路由与探活

/health 只说明进程活着；/ready 检查数据库、快照目录和磁盘空间，
任一失败返回 503。
"""

import shutil

import aiosqlite
import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()

# 低于该值视为磁盘不足
MIN_FREE_DISK_MB = 64


@router.get("/")
async def root():
    return {"name": "DevTaskFlow", "status": "ok"}


@router.get("/health")
async def health():
    return {"status": "ok"}


async def _check_sqlite(request: Request) -> str:
    try:
        await request.app.state.store_group.ping()
    except (aiosqlite.Error, ValueError) as e:
        log.warning("readiness_sqlite_failed", error=str(e))
        return f"error: {e}"
    return "ok"


def _check_workspaces_dir(request: Request) -> str:
    workspaces_dir = request.app.state.store_group.workspace_store.workspaces_dir
    if not workspaces_dir.is_dir():
        return "error: directory does not exist"
    return "ok"


@router.get("/ready")
async def ready(request: Request):
    checks: dict[str, str | int] = {
        "sqlite": await _check_sqlite(request),
        "workspaces_dir": _check_workspaces_dir(request),
    }
    try:
        free_mb = shutil.disk_usage(
            request.app.state.store_group.workspace_store.workspaces_dir.parent
        ).free // (1024 * 1024)
    except OSError:
        free_mb = 0
    checks["disk_space_mb"] = free_mb

    all_ok = (
        checks["sqlite"] == "ok"
        and checks["workspaces_dir"] == "ok"
        and free_mb >= MIN_FREE_DISK_MB
    )
    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
            "subscribers": request.app.state.event_hub.subscriber_count,
            "sessions": len(request.app.state.session_store),
        },
    )
