"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 会话/推送/GitHub 组件初始化
+ 中间件与路由注册 + 统一异常渲染。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from devtaskflow.core.config import get_db_path, get_frontend_url, get_workspaces_dir
from devtaskflow.core.errors import DevTaskFlowError, UpstreamError
from devtaskflow.core.store import create_store_group
from devtaskflow.github import CommitLookup, GitHubOAuthClient, load_github_config
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.session_gate import SessionGateMiddleware
from .routes import auth, commits, health, stream, tasks, workspace
from .services.auth_service import AuthService
from .services.event_hub import EventHub
from .services.session_store import SessionStore

log = structlog.get_logger()


async def init_app_state(app: FastAPI) -> None:
    """初始化 app.state 上的所有运行时组件（lifespan 与测试共用）"""
    store_group = await create_store_group(get_db_path(), get_workspaces_dir())
    app.state.store_group = store_group

    app.state.event_hub = EventHub()
    app.state.session_store = SessionStore()

    github_config = load_github_config()
    app.state.github_config = github_config
    app.state.oauth_client = GitHubOAuthClient(github_config)
    app.state.auth_service = AuthService(app.state.oauth_client, app.state.session_store)
    app.state.commit_lookup = CommitLookup(github_config)

    log.info(
        "app_state_initialized",
        db_path=get_db_path(),
        github_api=github_config.api_base_url,
        max_concurrency=github_config.max_concurrency,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化组件，关闭时清理连接"""
    await init_app_state(app)

    yield

    store_group = getattr(app.state, "store_group", None)
    if store_group is not None:
        await store_group.close()
    log.info("app_shutdown", sessions=len(app.state.session_store))


async def devtaskflow_error_handler(request: Request, exc: DevTaskFlowError) -> JSONResponse:
    """业务异常 -> {"error": message}"""
    message = exc.message
    if exc.status_code >= 500:
        log.error(
            "request_failed",
            error_type=type(exc).__name__,
            error=exc.message,
        )
        # 上游错误细节只进日志
        if isinstance(exc, UpstreamError):
            message = "Failed to fetch commits"
    return JSONResponse(status_code=exc.status_code, content={"error": message})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求体/路径参数校验失败统一返回 400"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    return JSONResponse(status_code=400, content={"error": message})


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="DevTaskFlow",
        version="0.1.0",
        description="GitHub 登录的任务追踪服务",
        lifespan=lifespan,
    )

    # 注册中间件（后注册的在外层：CORS -> Logging -> SessionGate）
    app.add_middleware(SessionGateMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[get_frontend_url()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DevTaskFlowError, devtaskflow_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    # 注册路由
    app.include_router(health.router, tags=["health"])
    app.include_router(auth.router, tags=["auth"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(commits.router, tags=["github"])
    app.include_router(workspace.router, tags=["workspace"])
    app.include_router(stream.router, tags=["stream"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
