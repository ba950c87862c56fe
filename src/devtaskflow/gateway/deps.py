"""依赖注入模块 -- 通过 FastAPI Depends 注入服务实例

服务实例通过 app.state 管理，在 lifespan 中初始化/清理。
身份通过 get_identity 显式注入路由，再由路由传给服务层。
"""

from devtaskflow.core.errors import AuthenticationRequired
from devtaskflow.core.models import Identity, Session
from devtaskflow.core.store import StoreGroup
from devtaskflow.github import CommitLookup
from fastapi import Request

from .services.auth_service import AuthService
from .services.event_hub import EventHub
from .services.session_store import SessionStore
from .services.task_service import TaskService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_event_hub(request: Request) -> EventHub:
    """从 app.state 获取 EventHub 实例"""
    return request.app.state.event_hub


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_commit_lookup(request: Request) -> CommitLookup:
    return request.app.state.commit_lookup


def get_task_service(request: Request) -> TaskService:
    """按请求构造 TaskService，注入存储与广播器"""
    return TaskService(request.app.state.store_group, request.app.state.event_hub)


def get_session(request: Request) -> Session:
    """获取 Session Gate 挂载的会话

    Raises:
        AuthenticationRequired: 路由未经过 Session Gate 或会话缺失
    """
    session = getattr(request.state, "session", None)
    if session is None:
        raise AuthenticationRequired()
    return session


def get_identity(request: Request) -> Identity:
    """获取当前请求的已认证身份"""
    return get_session(request).identity
