"""SessionGateMiddleware -- 会话闸门

除根路由、/auth/* 与健康检查外，所有请求必须携带有效会话 cookie：
- 无会话 / 会话过期：直接返回 401，不进入路由（不访问存储）
- 有效会话：续期（touch），挂到 request.state.session，
  刷新响应中的 cookie max-age，并把 user_id 绑定到日志上下文
"""

import structlog
from devtaskflow.core.config import get_session_cookie_name, is_production
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

# 不需要会话的路由
_PUBLIC_PATHS = {"/", "/health", "/ready"}
_PUBLIC_PREFIXES = ("/auth/",)


def is_public_path(path: str) -> bool:
    """判断路径是否跳过会话检查"""
    return path in _PUBLIC_PATHS or path.startswith(_PUBLIC_PREFIXES)


def set_session_cookie(response: Response, session_id: str, max_age: int) -> None:
    """写入会话 cookie（HttpOnly + SameSite=Lax，生产环境加 Secure）"""
    response.set_cookie(
        key=get_session_cookie_name(),
        value=session_id,
        max_age=max_age,
        httponly=True,
        secure=is_production(),
        samesite="lax",
    )


class SessionGateMiddleware(BaseHTTPMiddleware):
    """会话校验中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if is_public_path(request.url.path):
            return await call_next(request)

        session_store = request.app.state.session_store
        session = session_store.get(request.cookies.get(get_session_cookie_name()))
        if session is None:
            await structlog.get_logger().ainfo("session_rejected")
            return JSONResponse(status_code=401, content={"error": "Unauthorized"})

        session_store.touch(session)
        request.state.session = session
        structlog.contextvars.bind_contextvars(user_id=session.identity.id)

        response = await call_next(request)
        set_session_cookie(response, session.session_id, session_store.ttl_seconds)
        return response
