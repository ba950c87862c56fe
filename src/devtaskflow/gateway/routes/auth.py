"""认证路由 -- GitHub OAuth

GET  /auth/github:           开始 OAuth，302 跳转到 GitHub
GET  /auth/github/callback:  provider 回调，建立会话后跳转前端
GET  /auth/user:             返回当前身份，未登录返回 401
POST /auth/logout:           销毁会话并清除 cookie，204
"""

import structlog
from devtaskflow.core.config import (
    get_auth_failure_path,
    get_frontend_url,
    get_session_cookie_name,
    is_production,
)
from devtaskflow.core.errors import DevTaskFlowError
from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import JSONResponse, RedirectResponse, Response

from ..deps import get_auth_service, get_session_store
from ..middleware.session_gate import set_session_cookie
from ..services.auth_service import AuthService
from ..services.session_store import SessionStore

log = structlog.get_logger()

router = APIRouter()

# 浏览器侧保存 OAuth state 的 cookie
OAUTH_STATE_COOKIE = "devtaskflow.oauth_state"


@router.get("/auth/github")
async def begin_github_login(
    auth_service: AuthService = Depends(get_auth_service),
):
    """生成 state 并跳转到 GitHub 授权页"""
    url, state = auth_service.begin_login()
    response = RedirectResponse(url, status_code=302)
    response.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=state,
        max_age=600,
        httponly=True,
        secure=is_production(),
        samesite="lax",
    )
    return response


@router.get("/auth/github/callback")
async def github_callback(
    request: Request,
    code: str | None = Query(default=None),
    state: str | None = Query(default=None),
    error: str | None = Query(default=None, description="provider 拒绝授权时携带"),
    auth_service: AuthService = Depends(get_auth_service),
    session_store: SessionStore = Depends(get_session_store),
):
    """OAuth 回调

    - provider 拒绝 / state 不匹配 / 上游失败：跳转失败页
    - 成功：写入会话 cookie，跳转前端
    """
    failure = RedirectResponse(get_auth_failure_path(), status_code=302)
    failure.delete_cookie(OAUTH_STATE_COOKIE)

    if error:
        log.warning("oauth_provider_rejected", error=error)
        return failure

    try:
        session = await auth_service.complete_login(
            code=code,
            state=state,
            expected_state=request.cookies.get(OAUTH_STATE_COOKIE),
        )
    except DevTaskFlowError as e:
        log.warning("oauth_callback_failed", error=e.message)
        return failure

    log.info("user_authenticated", username=session.identity.username)
    response = RedirectResponse(get_frontend_url(), status_code=302)
    response.delete_cookie(OAUTH_STATE_COOKIE)
    set_session_cookie(response, session.session_id, session_store.ttl_seconds)
    return response


@router.get("/auth/user")
async def current_user(
    request: Request,
    session_store: SessionStore = Depends(get_session_store),
):
    """返回当前登录身份（不含 access token）"""
    session = session_store.get(request.cookies.get(get_session_cookie_name()))
    if session is None:
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})
    return session.identity.public_view()


@router.post("/auth/logout")
async def logout(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """登出：销毁会话 + 清除 cookie"""
    auth_service.logout(request.cookies.get(get_session_cookie_name()))
    response = Response(status_code=204)
    response.delete_cookie(get_session_cookie_name())
    return response
