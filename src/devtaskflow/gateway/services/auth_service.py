"""AuthService -- External Identity Bridge

状态机：
    unauthenticated -> pending-exchange   begin_login() 生成 state
    pending-exchange -> authenticated     complete_login() 交换成功，创建会话
    pending-exchange -> failed            provider 拒绝 / state 不匹配 / 上游失败
    authenticated -> unauthenticated      logout() 销毁会话
"""

import secrets
import time

import structlog
from devtaskflow.core.config import OAUTH_STATE_TTL_SECONDS
from devtaskflow.core.errors import ValidationError
from devtaskflow.core.models import AuthState, Identity, Session
from devtaskflow.github import GitHubOAuthClient
from pydantic import SecretStr

from .session_store import SessionStore

log = structlog.get_logger()


class AuthService:
    """GitHub OAuth 登录流程 + 会话生命周期"""

    def __init__(
        self,
        oauth_client: GitHubOAuthClient,
        session_store: SessionStore,
        state_ttl_seconds: int = OAUTH_STATE_TTL_SECONDS,
    ) -> None:
        self._oauth = oauth_client
        self._sessions = session_store
        self._state_ttl = state_ttl_seconds
        # state -> 过期时间（monotonic 秒）
        self._pending_states: dict[str, float] = {}

    def begin_login(self) -> tuple[str, str]:
        """开始登录：生成 state 并返回 (授权跳转地址, state)"""
        self._prune_pending_states()
        state = secrets.token_urlsafe(24)
        self._pending_states[state] = time.monotonic() + self._state_ttl
        log.info("auth_state_transition", to_state=AuthState.PENDING_EXCHANGE.value)
        return self._oauth.authorize_url(state), state

    async def complete_login(
        self,
        code: str | None,
        state: str | None,
        expected_state: str | None,
    ) -> Session:
        """处理 provider 回调：校验 state、换取 token、查询用户、创建会话

        Args:
            code: 回调携带的授权 code
            state: 回调携带的 state
            expected_state: 浏览器 cookie 中保存的 state

        Raises:
            ValidationError: code 缺失或 state 校验失败
            UpstreamError: token 交换或用户查询失败
        """
        if not code:
            self._fail("missing_code")
            raise ValidationError("Missing authorization code")
        if not state or state != expected_state or not self._consume_state(state):
            self._fail("state_mismatch")
            raise ValidationError("Invalid OAuth state")

        try:
            access_token = await self._oauth.exchange_code(code)
            user = await self._oauth.fetch_user(access_token)
        except Exception:
            self._fail("upstream_error")
            raise

        identity = Identity(
            id=str(user.id),
            username=user.login,
            display_name=user.name or user.login,
            avatar_url=user.avatar_url,
            access_token=SecretStr(access_token),
        )
        session = self._sessions.create(identity)
        log.info(
            "auth_state_transition",
            to_state=AuthState.AUTHENTICATED.value,
            username=identity.username,
        )
        return session

    def logout(self, session_id: str | None) -> None:
        """登出：销毁会话"""
        session = self._sessions.destroy(session_id)
        if session is not None:
            log.info(
                "auth_state_transition",
                to_state=AuthState.UNAUTHENTICATED.value,
                username=session.identity.username,
            )

    def _consume_state(self, state: str) -> bool:
        """state 一次性使用，过期视为无效"""
        expires_at = self._pending_states.pop(state, None)
        return expires_at is not None and expires_at > time.monotonic()

    def _prune_pending_states(self) -> None:
        now = time.monotonic()
        expired = [s for s, exp in self._pending_states.items() if exp <= now]
        for s in expired:
            del self._pending_states[s]

    @staticmethod
    def _fail(reason: str) -> None:
        log.warning(
            "auth_state_transition",
            to_state=AuthState.FAILED.value,
            reason=reason,
        )
