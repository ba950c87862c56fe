"""SessionStore -- 服务端会话存储（进程内）

会话有效期为滑动窗口：每次通过 Session Gate 的请求调用 touch() 续期。
过期只在查询时惰性检查，没有后台清理任务。
"""

import secrets
from datetime import UTC, datetime, timedelta

import structlog
from devtaskflow.core.config import SESSION_TTL_SECONDS
from devtaskflow.core.models import Identity, Session

log = structlog.get_logger()


class SessionStore:
    """进程内会话存储"""

    def __init__(self, ttl_seconds: int = SESSION_TTL_SECONDS) -> None:
        self._sessions: dict[str, Session] = {}
        self._ttl = timedelta(seconds=ttl_seconds)

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def create(self, identity: Identity) -> Session:
        """为身份创建新会话"""
        session = Session(
            session_id=secrets.token_urlsafe(32),
            identity=identity,
            expires_at=datetime.now(UTC) + self._ttl,
        )
        self._sessions[session.session_id] = session
        log.info("session_created", user_id=identity.id)
        return session

    def get(self, session_id: str | None) -> Session | None:
        """查询有效会话，过期会话在此处被删除"""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.is_expired(datetime.now(UTC)):
            del self._sessions[session_id]
            log.info("session_expired", user_id=session.identity.id)
            return None
        return session

    def touch(self, session: Session) -> Session:
        """续期：过期时间重置为 now + ttl"""
        session.expires_at = datetime.now(UTC) + self._ttl
        return session

    def destroy(self, session_id: str | None) -> Session | None:
        """销毁会话，返回被销毁的会话（不存在时返回 None）"""
        if not session_id:
            return None
        return self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
