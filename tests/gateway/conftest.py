"""gateway 测试配置 -- 完整 app + httpx AsyncClient + 登录辅助"""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from devtaskflow.core.config import get_session_cookie_name
from devtaskflow.core.models import Identity
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def app(tmp_path: Path, monkeypatch):
    """创建测试用 FastAPI app 并初始化 app.state（ASGITransport 不触发 lifespan）"""
    monkeypatch.setenv("DEVTASKFLOW_DB_PATH", str(tmp_path / "sqlite" / "test.db"))
    monkeypatch.setenv("DEVTASKFLOW_WORKSPACES_DIR", str(tmp_path / "workspaces"))
    monkeypatch.setenv("FRONTEND_URL", "http://frontend.test")
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from devtaskflow.gateway.main import create_app, init_app_state

    application = create_app()
    await init_app_state(application)
    yield application

    await application.state.store_group.close()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def login(app) -> Callable[[Identity], dict[str, str]]:
    """直接在 SessionStore 中创建会话，返回携带会话 cookie 的请求头"""

    def _login(identity: Identity) -> dict[str, str]:
        session = app.state.session_store.create(identity)
        return {"Cookie": f"{get_session_cookie_name()}={session.session_id}"}

    return _login
