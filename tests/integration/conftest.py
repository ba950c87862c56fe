"""集成测试配置 -- 完整 app（中间件 + 路由 + 真实 SQLite + 文件快照）"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from devtaskflow.core.config import get_session_cookie_name
from devtaskflow.core.models import Identity
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("DEVTASKFLOW_DB_PATH", str(tmp_path / "sqlite" / "it.db"))
    monkeypatch.setenv("DEVTASKFLOW_WORKSPACES_DIR", str(tmp_path / "workspaces"))
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from devtaskflow.gateway.main import create_app, init_app_state

    app = create_app()
    await init_app_state(app)
    yield app
    await app.state.store_group.close()


@pytest_asyncio.fixture
async def integration_client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def user_u(integration_app) -> dict[str, str]:
    """用户 U 的会话请求头"""
    identity = Identity(id="U", username="u", access_token=SecretStr("gho_u"))
    session = integration_app.state.session_store.create(identity)
    return {"Cookie": f"{get_session_cookie_name()}={session.session_id}"}
