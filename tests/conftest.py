"""全局 pytest 配置 -- 临时 SQLite 数据库 + 测试身份 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio
from devtaskflow.core.models import Identity
from pydantic import SecretStr


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def tmp_workspaces_dir(tmp_path: Path) -> Path:
    """提供临时工作区快照目录（不预先创建，用于验证自动创建）"""
    return tmp_path / "workspaces"


@pytest_asyncio.fixture
async def db_conn(tmp_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from devtaskflow.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_path / "conn_test.db"))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest.fixture
def alice() -> Identity:
    return Identity(
        id="1001",
        username="alice",
        display_name="Alice",
        access_token=SecretStr("gho_alice"),
    )


@pytest.fixture
def bob() -> Identity:
    return Identity(
        id="2002",
        username="bob",
        display_name="Bob",
        access_token=SecretStr("gho_bob"),
    )
