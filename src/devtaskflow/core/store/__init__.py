"""DevTaskFlow 持久化层

任务存 SQLite（单连接共享），工作区快照存 JSON 文件。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from .protocols import TaskStore, WorkspaceStore
from .sqlite_init import SCHEMA_VERSION, init_db
from .task_store import SqliteTaskStore
from .workspace_store import FileWorkspaceStore


class StoreGroup:
    """TaskStore + WorkspaceStore，持有唯一的数据库连接"""

    def __init__(self, conn: aiosqlite.Connection, workspaces_dir: Path) -> None:
        self.conn = conn
        self.task_store: TaskStore = SqliteTaskStore(conn)
        self.workspace_store: WorkspaceStore = FileWorkspaceStore(workspaces_dir)

    async def ping(self) -> None:
        """连通性检查，失败时抛 aiosqlite.Error"""
        async with self.conn.execute("SELECT 1") as cursor:
            await cursor.fetchone()

    async def close(self) -> None:
        await self.conn.close()


async def create_store_group(db_path: str, workspaces_dir: str | Path) -> StoreGroup:
    """打开数据库并初始化 schema，按需创建数据库目录与快照目录"""
    workspaces_path = Path(workspaces_dir)
    workspaces_path.mkdir(parents=True, exist_ok=True)
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)
    return StoreGroup(conn, workspaces_path)


@asynccontextmanager
async def open_store_group(db_path: str, workspaces_dir: str | Path) -> AsyncIterator[StoreGroup]:
    """create_store_group 的上下文管理器形式，退出时关闭连接"""
    group = await create_store_group(db_path, workspaces_dir)
    try:
        yield group
    finally:
        await group.close()


__all__ = [
    "SCHEMA_VERSION",
    "FileWorkspaceStore",
    "SqliteTaskStore",
    "StoreGroup",
    "TaskStore",
    "WorkspaceStore",
    "create_store_group",
    "init_db",
    "open_store_group",
]
