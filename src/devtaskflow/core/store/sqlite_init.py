"""SQLite schema

tasks 表：id 由 SQLite 自增分配，status 限定为三种取值。
schema 版本记录在 PRAGMA user_version 中。
"""

import aiosqlite

SCHEMA_VERSION = 1

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS tasks (
        id          INTEGER PRIMARY KEY AUTOINCREMENT,
        title       TEXT NOT NULL CHECK (length(title) > 0),
        status      TEXT NOT NULL DEFAULT 'open'
                    CHECK (status IN ('open', 'in-progress', 'closed')),
        commit_sha  TEXT,
        user_id     TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_id ON tasks(user_id, id)",
)


async def init_db(conn: aiosqlite.Connection) -> None:
    """WAL + busy_timeout，建表建索引（幂等）"""
    await conn.execute("PRAGMA journal_mode = WAL")
    await conn.execute("PRAGMA busy_timeout = 5000")

    for statement in _SCHEMA:
        await conn.execute(statement)
    await conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
    await conn.commit()


async def get_schema_version(conn: aiosqlite.Connection) -> int:
    async with conn.execute("PRAGMA user_version") as cursor:
        row = await cursor.fetchone()
    return row[0] if row else 0


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    async with conn.execute("PRAGMA journal_mode") as cursor:
        row = await cursor.fetchone()
    return row is not None and str(row[0]).lower() == "wal"
