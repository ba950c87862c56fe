"""TaskStore SQLite 实现

所有查询和更新都按 user_id 限定范围。单条语句即原子单位，
create/update 与后续广播之间没有跨语句事务。
"""

import aiosqlite
import structlog

from ..errors import StoreError
from ..models.enums import TaskStatus
from ..models.task import Task

log = structlog.get_logger()


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(
        self,
        title: str,
        user_id: str,
        commit_sha: str | None = None,
        status: TaskStatus = TaskStatus.OPEN,
    ) -> Task:
        """插入任务记录，返回带自增 id 的 Task"""
        try:
            cursor = await self._conn.execute(
                """
                INSERT INTO tasks (title, status, commit_sha, user_id)
                VALUES (?, ?, ?, ?)
                """,
                (title, status.value, commit_sha, user_id),
            )
            await self._conn.commit()
        except aiosqlite.Error as e:
            log.error("task_insert_failed", user_id=user_id, error=str(e))
            raise StoreError("Failed to create task", original_error=e) from e

        return Task(
            id=cursor.lastrowid,
            title=title,
            status=status,
            commit_sha=commit_sha,
            user_id=user_id,
        )

    async def get_task(self, task_id: int, user_id: str) -> Task | None:
        """按 id + owner 查询任务"""
        try:
            cursor = await self._conn.execute(
                "SELECT id, title, status, commit_sha, user_id FROM tasks "
                "WHERE id = ? AND user_id = ?",
                (task_id, user_id),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            log.error("task_fetch_failed", task_id=task_id, error=str(e))
            raise StoreError("Failed to fetch task", original_error=e) from e
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks(self, user_id: str) -> list[Task]:
        """查询指定用户的全部任务（按存储自然顺序）"""
        try:
            cursor = await self._conn.execute(
                "SELECT id, title, status, commit_sha, user_id FROM tasks "
                "WHERE user_id = ? ORDER BY id",
                (user_id,),
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            log.error("task_list_failed", user_id=user_id, error=str(e))
            raise StoreError("Failed to fetch tasks", original_error=e) from e
        return [self._row_to_task(row) for row in rows]

    async def update_task_status(
        self,
        task_id: int,
        user_id: str,
        status: TaskStatus,
    ) -> int:
        """更新任务状态（id + owner 双重限定）

        Returns:
            实际命中的行数（0 表示任务不存在或不属于该用户）
        """
        try:
            cursor = await self._conn.execute(
                "UPDATE tasks SET status = ? WHERE id = ? AND user_id = ?",
                (status.value, task_id, user_id),
            )
            await self._conn.commit()
        except aiosqlite.Error as e:
            log.error("task_status_update_failed", task_id=task_id, error=str(e))
            raise StoreError("Failed to update task status", original_error=e) from e
        return cursor.rowcount

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            title=row[1],
            status=row[2],
            commit_sha=row[3],
            user_id=row[4],
        )
