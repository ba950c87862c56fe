"""python -m devtaskflow.core <command>

  init-db                 创建数据库文件、tasks 表与工作区目录
  list-tasks <user_id>    列出指定用户的任务
"""

import asyncio
import sys

from .config import get_db_path, get_workspaces_dir
from .store import open_store_group
from .store.sqlite_init import get_schema_version, verify_wal_mode

USAGE = __doc__.split("\n", 1)[1]


async def init_database() -> None:
    print(f"数据库路径: {get_db_path()}")
    print(f"工作区目录: {get_workspaces_dir()}")
    async with open_store_group(get_db_path(), get_workspaces_dir()) as group:
        version = await get_schema_version(group.conn)
        wal = await verify_wal_mode(group.conn)
    print(f"journal_mode: {'wal' if wal else '非 WAL'}")
    print(f"初始化完成 (schema v{version})")


async def list_tasks(user_id: str) -> None:
    async with open_store_group(get_db_path(), get_workspaces_dir()) as group:
        tasks = await group.task_store.list_tasks(user_id)
    for task in tasks:
        print(f"#{task.id}\t[{task.status.value}]\t{task.title}\t{task.commit_sha or '-'}")
    print(f"共 {len(tasks)} 个任务")


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("用法: python -m devtaskflow.core <command>")
        print(USAGE, end="")
        sys.exit(1)

    command, rest = args[0], args[1:]
    if command == "init-db":
        asyncio.run(init_database())
    elif command == "list-tasks":
        if len(rest) != 1:
            print("用法: python -m devtaskflow.core list-tasks <user_id>")
            sys.exit(1)
        asyncio.run(list_tasks(rest[0]))
    else:
        print(f"未知命令: {command}")
        print(USAGE, end="")
        sys.exit(1)


if __name__ == "__main__":
    main()
