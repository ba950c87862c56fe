"""core 测试配置 -- StoreGroup fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from devtaskflow.core.store import StoreGroup, create_store_group


@pytest_asyncio.fixture
async def store_group(
    tmp_db_path: Path, tmp_workspaces_dir: Path
) -> AsyncGenerator[StoreGroup, None]:
    """已初始化的 StoreGroup"""
    group = await create_store_group(str(tmp_db_path), tmp_workspaces_dir)
    yield group
    await group.close()
