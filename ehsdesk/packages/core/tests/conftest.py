"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest_asyncio


@pytest_asyncio.fixture
async def core_db(tmp_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """核心层已初始化数据库连接"""
    from ehsdesk.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_path / "core_test.db"))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def worker_id(core_db: aiosqlite.Connection) -> int:
    """预先插入一个工人账户，返回其 ID"""
    from ehsdesk.core.models import Role
    from ehsdesk.core.store.user_store import SqliteUserStore

    user_id = await SqliteUserStore(core_db).create_user("alice", "0" * 64, Role.WORKER)
    await core_db.commit()
    return user_id
