"""全局 pytest 配置 -- 临时 SQLite 数据库 / 媒体目录 / StoreGroup fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest_asyncio


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "test.db"


@pytest_asyncio.fixture
async def tmp_media_dir(tmp_path: Path) -> Path:
    """提供临时上传媒体目录"""
    media_dir = tmp_path / "uploads"
    media_dir.mkdir(parents=True, exist_ok=True)
    return media_dir


@pytest_asyncio.fixture
async def db_conn(tmp_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from ehsdesk.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_db_path))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def store_group(tmp_db_path: Path, tmp_media_dir: Path):
    """提供共享连接的 StoreGroup"""
    from ehsdesk.core.store import create_store_group

    group = await create_store_group(str(tmp_db_path), tmp_media_dir)
    yield group
    await group.close()
