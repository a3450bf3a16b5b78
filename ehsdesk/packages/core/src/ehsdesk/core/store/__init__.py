"""EHS Desk Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接（及单写者锁）的 Store 实例组。
"""

import asyncio
from contextlib import AbstractAsyncContextManager
from pathlib import Path

import aiosqlite

from .media_store import MediaStore
from .protocols import RuleStore, TaskStore, UserStore
from .rule_store import SqliteRuleStore
from .sqlite_init import init_db
from .task_store import SqliteTaskStore
from .transaction import read_guard, write_transaction
from .user_store import SqliteUserStore


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接和同一把锁"""

    def __init__(
        self,
        conn: aiosqlite.Connection,
        media_dir: Path,
    ) -> None:
        self.conn = conn
        self.lock = asyncio.Lock()
        self.user_store: UserStore = SqliteUserStore(conn)
        self.task_store: TaskStore = SqliteTaskStore(conn)
        self.rule_store: RuleStore = SqliteRuleStore(conn)
        self.media_store = MediaStore(media_dir)

    def write(self, operation: str) -> AbstractAsyncContextManager[None]:
        """写事务：锁内执行，成功提交，失败回滚"""
        return write_transaction(self.conn, self.lock, operation)

    def read(self, operation: str) -> AbstractAsyncContextManager[None]:
        """只读查询：锁内执行"""
        return read_guard(self.lock, operation)

    async def close(self) -> None:
        await self.conn.close()


async def create_store_group(
    db_path: str,
    media_dir: str | Path,
) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径
        media_dir: 上传媒体存储目录

    Returns:
        StoreGroup 实例
    """
    media_path = Path(media_dir)
    media_path.mkdir(parents=True, exist_ok=True)

    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(conn=conn, media_dir=media_path)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteUserStore",
    "SqliteTaskStore",
    "SqliteRuleStore",
    "MediaStore",
    "init_db",
    "read_guard",
    "write_transaction",
]
