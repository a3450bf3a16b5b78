"""单写者事务封装

共享连接上的所有语句组都在同一把 asyncio.Lock 内执行（至多一个写者）。
写操作在锁内提交；任何异常先回滚再抛出，aiosqlite 异常统一转换为 StoreError。
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite
import structlog

from ..exceptions import StoreError

log = structlog.get_logger()


@asynccontextmanager
async def write_transaction(
    conn: aiosqlite.Connection,
    lock: asyncio.Lock,
    operation: str,
) -> AsyncIterator[None]:
    """在写锁内执行语句组，成功后提交

    Args:
        conn: 共享数据库连接
        lock: 单写者锁
        operation: 操作名（用于日志和错误信息）

    Raises:
        StoreError: 底层 SQLite 执行失败（已回滚）
    """
    async with lock:
        try:
            yield
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            log.error(
                "store_error",
                operation=operation,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise StoreError(operation, e) from e
        except BaseException:
            await conn.rollback()
            raise


@asynccontextmanager
async def read_guard(
    lock: asyncio.Lock,
    operation: str,
) -> AsyncIterator[None]:
    """在同一把锁内执行只读查询

    Raises:
        StoreError: 底层 SQLite 执行失败
    """
    async with lock:
        try:
            yield
        except aiosqlite.Error as e:
            log.error(
                "store_error",
                operation=operation,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise StoreError(operation, e) from e
