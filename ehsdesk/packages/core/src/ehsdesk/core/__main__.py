"""CLI 入口模块 -- python -m ehsdesk.core <command>

支持的命令：
  init-db  创建（或确认）数据库表结构与媒体目录
"""

import asyncio
import sys

from .config import get_db_path, get_media_dir


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m ehsdesk.core <command>")
        print("命令:")
        print("  init-db  创建数据库表结构与媒体目录")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db")
        sys.exit(1)


async def init_database() -> None:
    """执行数据库初始化"""
    from .store import create_store_group
    from .store.sqlite_init import list_tables

    db_path = get_db_path()
    media_dir = get_media_dir()

    print(f"数据库路径: {db_path}")
    print(f"媒体目录: {media_dir}")

    store_group = await create_store_group(db_path, media_dir)

    try:
        tables = await list_tables(store_group.conn)
        print(f"初始化完成，数据表: {', '.join(tables)}")
    finally:
        await store_group.close()


if __name__ == "__main__":
    main()
