"""EHS Desk 终端应用主入口

启动流程：初始化日志 -> 加载配置 -> 打开数据库（幂等建表）-> 运行菜单 -> 关闭连接。
只有数据库打开失败是致命的（退出码 1）。
"""

import asyncio
import sys

import aiosqlite
import structlog
from ehsdesk.core.config import AppConfig, load_app_config
from ehsdesk.core.store import create_store_group

from .logging_config import setup_logging
from .menu import Console, Menu
from .services import create_services

log = structlog.get_logger()


async def run(config: AppConfig, console: Console | None = None) -> int:
    """运行一次交互会话，返回进程退出码"""
    try:
        store_group = await create_store_group(config.db_path, config.media_dir)
    except (aiosqlite.Error, OSError) as e:
        log.error(
            "store_open_failed",
            db_path=config.db_path,
            error_type=type(e).__name__,
            error=str(e),
        )
        print(f"无法打开数据库 {config.db_path}: {e}", file=sys.stderr)
        return 1

    log.info(
        "app_started",
        db_path=config.db_path,
        media_dir=str(config.media_dir),
        report_delay_s=config.report_delay_s,
    )
    services = create_services(store_group, report_delay_s=config.report_delay_s)
    try:
        await Menu(services, console).run()
    finally:
        await store_group.close()
    return 0


def main() -> None:
    """CLI 主入口"""
    setup_logging()
    config = load_app_config()
    try:
        exit_code = asyncio.run(run(config))
    except KeyboardInterrupt:
        print("\n正在退出...")
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
