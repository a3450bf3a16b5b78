"""SQLite 数据库初始化

PRAGMA 配置 + users / tasks / rules 三张表 DDL，启动时幂等执行。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# users 表 DDL
_USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id        INTEGER PRIMARY KEY AUTOINCREMENT,
    username  TEXT UNIQUE,
    password  TEXT,
    role      TEXT
);
"""

# tasks 表 DDL（worker_id 仅逻辑引用 users.id，不加外键约束）
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    id                   INTEGER PRIMARY KEY AUTOINCREMENT,
    worker_id            TEXT,
    worker_username      TEXT,
    task_description     TEXT,
    status               TEXT,
    violation_comment    TEXT,
    violation_timestamp  TEXT,
    worker_report        TEXT,
    worker_media         TEXT
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_worker_id ON tasks(worker_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);",
]

# rules 表 DDL
_RULES_DDL = """
CREATE TABLE IF NOT EXISTS rules (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    rule_text  TEXT NOT NULL,
    feedback   TEXT,
    timestamp  TEXT
);
"""


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表
    await conn.execute(_USERS_DDL)
    await conn.execute(_TASKS_DDL)
    await conn.execute(_RULES_DDL)

    # 创建索引
    for idx_sql in _TASKS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def list_tables(conn: aiosqlite.Connection) -> list[str]:
    """列出当前数据库中的用户表（按名称排序）"""
    cursor = await conn.execute(
        "SELECT name FROM sqlite_master "
        "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
    )
    rows = await cursor.fetchall()
    return [row[0] for row in rows]
