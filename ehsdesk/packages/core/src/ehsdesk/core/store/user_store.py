"""UserStore SQLite 实现

users 表只插入、只查询。password 列保存摘要。
此处不提交事务，由调用方在写锁内提交。
"""

import aiosqlite

from ..models.enums import Role
from ..models.user import Account

_COLUMNS = "id, username, password, role"


class SqliteUserStore:
    """UserStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_user(self, username: str, password_hash: str, role: Role) -> int:
        """插入用户记录，返回自增 ID

        Raises:
            aiosqlite.IntegrityError: 用户名已存在
        """
        cursor = await self._conn.execute(
            "INSERT INTO users (username, password, role) VALUES (?, ?, ?)",
            (username, password_hash, role.value),
        )
        return cursor.lastrowid

    async def get_user(self, user_id: int) -> Account | None:
        """根据 ID 查询用户"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_account(row)

    async def get_by_username(self, username: str) -> Account | None:
        """根据用户名查询用户"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE username = ?",
            (username,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_account(row)

    async def find_by_credentials(
        self,
        username: str,
        password_hash: str,
    ) -> Account | None:
        """按 (username, 摘要) 精确匹配用户"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE username = ? AND password = ?",
            (username, password_hash),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_account(row)

    async def list_by_role(self, role: Role) -> list[Account]:
        """查询指定角色的所有用户，按 ID 正序"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE role = ? ORDER BY id ASC",
            (role.value,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_account(row) for row in rows]

    @staticmethod
    def _row_to_account(row: aiosqlite.Row) -> Account:
        """将数据库行转换为 Account 模型"""
        return Account(
            id=row[0],
            username=row[1],
            password_hash=row[2],
            role=Role(row[3]),
        )
