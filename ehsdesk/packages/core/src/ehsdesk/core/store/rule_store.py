"""RuleStore SQLite 实现"""

import aiosqlite

from ..models.rule import Rule


class SqliteRuleStore:
    """RuleStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_rule(self, rule_text: str, timestamp: str) -> int:
        """插入规则，返回自增 ID"""
        cursor = await self._conn.execute(
            "INSERT INTO rules (rule_text, timestamp) VALUES (?, ?)",
            (rule_text, timestamp),
        )
        return cursor.lastrowid

    async def get_rule(self, rule_id: int) -> Rule | None:
        cursor = await self._conn.execute(
            "SELECT id, rule_text, feedback, timestamp FROM rules WHERE id = ?",
            (rule_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_rule(row)

    async def list_rules(self) -> list[Rule]:
        """查询所有规则，按 ID 正序"""
        cursor = await self._conn.execute(
            "SELECT id, rule_text, feedback, timestamp FROM rules ORDER BY id ASC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_rule(row) for row in rows]

    async def update_feedback(self, rule_id: int, feedback: str) -> int:
        """覆盖反馈槽位，返回受影响行数"""
        cursor = await self._conn.execute(
            "UPDATE rules SET feedback = ? WHERE id = ?",
            (feedback, rule_id),
        )
        return cursor.rowcount

    async def delete_rule(self, rule_id: int) -> int:
        """删除规则，返回受影响行数"""
        cursor = await self._conn.execute(
            "DELETE FROM rules WHERE id = ?",
            (rule_id,),
        )
        return cursor.rowcount

    @staticmethod
    def _row_to_rule(row: aiosqlite.Row) -> Rule:
        return Rule(
            id=row[0],
            rule_text=row[1],
            feedback=row[2],
            timestamp=row[3],
        )
