"""TaskStore SQLite 实现

每个逻辑更新都是单条语句，更新/删除返回受影响行数，
0 行由服务层解释为 "不存在"。此处不提交事务。
"""

import aiosqlite

from ..models.enums import TaskStatus
from ..models.task import Task

_COLUMNS = (
    "id, worker_id, worker_username, task_description, status, "
    "violation_comment, violation_timestamp, worker_report, worker_media"
)


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(
        self,
        worker_id: int,
        worker_username: str,
        description: str,
        status: str = TaskStatus.PENDING.value,
    ) -> int:
        """创建任务记录，返回自增 ID"""
        cursor = await self._conn.execute(
            """
            INSERT INTO tasks (worker_id, worker_username, task_description, status)
            VALUES (?, ?, ?, ?)
            """,
            (str(worker_id), worker_username, description, status),
        )
        return cursor.lastrowid

    async def get_task(self, task_id: int) -> Task | None:
        """根据 ID 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks(self, status: str | None = None) -> list[Task]:
        """查询任务列表，支持按状态筛选，按插入顺序"""
        if status:
            cursor = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE status = ? ORDER BY id ASC",
                (status,),
            )
        else:
            cursor = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM tasks ORDER BY id ASC"
            )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def list_for_worker(
        self,
        worker_id: int,
        exclude_status: str | None = None,
    ) -> list[Task]:
        """查询指派给某个工人的任务，可排除某个状态"""
        if exclude_status:
            cursor = await self._conn.execute(
                f"""
                SELECT {_COLUMNS} FROM tasks
                WHERE worker_id = ? AND status != ?
                ORDER BY id ASC
                """,
                (str(worker_id), exclude_status),
            )
        else:
            cursor = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE worker_id = ? ORDER BY id ASC",
                (str(worker_id),),
            )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def update_violation(
        self,
        task_id: int,
        status: str,
        comment: str | None,
        timestamp: str,
    ) -> int:
        """写入违规标签、备注和时间，返回受影响行数"""
        cursor = await self._conn.execute(
            """
            UPDATE tasks
            SET status = ?, violation_comment = ?, violation_timestamp = ?
            WHERE id = ?
            """,
            (status, comment, timestamp, task_id),
        )
        return cursor.rowcount

    async def update_report(
        self,
        task_id: int,
        worker_id: int,
        report: str,
        media_path: str,
    ) -> int:
        """写入工人报告并标记完成，只更新属于该工人的任务"""
        cursor = await self._conn.execute(
            """
            UPDATE tasks
            SET worker_report = ?, worker_media = ?, status = ?
            WHERE id = ? AND worker_id = ?
            """,
            (report, media_path, TaskStatus.COMPLETED.value, task_id, str(worker_id)),
        )
        return cursor.rowcount

    async def delete_task(self, task_id: int) -> int:
        """删除任务，返回受影响行数"""
        cursor = await self._conn.execute(
            "DELETE FROM tasks WHERE id = ?",
            (task_id,),
        )
        return cursor.rowcount

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            worker_id=int(row[1]),
            worker_username=row[2] or "",
            description=row[3] or "",
            status=row[4] or "",
            violation_comment=row[5],
            violation_timestamp=row[6],
            worker_report=row[7],
            worker_media=row[8],
        )
