"""TaskStore 单元测试

测试内容：
1. 创建 / 查询 / 按工人与状态筛选
2. 违规与报告更新返回受影响行数
3. 删除语义：0 行受影响
"""

import aiosqlite
from ehsdesk.core.store.task_store import SqliteTaskStore


class TestTaskStore:
    async def test_create_sets_pending(self, core_db: aiosqlite.Connection, worker_id: int):
        store = SqliteTaskStore(core_db)
        task_id = await store.create_task(worker_id, "alice", "inspect valve")
        await core_db.commit()

        task = await store.get_task(task_id)
        assert task is not None
        assert task.worker_id == worker_id
        assert task.description == "inspect valve"
        assert task.status == "pending"

    async def test_list_insertion_order(self, core_db: aiosqlite.Connection, worker_id: int):
        store = SqliteTaskStore(core_db)
        for desc in ["first", "second", "third"]:
            await store.create_task(worker_id, "alice", desc)
        await core_db.commit()

        tasks = await store.list_tasks()
        assert [t.description for t in tasks] == ["first", "second", "third"]

    async def test_list_for_worker_excludes_status(
        self, core_db: aiosqlite.Connection, worker_id: int
    ):
        store = SqliteTaskStore(core_db)
        done_id = await store.create_task(worker_id, "alice", "done")
        await store.create_task(worker_id, "alice", "open")
        await store.create_task(worker_id + 100, "someone", "other worker")
        await store.update_report(done_id, worker_id, "fixed", "/tmp/x")
        await core_db.commit()

        mine = await store.list_for_worker(worker_id)
        assert [t.description for t in mine] == ["done", "open"]

        open_tasks = await store.list_for_worker(worker_id, exclude_status="completed")
        assert [t.description for t in open_tasks] == ["open"]

    async def test_update_violation(self, core_db: aiosqlite.Connection, worker_id: int):
        store = SqliteTaskStore(core_db)
        task_id = await store.create_task(worker_id, "alice", "inspect valve")

        affected = await store.update_violation(
            task_id, "unsafe-ladder", "no harness", "Mon Oct 19 10:00:00 2026"
        )
        await core_db.commit()

        assert affected == 1
        task = await store.get_task(task_id)
        assert task.status == "unsafe-ladder"
        assert task.violation_comment == "no harness"
        assert task.violation_timestamp == "Mon Oct 19 10:00:00 2026"

    async def test_update_violation_missing_task(self, core_db: aiosqlite.Connection):
        affected = await SqliteTaskStore(core_db).update_violation(42, "bad", None, "ts")
        assert affected == 0

    async def test_update_report_only_for_owner(
        self, core_db: aiosqlite.Connection, worker_id: int
    ):
        store = SqliteTaskStore(core_db)
        task_id = await store.create_task(worker_id, "alice", "inspect valve")

        assert await store.update_report(task_id, worker_id + 1, "x", "/tmp/x") == 0
        assert await store.update_report(task_id, worker_id, "fixed", "/tmp/x") == 1
        await core_db.commit()

        task = await store.get_task(task_id)
        assert task.status == "completed"
        assert task.worker_report == "fixed"
        assert task.worker_media == "/tmp/x"

    async def test_delete(self, core_db: aiosqlite.Connection, worker_id: int):
        store = SqliteTaskStore(core_db)
        task_id = await store.create_task(worker_id, "alice", "inspect valve")
        await core_db.commit()

        assert await store.delete_task(task_id) == 1
        assert await store.delete_task(task_id) == 0
        assert await store.get_task(task_id) is None
