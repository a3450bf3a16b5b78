"""TaskService -- 任务台账：指派 / 违规标注 / 完成报告 / 删除 / 查询

状态以 status 列为判别字段：
1. assign 创建 pending 任务（快照工人用户名）
2. report_violation 写入经理给出的违规标签 + 备注 + 时间
3. report_work 复制媒体文件后写入 completed + 报告内容

状态流转不做强制校验（已完成的任务仍可被标注违规，反之亦然）。
report_work 可能很慢，submit_report 将其作为后台 asyncio.Task 调度，
返回的句柄即完成信号。
"""

import asyncio
import functools
from datetime import datetime

import structlog
from ehsdesk.core.exceptions import (
    InvalidInputError,
    ReportInProgressError,
    TaskNotFoundError,
    WorkerNotFoundError,
)
from ehsdesk.core.models import (
    Account,
    Role,
    Task,
    TaskStatus,
    is_valid_violation_label,
)
from ehsdesk.core.store import StoreGroup

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup, report_delay_s: float = 0.0) -> None:
        self._stores = store_group
        self._report_delay_s = report_delay_s
        self._pending_reports: dict[int, asyncio.Task[Task]] = {}

    async def assign(self, worker_id: int, description: str) -> Task:
        """指派任务给工人

        Raises:
            InvalidInputError: 任务描述为空
            WorkerNotFoundError: worker_id 不是已注册工人（不会创建记录）
        """
        if not description.strip():
            raise InvalidInputError("任务描述不能为空")

        async with self._stores.write("assign_task"):
            worker = await self._stores.user_store.get_user(worker_id)
            if worker is None or worker.role != Role.WORKER:
                raise WorkerNotFoundError(worker_id)
            task_id = await self._stores.task_store.create_task(
                worker.id, worker.username, description
            )

        log.info("task_assigned", task_id=task_id, worker_id=worker.id)
        return Task(
            id=task_id,
            worker_id=worker.id,
            worker_username=worker.username,
            description=description,
            status=TaskStatus.PENDING.value,
        )

    async def report_violation(
        self,
        task_id: int,
        status_label: str,
        comment: str = "",
    ) -> Task:
        """为任务写入违规标签

        Raises:
            InvalidInputError: 标签为空或为纯数字
            TaskNotFoundError: 任务不存在
        """
        if not is_valid_violation_label(status_label):
            raise InvalidInputError("任务状态必须是非数字的字符串")
        label = status_label.strip()
        timestamp = datetime.now().ctime()

        async with self._stores.write("report_violation"):
            affected = await self._stores.task_store.update_violation(
                task_id, label, comment.strip() or None, timestamp
            )
            if affected == 0:
                raise TaskNotFoundError(task_id)
            task = await self._stores.task_store.get_task(task_id)

        log.info("violation_reported", task_id=task_id, status=label)
        return task

    async def report_work(
        self,
        task_id: int,
        worker_id: int,
        report_text: str,
        media_source: str,
    ) -> Task:
        """提交工作报告：复制媒体文件后标记任务完成

        媒体复制失败时任务记录保持不变。

        Raises:
            TaskNotFoundError: 任务不存在或不属于该工人
            MediaCopyError: 媒体文件不可读或复制失败
        """
        log.info("report_started", task_id=task_id, worker_id=worker_id)

        async with self._stores.read("report_work_lookup"):
            task = await self._stores.task_store.get_task(task_id)
        if task is None or task.worker_id != worker_id:
            raise TaskNotFoundError(task_id)

        # 模拟慢速上传，不持有锁
        if self._report_delay_s > 0:
            await asyncio.sleep(self._report_delay_s)

        saved_path = await self._stores.media_store.save(task_id, worker_id, media_source)

        async with self._stores.write("report_work"):
            affected = await self._stores.task_store.update_report(
                task_id, worker_id, report_text, str(saved_path)
            )
            if affected == 0:
                raise TaskNotFoundError(task_id)
            updated = await self._stores.task_store.get_task(task_id)

        log.info(
            "report_submitted",
            task_id=task_id,
            worker_id=worker_id,
            media=str(saved_path),
        )
        return updated

    def submit_report(
        self,
        task_id: int,
        worker_id: int,
        report_text: str,
        media_source: str,
    ) -> asyncio.Task[Task]:
        """在交互路径之外调度 report_work，返回可等待/可取消的句柄

        同一任务同时只允许一个在途报告，避免并发覆盖同一媒体文件。

        Raises:
            ReportInProgressError: 该任务已有报告在后台提交
        """
        if task_id in self._pending_reports:
            raise ReportInProgressError(task_id)
        handle = asyncio.create_task(
            self.report_work(task_id, worker_id, report_text, media_source),
            name=f"report-task-{task_id}-user-{worker_id}",
        )
        self._pending_reports[task_id] = handle
        handle.add_done_callback(functools.partial(self._on_report_done, task_id))
        return handle

    def _on_report_done(self, task_id: int, handle: asyncio.Task[Task]) -> None:
        if self._pending_reports.get(task_id) is handle:
            del self._pending_reports[task_id]
        if handle.cancelled():
            log.warning("report_cancelled", task=handle.get_name())
            return
        error = handle.exception()
        if error is not None:
            log.error(
                "report_failed",
                task=handle.get_name(),
                error_type=type(error).__name__,
                error=str(error),
            )

    @property
    def pending_report_count(self) -> int:
        return len(self._pending_reports)

    async def wait_for_reports(self) -> list[Task | BaseException]:
        """等待所有未完成的报告；失败已在回调中记录，此处不抛出"""
        if not self._pending_reports:
            return []
        return await asyncio.gather(
            *self._pending_reports.values(), return_exceptions=True
        )

    async def list_for_worker(self, worker_id: int) -> list[Task]:
        async with self._stores.read("list_for_worker"):
            return await self._stores.task_store.list_for_worker(worker_id)

    async def list_open_for_worker(self, worker_id: int) -> list[Task]:
        """工人尚未完成、且没有在途报告的任务（可提交报告的候选）"""
        async with self._stores.read("list_open_for_worker"):
            tasks = await self._stores.task_store.list_for_worker(
                worker_id, exclude_status=TaskStatus.COMPLETED.value
            )
        return [task for task in tasks if task.id not in self._pending_reports]

    async def list_all(self) -> list[Task]:
        async with self._stores.read("list_all"):
            return await self._stores.task_store.list_tasks()

    async def list_pending(self) -> list[Task]:
        """待处理任务（违规标注的候选）"""
        async with self._stores.read("list_pending"):
            return await self._stores.task_store.list_tasks(TaskStatus.PENDING.value)

    async def list_workers(self) -> list[Account]:
        async with self._stores.read("list_workers"):
            return await self._stores.user_store.list_by_role(Role.WORKER)

    async def delete(self, task_id: int) -> None:
        """删除任务

        Raises:
            TaskNotFoundError: 任务不存在（0 行受影响）
        """
        async with self._stores.write("delete_task"):
            affected = await self._stores.task_store.delete_task(task_id)
            if affected == 0:
                raise TaskNotFoundError(task_id)
        log.info("task_deleted", task_id=task_id)
