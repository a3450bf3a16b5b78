"""Role Session -- 将已认证身份绑定到其角色允许的操作集合

只有两种变体：ManagerSession / WorkerSession。
会话没有 token 和过期时间，只在一次交互运行期间存在。
"""

import asyncio
from typing import ClassVar

import structlog
from ehsdesk.core.exceptions import PermissionDeniedError
from ehsdesk.core.models import Account, Role, Rule, Task

from . import ServiceBundle

log = structlog.get_logger()


class Session:
    """会话基类：公共只读操作 + 能力检查"""

    role: ClassVar[Role]
    actions: ClassVar[frozenset[str]] = frozenset({"view_rules", "view_feedback"})

    def __init__(self, account: Account, services: ServiceBundle) -> None:
        self.account = account
        self._services = services

    @property
    def user_id(self) -> int:
        return self.account.id

    @property
    def username(self) -> str:
        return self.account.username

    def can(self, action: str) -> bool:
        """当前角色是否拥有该操作"""
        return action in self.actions

    def require(self, action: str) -> None:
        """断言当前角色拥有该操作

        Raises:
            PermissionDeniedError: 无权执行
        """
        if not self.can(action):
            log.warning(
                "permission_denied",
                user_id=self.user_id,
                role=self.role.value,
                action=action,
            )
            raise PermissionDeniedError(self.role.value, action)

    async def view_rules(self) -> list[Rule]:
        return await self._services.rules.list_rules()

    async def view_feedback(self) -> list[Rule]:
        return await self._services.rules.list_with_feedback()


class ManagerSession(Session):
    """经理会话"""

    role = Role.MANAGER
    actions = Session.actions | {
        "assign_task",
        "report_violation",
        "add_rule",
        "delete_rule",
        "delete_task",
        "list_all_tasks",
        "list_workers",
        "list_pending_tasks",
    }

    async def assign_task(self, worker_id: int, description: str) -> Task:
        return await self._services.tasks.assign(worker_id, description)

    async def report_violation(
        self,
        task_id: int,
        status_label: str,
        comment: str = "",
    ) -> Task:
        return await self._services.tasks.report_violation(task_id, status_label, comment)

    async def add_rule(self, text: str) -> Rule:
        return await self._services.rules.add_rule(text)

    async def delete_rule(self, rule_id: int) -> None:
        await self._services.rules.delete_rule(rule_id)

    async def delete_task(self, task_id: int) -> None:
        await self._services.tasks.delete(task_id)

    async def list_all_tasks(self) -> list[Task]:
        return await self._services.tasks.list_all()

    async def list_workers(self) -> list[Account]:
        return await self._services.tasks.list_workers()

    async def list_pending_tasks(self) -> list[Task]:
        return await self._services.tasks.list_pending()


class WorkerSession(Session):
    """工人会话 -- 所有任务操作都限定在自己名下"""

    role = Role.WORKER
    actions = Session.actions | {
        "list_my_tasks",
        "list_open_tasks",
        "report_work",
        "give_feedback",
    }

    async def list_my_tasks(self) -> list[Task]:
        return await self._services.tasks.list_for_worker(self.user_id)

    async def list_open_tasks(self) -> list[Task]:
        return await self._services.tasks.list_open_for_worker(self.user_id)

    def report_work(
        self,
        task_id: int,
        report_text: str,
        media_source: str,
    ) -> asyncio.Task[Task]:
        """后台提交报告，返回完成句柄"""
        return self._services.tasks.submit_report(
            task_id, self.user_id, report_text, media_source
        )

    async def give_feedback(self, rule_id: int, feedback: str) -> None:
        await self._services.rules.give_feedback(rule_id, feedback)


_SESSION_TYPES: dict[Role, type[Session]] = {
    Role.MANAGER: ManagerSession,
    Role.WORKER: WorkerSession,
}


async def open_session(
    services: ServiceBundle,
    username: str,
    password: str,
) -> ManagerSession | WorkerSession:
    """认证并返回与角色对应的会话

    Raises:
        InvalidCredentialsError: 凭据不匹配
    """
    account = await services.credentials.authenticate(username, password)
    session = _SESSION_TYPES[account.role](account, services)
    log.info("session_opened", user_id=account.id, role=account.role.value)
    return session
