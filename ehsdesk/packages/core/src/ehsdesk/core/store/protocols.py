"""Store Protocol 接口定义

定义 UserStore、TaskStore、RuleStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from typing import Protocol

from ..models.enums import Role
from ..models.rule import Rule
from ..models.task import Task
from ..models.user import Account


class UserStore(Protocol):
    """User 存储接口"""

    async def create_user(self, username: str, password_hash: str, role: Role) -> int:
        """创建用户，返回 ID"""
        ...

    async def get_user(self, user_id: int) -> Account | None:
        """根据 ID 查询用户"""
        ...

    async def get_by_username(self, username: str) -> Account | None:
        """根据用户名查询用户"""
        ...

    async def find_by_credentials(
        self,
        username: str,
        password_hash: str,
    ) -> Account | None:
        """按用户名 + 密码摘要匹配用户"""
        ...

    async def list_by_role(self, role: Role) -> list[Account]:
        """查询指定角色的用户"""
        ...


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(
        self,
        worker_id: int,
        worker_username: str,
        description: str,
        status: str = ...,
    ) -> int:
        """创建任务，返回 ID"""
        ...

    async def get_task(self, task_id: int) -> Task | None:
        """根据 ID 查询任务"""
        ...

    async def list_tasks(self, status: str | None = None) -> list[Task]:
        """查询任务列表，支持按状态筛选"""
        ...

    async def list_for_worker(
        self,
        worker_id: int,
        exclude_status: str | None = None,
    ) -> list[Task]:
        """查询某个工人的任务"""
        ...

    async def update_violation(
        self,
        task_id: int,
        status: str,
        comment: str | None,
        timestamp: str,
    ) -> int:
        """写入违规信息，返回受影响行数"""
        ...

    async def update_report(
        self,
        task_id: int,
        worker_id: int,
        report: str,
        media_path: str,
    ) -> int:
        """写入工人报告，返回受影响行数"""
        ...

    async def delete_task(self, task_id: int) -> int:
        """删除任务，返回受影响行数"""
        ...


class RuleStore(Protocol):
    """Rule 存储接口"""

    async def create_rule(self, rule_text: str, timestamp: str) -> int:
        """创建规则，返回 ID"""
        ...

    async def get_rule(self, rule_id: int) -> Rule | None:
        """根据 ID 查询规则"""
        ...

    async def list_rules(self) -> list[Rule]:
        """查询所有规则"""
        ...

    async def update_feedback(self, rule_id: int, feedback: str) -> int:
        """覆盖反馈，返回受影响行数"""
        ...

    async def delete_rule(self, rule_id: int) -> int:
        """删除规则，返回受影响行数"""
        ...
