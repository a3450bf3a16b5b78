"""EHS Desk 业务服务

ServiceBundle 把共享同一个 StoreGroup 的三个服务打包，供会话与菜单使用。
"""

from dataclasses import dataclass

from ehsdesk.core.store import StoreGroup

from .credential_service import CredentialService
from .rule_service import RuleService
from .task_service import TaskService


@dataclass
class ServiceBundle:
    """共享 StoreGroup 的服务组"""

    stores: StoreGroup
    credentials: CredentialService
    tasks: TaskService
    rules: RuleService


def create_services(store_group: StoreGroup, report_delay_s: float = 0.0) -> ServiceBundle:
    """基于 StoreGroup 创建服务组"""
    return ServiceBundle(
        stores=store_group,
        credentials=CredentialService(store_group),
        tasks=TaskService(store_group, report_delay_s=report_delay_s),
        rules=RuleService(store_group),
    )


__all__ = [
    "ServiceBundle",
    "create_services",
    "CredentialService",
    "RuleService",
    "TaskService",
]
