"""EHS Desk Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import Role, TaskStatus, is_valid_violation_label
from .rule import Rule
from .task import Task
from .user import Account

__all__ = [
    # 枚举
    "Role",
    "TaskStatus",
    "is_valid_violation_label",
    # 模型
    "Account",
    "Task",
    "Rule",
]
