"""枚举定义 -- 角色与任务生命周期状态

任务状态是自由文本：除 pending / completed 外，经理可写入任意
非纯数字的违规标签。状态流转不做强制校验。
"""

from enum import StrEnum


class Role(StrEnum):
    """用户角色 -- 注册时确定，决定可用操作集合"""

    MANAGER = "manager"
    WORKER = "worker"


class TaskStatus(StrEnum):
    """已知的任务生命周期状态"""

    # 初始状态
    PENDING = "pending"
    # 工人提交报告后
    COMPLETED = "completed"


def is_valid_violation_label(label: str) -> bool:
    """验证违规标签：非空且不是纯数字

    纯数字输入通常是误输入的任务 ID，因此拒绝。

    Args:
        label: 经理输入的状态标签

    Returns:
        True 如果标签可用，否则 False
    """
    stripped = label.strip()
    return bool(stripped) and not stripped.isdigit()
