"""EHS 异常体系

所有面向用户的错误都继承 EhsError，由菜单层统一打印后重新提示。
只有启动时数据库打开失败是致命的。
"""


class EhsError(Exception):
    """EHS 基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述（直接展示给用户）
            recoverable: 是否可通过重新输入恢复
        """
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable


class InvalidInputError(EhsError):
    """输入为空或格式非法 -- 重新提示，不致命"""


class NotFoundError(EhsError):
    """工人/任务/规则 ID 不存在"""

    entity = "记录"

    def __init__(self, entity_id: int | str) -> None:
        super().__init__(f"{self.entity}不存在: {entity_id}")
        self.entity_id = entity_id


class WorkerNotFoundError(NotFoundError):
    """指派对象不是已注册的工人"""

    entity = "工人"


class TaskNotFoundError(NotFoundError):
    """任务不存在（或不属于当前工人）"""

    entity = "任务"


class RuleNotFoundError(NotFoundError):
    """安全规则不存在"""

    entity = "规则"


class DuplicateUserError(EhsError):
    """注册冲突：用户名已存在"""

    def __init__(self, username: str) -> None:
        super().__init__(f"用户已存在: {username}")
        self.username = username


class InvalidCredentialsError(EhsError):
    """用户名或密码不匹配"""

    def __init__(self, message: str = "用户名或密码错误") -> None:
        super().__init__(message)


class PermissionDeniedError(EhsError):
    """当前角色无权执行该操作"""

    def __init__(self, role: str, action: str) -> None:
        super().__init__(f"角色 {role} 无权执行操作: {action}")
        self.role = role
        self.action = action


class StoreError(EhsError):
    """底层 SQLite 执行失败 -- 记录日志并中止本次操作，进程继续运行"""

    def __init__(self, operation: str, original_error: Exception) -> None:
        """
        Args:
            operation: 失败的操作名
            original_error: 原始异常（aiosqlite.Error）
        """
        super().__init__(f"数据库操作失败 ({operation}): {original_error}")
        self.operation = operation
        self.original_error = original_error


class MediaCopyError(EhsError):
    """报告媒体文件复制失败 -- 任务记录保持不变"""

    def __init__(self, source: str, original_error: Exception) -> None:
        super().__init__(f"媒体文件保存失败: {source} -- {original_error}")
        self.source = source
        self.original_error = original_error


class ReportInProgressError(EhsError):
    """该任务已有报告正在后台提交"""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"任务 {task_id} 的报告正在提交中，请稍后再试")
        self.task_id = task_id
