"""终端输出格式化

把模型渲染成菜单展示用的多行文本，缺失字段显示为 "无"。
"""

from ehsdesk.core.models import Account, Rule, Task

_NONE = "无"
_SEPARATOR = "-" * 37


def _or_none(value: str | None) -> str:
    return value if value else _NONE


def format_task(task: Task, index: int, manager_view: bool = False) -> str:
    """任务详情；经理视图额外显示任务 ID 和指派对象"""
    lines = [f"{index}.", f"任务 ID: {task.id}"]
    if manager_view:
        lines.append(f"指派给: {task.worker_username}")
    lines.extend(
        [
            f"任务内容: {task.description}",
            f"状态: {task.status}",
            f"违规备注: {_or_none(task.violation_comment)}",
            f"违规时间: {_or_none(task.violation_timestamp)}",
            f"报告: {_or_none(task.worker_report)}",
            f"附件: {_or_none(task.worker_media)}",
        ]
    )
    return "\n".join(lines)


def format_task_list(tasks: list[Task], manager_view: bool = False) -> str:
    if not tasks:
        return "暂无任务。"
    return "\n\n".join(
        format_task(task, i, manager_view) for i, task in enumerate(tasks, start=1)
    )


def format_task_brief(task: Task) -> str:
    """单行摘要（选择任务 ID 时使用）"""
    return (
        f"任务 ID: {task.id} | 指派给: {task.worker_username} | "
        f"内容: {task.description} | 状态: {task.status}"
    )


def format_worker(account: Account) -> str:
    return f"ID: {account.id} | 用户名: {account.username}"


def format_rule(rule: Rule) -> str:
    return f"规则 ID: {rule.id} | {rule.rule_text} ({_or_none(rule.timestamp)})"


def format_rule_feedback(rule: Rule) -> str:
    return "\n".join(
        [
            f"规则 ID: {rule.id}",
            f"规则: {rule.rule_text}",
            f"反馈: {rule.feedback if rule.feedback else '暂无反馈。'}",
            _SEPARATOR,
        ]
    )
