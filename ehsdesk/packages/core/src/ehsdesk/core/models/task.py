"""Task Domain Model

worker_username 是创建时对指派工人用户名的快照。
违规字段只由违规事件写入，报告字段只由完成事件写入。
"""

from pydantic import BaseModel, Field

from .enums import TaskStatus


class Task(BaseModel):
    """任务记录 -- tasks 表的一行"""

    id: int = Field(description="自增主键")
    worker_id: int = Field(description="指派工人的用户 ID")
    worker_username: str = Field(description="创建时的工人用户名快照")
    description: str = Field(description="任务描述")
    status: str = Field(
        default=TaskStatus.PENDING.value,
        description="pending / completed / 经理给出的违规标签",
    )
    violation_comment: str | None = Field(default=None, description="违规备注")
    violation_timestamp: str | None = Field(default=None, description="违规记录时间")
    worker_report: str | None = Field(default=None, description="工人报告内容")
    worker_media: str | None = Field(default=None, description="已保存的媒体文件路径")
