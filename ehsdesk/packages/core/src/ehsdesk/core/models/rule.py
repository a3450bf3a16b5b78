"""Rule Domain Model

feedback 只有一个槽位，新的反馈直接覆盖旧的。
"""

from pydantic import BaseModel, Field


class Rule(BaseModel):
    """安全规则"""

    id: int = Field(description="自增主键")
    rule_text: str = Field(min_length=1, description="规则内容")
    feedback: str | None = Field(default=None, description="工人反馈（单槽位）")
    timestamp: str | None = Field(default=None, description="创建时间 %Y-%m-%d %H:%M:%S")
