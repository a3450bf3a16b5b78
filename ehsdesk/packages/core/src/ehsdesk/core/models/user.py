"""Account Domain Model

注册后不再修改，也不会被删除。只保存密码摘要，从不保存明文。
"""

from pydantic import BaseModel, Field

from .enums import Role


class Account(BaseModel):
    """用户账户"""

    id: int = Field(description="自增主键")
    username: str = Field(min_length=1, description="用户名，唯一")
    password_hash: str = Field(description="SHA-256 十六进制摘要（64 字符）")
    role: Role = Field(description="角色")

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER
