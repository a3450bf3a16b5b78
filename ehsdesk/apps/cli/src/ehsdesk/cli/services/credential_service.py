"""CredentialService -- 注册 / 登录 / 凭据校验

密码只以 SHA-256 十六进制摘要落盘。摘要确定性：同一密码两次计算结果相同。
"""

import hashlib

import aiosqlite
import structlog
from ehsdesk.core.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidInputError,
)
from ehsdesk.core.models import Account, Role
from ehsdesk.core.store import StoreGroup

log = structlog.get_logger()


def hash_password(password: str) -> str:
    """计算密码摘要（64 位小写十六进制）"""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def parse_role(value: str | Role) -> Role:
    """解析角色输入

    Raises:
        InvalidInputError: 不是 manager / worker
    """
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        raise InvalidInputError(
            f"无效角色: {value!r}，请输入 'worker' 或 'manager'"
        ) from None


class CredentialService:
    """凭据业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def register(self, username: str, password: str, role: str | Role) -> Account:
        """注册新用户

        Returns:
            新建的 Account

        Raises:
            InvalidInputError: 用户名/密码为空或角色非法
            DuplicateUserError: 用户名已存在
        """
        if not username.strip() or not password.strip():
            raise InvalidInputError("用户名和密码不能为空")
        parsed_role = parse_role(role)
        password_hash = hash_password(password)

        async with self._stores.write("register"):
            if await self._stores.user_store.get_by_username(username) is not None:
                raise DuplicateUserError(username)
            try:
                user_id = await self._stores.user_store.create_user(
                    username, password_hash, parsed_role
                )
            except aiosqlite.IntegrityError:
                # UNIQUE 约束兜底
                raise DuplicateUserError(username) from None

        log.info("user_registered", user_id=user_id, role=parsed_role.value)
        return Account(
            id=user_id,
            username=username,
            password_hash=password_hash,
            role=parsed_role,
        )

    async def authenticate(self, username: str, password: str) -> Account:
        """校验凭据，返回匹配的 Account

        Raises:
            InvalidCredentialsError: 用户名与摘要不匹配
        """
        async with self._stores.read("authenticate"):
            account = await self._stores.user_store.find_by_credentials(
                username, hash_password(password)
            )
        if account is None:
            log.info("login_failed", username=username)
            raise InvalidCredentialsError()
        log.info("login_succeeded", user_id=account.id, role=account.role.value)
        return account

    async def exists(self, username: str, password: str) -> bool:
        """与 authenticate 相同的匹配规则，折叠为布尔值"""
        async with self._stores.read("exists"):
            account = await self._stores.user_store.find_by_credentials(
                username, hash_password(password)
            )
        return account is not None
