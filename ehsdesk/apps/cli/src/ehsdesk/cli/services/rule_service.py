"""RuleService -- 安全规则的创建、删除、反馈"""

from datetime import datetime

import structlog
from ehsdesk.core.config import RULE_TIMESTAMP_FORMAT
from ehsdesk.core.exceptions import InvalidInputError, RuleNotFoundError
from ehsdesk.core.models import Rule
from ehsdesk.core.store import StoreGroup

log = structlog.get_logger()


class RuleService:
    """安全规则业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def add_rule(self, text: str) -> Rule:
        """新增规则，记录创建时间

        Raises:
            InvalidInputError: 规则内容为空
        """
        if not text.strip():
            raise InvalidInputError("规则内容不能为空")
        timestamp = datetime.now().strftime(RULE_TIMESTAMP_FORMAT)

        async with self._stores.write("add_rule"):
            rule_id = await self._stores.rule_store.create_rule(text, timestamp)

        log.info("rule_added", rule_id=rule_id)
        return Rule(id=rule_id, rule_text=text, timestamp=timestamp)

    async def delete_rule(self, rule_id: int) -> None:
        """删除规则

        Raises:
            RuleNotFoundError: 规则不存在（0 行受影响）
        """
        async with self._stores.write("delete_rule"):
            affected = await self._stores.rule_store.delete_rule(rule_id)
            if affected == 0:
                raise RuleNotFoundError(rule_id)
        log.info("rule_deleted", rule_id=rule_id)

    async def give_feedback(self, rule_id: int, feedback: str) -> None:
        """覆盖规则的反馈槽位

        Raises:
            RuleNotFoundError: 规则不存在（0 行受影响）
        """
        async with self._stores.write("give_feedback"):
            affected = await self._stores.rule_store.update_feedback(rule_id, feedback)
            if affected == 0:
                raise RuleNotFoundError(rule_id)
        log.info("rule_feedback_given", rule_id=rule_id)

    async def list_rules(self) -> list[Rule]:
        async with self._stores.read("list_rules"):
            return await self._stores.rule_store.list_rules()

    async def list_with_feedback(self) -> list[Rule]:
        """反馈视图：返回全部规则，未反馈的规则 feedback 为 None"""
        async with self._stores.read("list_with_feedback"):
            return await self._stores.rule_store.list_rules()
