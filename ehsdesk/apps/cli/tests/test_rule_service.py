"""RuleService 单元测试"""

import re

import pytest
from ehsdesk.cli.services import ServiceBundle
from ehsdesk.core.exceptions import InvalidInputError, RuleNotFoundError


class TestRuleService:
    async def test_add_rule_records_timestamp(self, services: ServiceBundle):
        rule = await services.rules.add_rule("Wear helmets on site")

        assert rule.id > 0
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", rule.timestamp)
        stored = await services.rules.list_rules()
        assert [r.rule_text for r in stored] == ["Wear helmets on site"]

    @pytest.mark.parametrize("text", ["", "   "])
    async def test_add_empty_rule_rejected(self, services: ServiceBundle, text: str):
        with pytest.raises(InvalidInputError):
            await services.rules.add_rule(text)
        assert await services.rules.list_rules() == []

    async def test_delete_rule(self, services: ServiceBundle):
        rule = await services.rules.add_rule("Wear helmets")
        await services.rules.delete_rule(rule.id)
        assert await services.rules.list_rules() == []

    async def test_delete_missing_rule_leaves_list_unchanged(self, services: ServiceBundle):
        await services.rules.add_rule("Wear helmets")
        before = await services.rules.list_rules()

        with pytest.raises(RuleNotFoundError):
            await services.rules.delete_rule(999)

        assert await services.rules.list_rules() == before

    async def test_feedback_single_slot(self, services: ServiceBundle):
        rule = await services.rules.add_rule("Wear helmets")

        await services.rules.give_feedback(rule.id, "too hot in summer")
        await services.rules.give_feedback(rule.id, "need smaller sizes")

        [stored] = await services.rules.list_with_feedback()
        assert stored.feedback == "need smaller sizes"

    async def test_feedback_missing_rule(self, services: ServiceBundle):
        with pytest.raises(RuleNotFoundError):
            await services.rules.give_feedback(42, "hello")

    async def test_feedback_view_includes_rules_without_feedback(
        self, services: ServiceBundle
    ):
        first = await services.rules.add_rule("Wear helmets")
        await services.rules.add_rule("No open flames")
        await services.rules.give_feedback(first.id, "ok")

        rules = await services.rules.list_with_feedback()
        assert [r.feedback for r in rules] == ["ok", None]
