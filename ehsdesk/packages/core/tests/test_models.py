"""领域模型单元测试

测试内容：
1. Account / Task / Rule 构造与默认值
2. 违规标签校验
"""

import pytest
from ehsdesk.core.models import (
    Account,
    Role,
    Rule,
    Task,
    TaskStatus,
    is_valid_violation_label,
)
from pydantic import ValidationError


class TestAccount:
    def test_role_parsed_from_string(self):
        account = Account(id=1, username="bob", password_hash="ab" * 32, role="manager")
        assert account.role is Role.MANAGER
        assert account.is_manager is True

    def test_empty_username_rejected(self):
        with pytest.raises(ValidationError):
            Account(id=1, username="", password_hash="ab" * 32, role="worker")

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            Account(id=1, username="eve", password_hash="ab" * 32, role="admin")


class TestTask:
    def test_defaults(self):
        """新任务默认 pending，违规与报告字段为空"""
        task = Task(id=1, worker_id=2, worker_username="alice", description="inspect valve")
        assert task.status == TaskStatus.PENDING
        assert task.violation_comment is None
        assert task.violation_timestamp is None
        assert task.worker_report is None
        assert task.worker_media is None

    def test_free_form_status_accepted(self):
        """违规标签是自由文本"""
        task = Task(
            id=1,
            worker_id=2,
            worker_username="alice",
            description="inspect valve",
            status="unsafe-ladder",
        )
        assert task.status == "unsafe-ladder"

    def test_worker_id_coerced_from_text_column(self):
        """tasks.worker_id 是 TEXT 列，读回时转换为 int"""
        task = Task(id=1, worker_id="7", worker_username="alice", description="x")
        assert task.worker_id == 7


class TestRule:
    def test_feedback_optional(self):
        rule = Rule(id=1, rule_text="Wear helmets", timestamp="2026-10-19 09:00:00")
        assert rule.feedback is None

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            Rule(id=1, rule_text="")


class TestViolationLabel:
    @pytest.mark.parametrize("label", ["unsafe-ladder", "violation", "incomplete", "a1"])
    def test_accepted(self, label: str):
        assert is_valid_violation_label(label) is True

    @pytest.mark.parametrize("label", ["", "   ", "123", "0", " 42 "])
    def test_rejected(self, label: str):
        assert is_valid_violation_label(label) is False
