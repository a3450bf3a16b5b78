"""配置加载单元测试 -- 环境变量映射与默认值"""

from pathlib import Path

import pytest
from ehsdesk.core.config import (
    AppConfig,
    get_db_path,
    get_media_dir,
    get_report_delay_s,
    load_app_config,
)
from pydantic import ValidationError

_ENV_VARS = [
    "EHSDESK_DATA_DIR",
    "EHSDESK_DB_PATH",
    "EHSDESK_MEDIA_DIR",
    "EHSDESK_REPORT_DELAY_S",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfig:
    def test_defaults(self, clean_env):
        assert get_db_path() == str(Path("data") / "ehs.db")
        assert get_media_dir() == Path("data") / "uploads"
        assert get_report_delay_s() == 0.0

    def test_data_dir_moves_defaults(self, clean_env):
        clean_env.setenv("EHSDESK_DATA_DIR", "/srv/ehs")
        assert get_db_path() == str(Path("/srv/ehs") / "ehs.db")
        assert get_media_dir() == Path("/srv/ehs") / "uploads"

    def test_explicit_paths(self, clean_env):
        clean_env.setenv("EHSDESK_DB_PATH", "/tmp/a.db")
        clean_env.setenv("EHSDESK_MEDIA_DIR", "/tmp/media")
        config = load_app_config()
        assert config.db_path == "/tmp/a.db"
        assert config.media_dir == Path("/tmp/media")

    def test_report_delay(self, clean_env):
        clean_env.setenv("EHSDESK_REPORT_DELAY_S", "2.5")
        assert get_report_delay_s() == 2.5

    @pytest.mark.parametrize("value", ["abc", "-1", "nan", "inf", "-inf"])
    def test_invalid_report_delay_falls_back(self, clean_env, value: str):
        """非法值不阻塞启动，回退为 0"""
        clean_env.setenv("EHSDESK_REPORT_DELAY_S", value)
        assert get_report_delay_s() == 0.0

    def test_negative_delay_rejected_by_model(self):
        with pytest.raises(ValidationError):
            AppConfig(db_path="x.db", media_dir=Path("m"), report_delay_s=-1)

    @pytest.mark.parametrize("value", ["nan", "inf"])
    def test_non_finite_delay_loads_with_fallback(self, clean_env, value: str):
        """非有限值不导致启动失败，也不会让报告无限等待"""
        clean_env.setenv("EHSDESK_REPORT_DELAY_S", value)
        assert load_app_config().report_delay_s == 0.0

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_delay_rejected_by_model(self, value: float):
        with pytest.raises(ValidationError):
            AppConfig(db_path="x.db", media_dir=Path("m"), report_delay_s=value)
