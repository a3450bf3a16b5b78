"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、上传媒体目录、报告模拟延迟、时间戳格式等可配置常量。
"""

import math
import os
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

# 规则创建时间格式（违规时间使用 ctime() 格式，例如 "Mon Oct  5 14:03:22 2026"）
RULE_TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("EHSDESK_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "EHSDESK_DB_PATH",
        str(_get_base_dir() / "ehs.db"),
    )


def get_media_dir() -> Path:
    """获取工人上传媒体文件的存储目录"""
    return Path(
        os.environ.get(
            "EHSDESK_MEDIA_DIR",
            str(_get_base_dir() / "uploads"),
        )
    )


def get_report_delay_s() -> float:
    """获取提交工作报告前的模拟延迟（秒）

    非法值（非数字、负数、nan、inf）记录警告并回退为 0，不阻塞启动。
    """
    raw = os.environ.get("EHSDESK_REPORT_DELAY_S")
    if not raw:
        return 0.0
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value) or value < 0:
        log.warning(
            "invalid_report_delay_config",
            env_var="EHSDESK_REPORT_DELAY_S",
            value=raw,
            fallback=0.0,
        )
        return 0.0
    return value


class AppConfig(BaseModel):
    """运行期配置集合 -- 启动时从环境变量一次性加载"""

    db_path: str = Field(description="SQLite 数据库文件路径")
    media_dir: Path = Field(description="上传媒体存储目录")
    report_delay_s: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="报告提交模拟延迟（秒）"
    )


def load_app_config() -> AppConfig:
    """从环境变量加载 AppConfig"""
    return AppConfig(
        db_path=get_db_path(),
        media_dir=get_media_dir(),
        report_delay_s=get_report_delay_s(),
    )
