"""日志配置 -- structlog 接入标准库 logging

交互菜单独占 stdout，日志一律写 stderr。

环境变量：
  EHSDESK_LOG_FORMAT  dev（默认，可读输出）| json
  EHSDESK_LOG_LEVEL   标准级别名，默认 WARNING；无法识别时同样回退 WARNING
"""

import logging
import os
import sys

import structlog

_DEFAULT_LEVEL = logging.WARNING

# structlog 事件与第三方标准库日志共用的前置处理
_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
]


def _resolve_level(name: str | None) -> int:
    if not name:
        return _DEFAULT_LEVEL
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else _DEFAULT_LEVEL


def _render_chain(log_format: str) -> list[structlog.types.Processor]:
    if log_format.strip().lower() == "json":
        return [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def _stderr_handler(log_format: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(log_format),
            ],
        )
    )
    return handler


def setup_logging() -> None:
    """进程启动时调用一次；重复调用会替换根 logger 的处理器"""
    level = _resolve_level(os.environ.get("EHSDESK_LOG_LEVEL"))

    root = logging.getLogger()
    root.handlers[:] = [_stderr_handler(os.environ.get("EHSDESK_LOG_FORMAT", "dev"))]
    root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_PRE_CHAIN,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
