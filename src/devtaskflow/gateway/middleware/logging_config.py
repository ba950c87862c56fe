"""structlog 配置模块

渲染模式由 DEVTASKFLOW_LOG_FORMAT 决定（dev / json），
访问令牌、client secret、OAuth code 在任何模式下都不会落到日志里。
Logfire 为可选 APM，由 LOGFIRE_SEND_TO_LOGFIRE 控制。
"""

import logging
import os

import structlog
from fastapi import FastAPI

# 日志事件中需要打码的字段
SENSITIVE_KEYS = frozenset({"access_token", "client_secret", "code", "authorization", "token"})
REDACTED = "***"

# 第三方库的请求日志会带上完整 URL，默认压到 WARNING
_NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite")


def redact_secrets(
    logger: object, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """structlog processor：敏感字段替换为 ***"""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        if event_dict[key] is not None:
            event_dict[key] = REDACTED
    return event_dict


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog + 标准库 logging

    Args:
        log_format: "json" 或 "dev"，缺省读 DEVTASKFLOW_LOG_FORMAT
        log_level: 日志级别名，缺省读 DEVTASKFLOW_LOG_LEVEL
    """
    log_format = log_format or os.environ.get("DEVTASKFLOW_LOG_FORMAT", "dev")
    log_level = log_level or os.environ.get("DEVTASKFLOW_LOG_LEVEL", "INFO")
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # uvicorn 等标准库 logger 与 structlog 共用同一个渲染器
    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_build_renderer(log_format),
            foreign_pre_chain=pre_chain,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def setup_logfire(app: FastAPI) -> bool:
    """按需启用 Logfire（需安装 devtaskflow[logfire] 并配置 LOGFIRE_TOKEN）

    Returns:
        是否成功启用
    """
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return False
    try:
        import logfire

        logfire.configure()
        logfire.instrument_fastapi(app)
        logfire.instrument_httpx()
    except Exception as e:
        structlog.get_logger().warning("logfire_init_failed", error=str(e))
        return False
    return True
