"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、工作区快照目录、会话与推送通道参数等可配置项。
路径类配置使用函数读取（便于测试时通过环境变量切换），其余为模块级常量。
"""

import os
from pathlib import Path

import structlog

log = structlog.get_logger()


def read_number_env(env_var: str, default: int | float, cast=int, minimum: int | float = 0):
    """读取数值型环境变量

    未设置时返回默认值；无法解析或小于 minimum 时记录告警并回退默认值。
    """
    val = os.environ.get(env_var)
    if not val:
        return default
    try:
        number = cast(val)
    except ValueError:
        number = None
    if number is None or number < minimum:
        log.warning(
            "invalid_numeric_config",
            env_var=env_var,
            value=val,
            fallback=default,
        )
        return default
    return number


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("DEVTASKFLOW_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "DEVTASKFLOW_DB_PATH",
        str(_get_base_dir() / "sqlite" / "devtaskflow.db"),
    )


def get_workspaces_dir() -> Path:
    """获取工作区快照存储目录"""
    return Path(
        os.environ.get(
            "DEVTASKFLOW_WORKSPACES_DIR",
            str(_get_base_dir() / "workspaces"),
        )
    )


def get_frontend_url() -> str:
    """前端地址：CORS 允许来源 + 登录成功后的跳转目标"""
    return os.environ.get("FRONTEND_URL", "http://localhost:3000")


def get_auth_failure_path() -> str:
    """OAuth 失败时的跳转路径"""
    return os.environ.get("DEVTASKFLOW_AUTH_FAILURE_PATH", "/login")


def get_session_cookie_name() -> str:
    """会话 cookie 名称"""
    return os.environ.get("DEVTASKFLOW_SESSION_COOKIE", "devtaskflow.sid")


def is_production() -> bool:
    """生产环境下 cookie 需要 Secure 标记"""
    return os.environ.get("DEVTASKFLOW_ENV", "development").lower() == "production"


# 会话滑动过期窗口（秒），每次通过认证的请求都会续期
SESSION_TTL_SECONDS: int = read_number_env("DEVTASKFLOW_SESSION_TTL_S", 1800, minimum=1)

# OAuth state 有效期（秒）
OAUTH_STATE_TTL_SECONDS: int = 600

# SSE 心跳间隔（秒）
SSE_HEARTBEAT_INTERVAL: int = read_number_env(
    "DEVTASKFLOW_SSE_HEARTBEAT_INTERVAL", 15, minimum=1
)

# 单个推送订阅者的队列上限，写满即视为掉线
SUBSCRIBER_QUEUE_MAXSIZE: int = 100
