"""GitHubConfig -- GitHub OAuth / API 配置加载

从环境变量加载配置，OAuth 凭据不硬编码。
"""

import os

from devtaskflow.core.config import read_number_env
from pydantic import BaseModel, Field, SecretStr


class GitHubConfig(BaseModel):
    """GitHub 集成配置 -- 从环境变量加载

    环境变量:
        GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET: OAuth App 凭据
        GITHUB_CALLBACK_URL: OAuth 回调地址
        GITHUB_OAUTH_SCOPE: 申请的权限范围（空格分隔）
        GITHUB_API_URL: REST API 基础地址
        GITHUB_OAUTH_URL: OAuth 授权/换取 token 基础地址
        DEVTASKFLOW_GITHUB_TIMEOUT_S: 单次上游调用超时（秒，默认 10）
        DEVTASKFLOW_GITHUB_MAX_CONCURRENCY: 提交查询并发上限（默认 8）
    """

    client_id: str = Field(default="", description="OAuth App client id")
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        description="OAuth App client secret",
    )
    callback_url: str = Field(
        default="http://localhost:5000/auth/github/callback",
        description="OAuth 回调地址",
    )
    scope: str = Field(default="repo user:email", description="OAuth 权限范围")
    api_base_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API 基础 URL",
    )
    oauth_base_url: str = Field(
        default="https://github.com/login/oauth",
        description="GitHub OAuth 基础 URL",
    )
    timeout_s: float = Field(default=10, gt=0, description="单次上游调用超时（秒）")
    max_concurrency: int = Field(default=8, ge=1, description="按仓库并发拉取提交的上限")


def load_github_config() -> GitHubConfig:
    """从环境变量加载 GitHub 配置

    Returns:
        GitHubConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("GITHUB_CLIENT_ID"):
        kwargs["client_id"] = val

    if val := os.environ.get("GITHUB_CLIENT_SECRET"):
        kwargs["client_secret"] = SecretStr(val)

    if val := os.environ.get("GITHUB_CALLBACK_URL"):
        kwargs["callback_url"] = val

    if val := os.environ.get("GITHUB_OAUTH_SCOPE"):
        kwargs["scope"] = val

    if val := os.environ.get("GITHUB_API_URL"):
        kwargs["api_base_url"] = val.rstrip("/")

    if val := os.environ.get("GITHUB_OAUTH_URL"):
        kwargs["oauth_base_url"] = val.rstrip("/")

    kwargs["timeout_s"] = read_number_env(
        "DEVTASKFLOW_GITHUB_TIMEOUT_S", 10, float, minimum=0.001
    )
    kwargs["max_concurrency"] = read_number_env(
        "DEVTASKFLOW_GITHUB_MAX_CONCURRENCY", 8, minimum=1
    )

    return GitHubConfig(**kwargs)
