"""DevTaskFlow GitHub -- OAuth 登录与提交查询

devtaskflow.github 的公开接口导出。
"""

from .commits import CommitLookup

# 配置
from .config import GitHubConfig, load_github_config

# 异常
from .exceptions import GitHubAPIError, OAuthExchangeError
from .models import Commit, GitHubRepo, GitHubUser
from .oauth import GitHubOAuthClient

__all__ = [
    "Commit",
    "GitHubUser",
    "GitHubRepo",
    "CommitLookup",
    "GitHubOAuthClient",
    "GitHubConfig",
    "load_github_config",
    "GitHubAPIError",
    "OAuthExchangeError",
]
