"""GitHub 集成异常体系

均为 UpstreamError 子类，由 gateway 统一渲染为 500。
"""

from devtaskflow.core.errors import UpstreamError


class GitHubAPIError(UpstreamError):
    """GitHub REST API 调用失败（连接失败、超时、非 2xx、响应格式异常）"""

    def __init__(self, endpoint: str, original_error: Exception) -> None:
        """
        Args:
            endpoint: 失败的 API 路径
            original_error: 原始异常
        """
        super().__init__(f"GitHub API 调用失败: {endpoint} -- {original_error}")
        self.endpoint = endpoint
        self.original_error = original_error


class OAuthExchangeError(UpstreamError):
    """OAuth code 换取 access token 失败（provider 拒绝或返回异常）"""

    def __init__(self, reason: str) -> None:
        super().__init__(f"OAuth 交换失败: {reason}")
        self.reason = reason
