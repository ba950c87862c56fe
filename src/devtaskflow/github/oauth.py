"""GitHubOAuthClient -- GitHub OAuth Web Flow 封装

1. authorize_url(): 拼接授权跳转地址
2. exchange_code(): 用回调 code 换取 access token
3. fetch_user(): 用 access token 查询用户信息
"""

from urllib.parse import urlencode

import httpx
import structlog

from .config import GitHubConfig
from .exceptions import GitHubAPIError, OAuthExchangeError
from .models import GitHubUser

log = structlog.get_logger()


class GitHubOAuthClient:
    """GitHub OAuth 客户端

    transport 仅用于测试注入 httpx.MockTransport。
    """

    def __init__(
        self,
        config: GitHubConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    def authorize_url(self, state: str) -> str:
        """构造 GitHub 授权跳转地址

        Args:
            state: 本次登录的随机 state，回调时校验
        """
        params = {
            "client_id": self._config.client_id,
            "redirect_uri": self._config.callback_url,
            "scope": self._config.scope,
            "state": state,
        }
        return f"{self._config.oauth_base_url}/authorize?{urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        """用授权 code 换取 access token

        Returns:
            access token 字符串

        Raises:
            OAuthExchangeError: 网络失败、provider 拒绝或响应中缺少 access_token
        """
        url = f"{self._config.oauth_base_url}/access_token"
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._config.timeout_s
            ) as http_client:
                resp = await http_client.post(
                    url,
                    data={
                        "client_id": self._config.client_id,
                        "client_secret": self._config.client_secret.get_secret_value(),
                        "code": code,
                        "redirect_uri": self._config.callback_url,
                    },
                    headers={"Accept": "application/json"},
                )
                resp.raise_for_status()
                payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            log.error("oauth_exchange_request_failed", error=str(e))
            raise OAuthExchangeError(str(e)) from e

        if not isinstance(payload, dict):
            log.error("oauth_exchange_malformed", payload_type=type(payload).__name__)
            raise OAuthExchangeError("响应格式异常")

        # GitHub 对 code 失效等情况返回 200 + error 字段
        if "error" in payload:
            reason = payload.get("error_description") or payload["error"]
            log.warning("oauth_exchange_rejected", reason=reason)
            raise OAuthExchangeError(reason)

        access_token = payload.get("access_token")
        if not access_token:
            raise OAuthExchangeError("响应中缺少 access_token")
        return access_token

    async def fetch_user(self, access_token: str) -> GitHubUser:
        """查询 access token 对应的 GitHub 用户

        Raises:
            GitHubAPIError: 请求失败或响应格式异常
        """
        try:
            async with httpx.AsyncClient(
                base_url=self._config.api_base_url,
                transport=self._transport,
                timeout=self._config.timeout_s,
            ) as http_client:
                resp = await http_client.get(
                    "/user",
                    headers={
                        "Authorization": f"token {access_token}",
                        "Accept": "application/vnd.github.v3+json",
                    },
                )
                resp.raise_for_status()
                return GitHubUser.model_validate(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            log.error("github_user_fetch_failed", error=str(e))
            raise GitHubAPIError("/user", e) from e
