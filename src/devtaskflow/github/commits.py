"""CommitLookup -- 聚合当前用户所有仓库的提交

流程：
1. GET /user/repos 枚举仓库
2. 对每个仓库并发 GET /repos/{full_name}/commits（Semaphore 限制并发）
3. 扁平化为 {sha, message, repo, date} 序列

任一上游调用失败即整体失败（GitHubAPIError），不返回部分结果，不重试，不缓存。
"""

import asyncio

import httpx
import structlog

from .config import GitHubConfig
from .exceptions import GitHubAPIError
from .models import Commit, GitHubRepo

log = structlog.get_logger()


class CommitLookup:
    """GitHub 提交查询"""

    def __init__(
        self,
        config: GitHubConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: GitHub 配置（API 地址、超时、并发上限）
            transport: 测试注入的 httpx transport
        """
        self._config = config
        self._transport = transport

    async def list_commits(
        self,
        access_token: str,
        query: str | None = None,
    ) -> list[Commit]:
        """拉取当前用户全部仓库的提交

        Args:
            access_token: 用户的 GitHub access token
            query: 可选搜索词，按提交信息包含或 SHA 前缀过滤

        Returns:
            按仓库顺序扁平化的提交列表

        Raises:
            GitHubAPIError: 任一上游调用失败
        """
        headers = {
            "Authorization": f"token {access_token}",
            "Accept": "application/vnd.github.v3+json",
        }
        async with httpx.AsyncClient(
            base_url=self._config.api_base_url,
            headers=headers,
            transport=self._transport,
            timeout=self._config.timeout_s,
        ) as http_client:
            repos = self._parse_repos(await self._get_json(http_client, "/user/repos"))

            semaphore = asyncio.Semaphore(self._config.max_concurrency)
            try:
                async with asyncio.TaskGroup() as tg:
                    tasks = [
                        tg.create_task(
                            self._fetch_repo_commits(http_client, repo, semaphore)
                        )
                        for repo in repos
                    ]
            except ExceptionGroup as eg:
                # 其余仓库请求已被 TaskGroup 取消，只上抛第一个失败
                first = eg.exceptions[0]
                if isinstance(first, GitHubAPIError):
                    raise first from None
                raise GitHubAPIError("/repos/{full_name}/commits", first) from first

        commits = [commit for task in tasks for commit in task.result()]
        log.info(
            "github_commits_fetched",
            repo_count=len(repos),
            commit_count=len(commits),
        )

        if query:
            commits = [c for c in commits if c.matches(query)]
        return commits

    async def _fetch_repo_commits(
        self,
        http_client: httpx.AsyncClient,
        repo: GitHubRepo,
        semaphore: asyncio.Semaphore,
    ) -> list[Commit]:
        """拉取单个仓库的提交并转换为 Commit"""
        endpoint = f"/repos/{repo.full_name}/commits"
        async with semaphore:
            data = await self._get_json(http_client, endpoint)

        try:
            return [
                Commit(
                    sha=item["sha"],
                    message=item["commit"]["message"],
                    repo=repo.name,
                    date=item["commit"]["author"]["date"],
                )
                for item in data
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise GitHubAPIError(endpoint, e) from e

    async def _get_json(self, http_client: httpx.AsyncClient, endpoint: str):
        """单次 GET 调用，带超时；所有失败统一包装为 GitHubAPIError"""
        try:
            async with asyncio.timeout(self._config.timeout_s):
                resp = await http_client.get(endpoint, params={"per_page": 100})
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPError, TimeoutError, ValueError) as e:
            log.error(
                "github_request_failed",
                endpoint=endpoint,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise GitHubAPIError(endpoint, e) from e

    @staticmethod
    def _parse_repos(payload) -> list[GitHubRepo]:
        """校验仓库列表响应，格式不符即 GitHubAPIError"""
        if not isinstance(payload, list):
            raise GitHubAPIError("/user/repos", ValueError("响应不是仓库列表"))
        try:
            return [GitHubRepo.model_validate(item) for item in payload]
        except ValueError as e:
            log.error("github_repos_malformed", error=str(e))
            raise GitHubAPIError("/user/repos", e) from e
