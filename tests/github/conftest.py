"""GitHub 包测试 fixtures -- 基于 httpx.MockTransport 的假 GitHub"""

import httpx
import pytest
from devtaskflow.github import GitHubConfig
from pydantic import SecretStr


@pytest.fixture
def github_config() -> GitHubConfig:
    return GitHubConfig(
        client_id="client-123",
        client_secret=SecretStr("secret-456"),
        callback_url="http://localhost:5000/auth/github/callback",
        api_base_url="https://api.github.test",
        oauth_base_url="https://github.test/login/oauth",
        timeout_s=2,
        max_concurrency=2,
    )


def _commit(sha: str, message: str, date: str = "2024-01-01T00:00:00Z") -> dict:
    return {"sha": sha, "commit": {"message": message, "author": {"date": date}}}


@pytest.fixture
def repo_payloads() -> dict[str, list[dict]]:
    """仓库 full_name -> 提交列表"""
    return {
        "alice/api": [_commit("aaa111", "Fix login bug"), _commit("aaa222", "Add tests")],
        "alice/web": [_commit("bbb111", "Update README")],
    }


@pytest.fixture
def github_transport(repo_payloads):
    """模拟 /user/repos + /repos/{full_name}/commits，并记录请求"""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if path == "/user/repos":
            return httpx.Response(
                200,
                json=[
                    {"name": full_name.split("/")[1], "full_name": full_name}
                    for full_name in repo_payloads
                ],
            )
        for full_name, commits in repo_payloads.items():
            if path == f"/repos/{full_name}/commits":
                return httpx.Response(200, json=commits)
        return httpx.Response(404, json={"message": "Not Found"})

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport
