"""GitHub 提交查询路由

GET /api/github/commits?q=: 聚合当前用户所有仓库的提交，上游失败返回 500。
"""

from devtaskflow.core.models import Identity
from devtaskflow.github import CommitLookup
from fastapi import APIRouter, Depends, Query

from ..deps import get_commit_lookup, get_identity

router = APIRouter()


@router.get("/api/github/commits")
async def list_commits(
    q: str | None = Query(default=None, description="按提交信息或 SHA 前缀搜索"),
    identity: Identity = Depends(get_identity),
    commit_lookup: CommitLookup = Depends(get_commit_lookup),
):
    """每次调用都重新拉取，不缓存"""
    commits = await commit_lookup.list_commits(
        identity.access_token.get_secret_value(),
        query=q,
    )
    return [c.model_dump() for c in commits]
