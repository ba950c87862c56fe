"""数据模型 -- GitHubUser + GitHubRepo + Commit"""

from pydantic import BaseModel, Field


class GitHubUser(BaseModel):
    """GET /user 返回的用户信息（仅保留用到的字段）"""

    id: int = Field(description="GitHub user id")
    login: str = Field(description="登录名")
    name: str | None = Field(default=None, description="显示名称")
    avatar_url: str | None = Field(default=None, description="头像地址")


class GitHubRepo(BaseModel):
    """GET /user/repos 列表项（仅保留用到的字段）"""

    name: str = Field(description="仓库名")
    full_name: str = Field(description="owner/name")


class Commit(BaseModel):
    """扁平化后的提交记录"""

    sha: str = Field(description="提交 SHA")
    message: str = Field(description="提交信息")
    repo: str = Field(description="仓库名（不含 owner）")
    date: str = Field(description="作者提交时间（ISO 8601）")

    def matches(self, query: str) -> bool:
        """提交搜索：信息包含关键字（忽略大小写）或 SHA 以其开头"""
        return query.lower() in self.message.lower() or self.sha.startswith(query)
