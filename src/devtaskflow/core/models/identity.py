"""Identity / Session 模型

Identity 来自 GitHub OAuth 交换；Session 是服务端会话记录，
通过 cookie 中的 session_id 关联到 Identity，带滑动过期时间。
"""

from datetime import datetime

from pydantic import BaseModel, Field, SecretStr


class Identity(BaseModel):
    """已认证的身份"""

    id: str = Field(description="外部身份 ID（GitHub user id）")
    username: str = Field(description="登录名")
    display_name: str = Field(default="", description="显示名称")
    avatar_url: str | None = Field(default=None, description="头像地址")
    access_token: SecretStr = Field(
        default=SecretStr(""),
        description="GitHub access token，仅供 Commit Lookup 使用",
    )

    def public_view(self) -> dict:
        """对外暴露的身份信息（不含 access token）"""
        return self.model_dump(mode="json", exclude={"access_token"})


class Session(BaseModel):
    """服务端会话"""

    session_id: str = Field(description="随机会话标识，写入 cookie")
    identity: Identity = Field(description="会话绑定的身份")
    expires_at: datetime = Field(description="过期时间（滑动窗口）")

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
