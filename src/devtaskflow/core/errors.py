"""DevTaskFlow 异常体系

所有业务异常继承 DevTaskFlowError，携带对应的 HTTP 状态码，
由 gateway 的异常处理器统一渲染为 {"error": message}。
所有异常对当前请求都是终结性的，不做自动重试。
"""


class DevTaskFlowError(Exception):
    """DevTaskFlow 基础异常"""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Args:
            message: 面向客户端的错误描述
            status_code: 覆盖默认 HTTP 状态码
        """
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class AuthenticationRequired(DevTaskFlowError):
    """缺少会话或会话已过期"""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationError(DevTaskFlowError):
    """请求参数不合法（标题为空、状态值非法等）"""

    status_code = 400


class NotFoundError(DevTaskFlowError):
    """目标资源不存在"""

    status_code = 404


class StoreError(DevTaskFlowError):
    """持久化失败

    original_error 仅用于日志，不回传给客户端。
    """

    status_code = 500

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class UpstreamError(DevTaskFlowError):
    """外部 API 调用失败"""

    status_code = 500
