"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 UI 层做统一捕获与用户提示。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "API_ERROR"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 base_url、model 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、读取中断等。"""


class ApiError(BusinessError):
    """聊天补全接口返回非 2xx 状态时抛出。"""


class RateLimitError(ApiError):
    """接口返回 429。本模块不做重试，由上层决定是否退避。"""


class ValidationError(BusinessError):
    """参数或配置校验失败（例如没有可回复的消息、时区无效）。"""
