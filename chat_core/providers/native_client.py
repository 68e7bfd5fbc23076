"""厂商原生会话适配器。

在注入的 VendorSession 之上做一层很薄的封装：初始化时创建会话，
之后的流式对话都发在这个会话上（历史由厂商会话自行维护）。
"""

import logging
from typing import Any, Iterator

from chat_core.config.settings import settings as default_settings
from chat_core.domain.exceptions import ApiError, BusinessError
from chat_core.infrastructure.logging.logger import log_event
from chat_core.providers.base import VendorSession


class NativeClient:
    """厂商原生通道。"""

    name = "native"

    def __init__(
        self,
        vendor: VendorSession,
        model: str,
        instruction: str,
        temperature: float,
        cfg=default_settings,
    ):
        self._vendor = vendor
        self._settings = cfg
        self._handle: Any = vendor.create_session(model, instruction, temperature)
        log_event(logging.INFO, "Native session created", model=model, temperature=temperature)

    def stream(self, text: str) -> Iterator[str]:
        """在会话上发送一条消息，逐个 yield 非空增量。

        厂商 SDK 抛出的任意异常统一包装为 ApiError，已产出的增量仍然有效。
        """

        try:
            for chunk in self._vendor.stream_send(self._handle, text):
                if chunk:
                    yield chunk
        except BusinessError:
            raise
        except Exception as e:
            raise ApiError(code="NATIVE_ERROR", message=str(e), http_status=502)

    def generate(self, prompt: str) -> str:
        """一次性生成（不计入会话历史），使用配置中的翻译模型。"""

        return self._vendor.generate_content(self._settings.native_translation_model, prompt)
