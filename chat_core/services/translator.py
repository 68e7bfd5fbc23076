"""一次性翻译服务。

优先使用会话的厂商原生通道，否则走通用 chat/completions 非流式接口。
translate 永不抛异常：失败时返回两种固定提示文本之一，由 UI 直接展示，
toggle_translation 也据此判断是否需要重试。
"""

import logging
from dataclasses import replace
from typing import Optional

from chat_core.config.settings import settings as default_settings
from chat_core.domain.models import Message
from chat_core.infrastructure.logging.logger import log_event
from chat_core.prompts import build_translation_prompt
from chat_core.providers.generic_client import GenericStreamClient
from chat_core.providers.headers import build_headers
from chat_core.providers.native_client import NativeClient
from chat_core.providers.registry import get_language_name

TRANSLATION_FAILED = "翻译失败"
TRANSLATION_UNAVAILABLE = "翻译服务暂不可用"


def is_translation_error(text: Optional[str]) -> bool:
    return text in (TRANSLATION_FAILED, TRANSLATION_UNAVAILABLE)


class Translator:
    """只读地复用会话的通道选择与凭证，不修改任何会话状态。"""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        native: Optional[NativeClient] = None,
        cfg=default_settings,
    ):
        self._base_url = base_url
        self._api_key = api_key
        self._model = model
        self._native = native
        self._settings = cfg

    def translate(self, text: str, target_language: str) -> str:
        prompt = build_translation_prompt(text, get_language_name(target_language))
        if self._native is not None:
            return self._translate_native(prompt)
        return self._translate_generic(prompt)

    def _translate_native(self, prompt: str) -> str:
        try:
            result = self._native.generate(prompt)
        except Exception as e:
            log_event(logging.WARNING, "Native translation failed", error=str(e))
            return TRANSLATION_FAILED
        return (result or "").strip() or TRANSLATION_FAILED

    def _translate_generic(self, prompt: str) -> str:
        payload = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self._settings.translation_temperature,
        }
        try:
            data = GenericStreamClient(self._settings).complete(
                self._base_url, build_headers(self._api_key), payload
            )
            choices = data.get("choices") or []
            content = (choices[0].get("message") or {}).get("content") if choices else None
        except Exception as e:
            log_event(logging.WARNING, "Translation request failed", error=str(e))
            return TRANSLATION_UNAVAILABLE
        if not isinstance(content, str):
            return TRANSLATION_FAILED
        return content.strip() or TRANSLATION_FAILED


def toggle_translation(
    message: Message,
    translator: Translator,
    target_language: str,
    enabled: bool = True,
) -> Message:
    """处理一次“点按翻译”，返回更新后的消息（原消息不变）。

    - 用户消息或未开启翻译：原样返回。
    - 已显示有效译文：隐藏。
    - 没有译文或上次失败：重新翻译并显示。
    - 已有有效译文但隐藏：直接显示。
    """

    if message.role == "user" or not enabled:
        return message
    has_error = is_translation_error(message.translated_content)
    if message.show_translation and not has_error:
        return replace(message, show_translation=False)
    if not message.translated_content or has_error:
        result = translator.translate(message.content, target_language)
        return replace(message, translated_content=result, show_translation=True)
    return replace(message, show_translation=True)
