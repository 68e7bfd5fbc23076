"""会话对象。

ChatSession 是调用方持有的不可变值：初始化时编译系统指令、选定通道，
之后不再变化。配置变更时重新调用 ChatSession.initialize 得到一个新会话，
旧会话直接丢弃即可（没有单独的关闭步骤）。

并发约定：同一会话上不要在流式调用进行中重新初始化；翻译只读会话字段，
可以与进行中的流式调用并行。
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, List, Optional, Sequence
from uuid import uuid4

from chat_core.config.settings import settings as default_settings
from chat_core.domain.exceptions import BusinessError, ValidationError
from chat_core.domain.message_splitter import split_messages
from chat_core.domain.models import ChatConfig, ChatMessage, Message
from chat_core.infrastructure.logging.logger import log_event
from chat_core.prompts import build_system_instruction
from chat_core.providers import NativeClient, Transport, VendorSession, select_transport
from chat_core.providers.headers import build_headers
from chat_core.services.translator import Translator


def _normalize_base_url(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


@dataclass(frozen=True)
class ChatSession:
    """一次会话的全部状态：通道、系统指令、模型、温度、base URL 与凭证。"""

    transport: Transport
    system_instruction: str
    model: str
    temperature: float
    base_url: str
    api_key: str
    cfg: Any = field(default_factory=lambda: default_settings, repr=False, compare=False)

    @classmethod
    def initialize(
        cls,
        config: ChatConfig,
        vendor: Optional[VendorSession] = None,
        cfg=None,
        now: Optional[datetime] = None,
    ) -> "ChatSession":
        """根据 ChatConfig 创建新会话。

        Args:
            config: UI 汇总的会话配置。
            vendor: 厂商原生会话能力（可选），仅在 base URL 指向厂商域名时使用。
            cfg: Settings 实例，默认使用全局配置。
            now: 时间感知使用的当前时刻，仅测试时注入。
        """

        cfg = cfg or default_settings
        base_url = _normalize_base_url(config.api_url)
        api_key = (config.api_key or getattr(cfg, "api_key", None) or "").strip()
        instruction = build_system_instruction(config, now)
        transport = select_transport(base_url, config.model_name, instruction, config.temperature, vendor, cfg)
        log_event(
            logging.INFO,
            "Chat session initialized",
            transport=transport.name,
            model=config.model_name,
            language=config.language,
            world_entries=len(config.world_entries),
        )
        return cls(
            transport=transport,
            system_instruction=instruction,
            model=config.model_name,
            temperature=config.temperature,
            base_url=base_url,
            api_key=api_key,
            cfg=cfg,
        )

    @property
    def is_native(self) -> bool:
        return isinstance(self.transport, NativeClient)

    def send_message_stream(self, message: str, history: Sequence[Message] = ()) -> Iterator[str]:
        """发送一条用户消息，返回内容增量的生成器。

        message 为空时在发起任何网络请求之前抛出 ValidationError。
        原生通道的历史由厂商会话维护，history 只用于通用协议。
        """

        if not message:
            raise ValidationError(code="NOTHING_TO_REPLY", message="没有可回复的消息")
        if isinstance(self.transport, NativeClient):
            return self.transport.stream(message)
        messages = [ChatMessage(role="system", content=self.system_instruction)]
        messages.extend(
            ChatMessage(role="user" if m.role == "user" else "assistant", content=m.content)
            for m in history
        )
        messages.append(ChatMessage(role="user", content=message))
        return self.transport.send_stream(
            self.base_url,
            build_headers(self.api_key),
            self.model,
            messages,
            self.temperature,
        )

    def translator(self) -> Translator:
        native = self.transport if isinstance(self.transport, NativeClient) else None
        return Translator(self.base_url, self.api_key, self.model, native, self.cfg)

    def translate(self, text: str, target_language: str) -> str:
        return self.translator().translate(text, target_language)

    def reply(
        self,
        messages: Sequence[Message],
        custom_message: Optional[str] = None,
        on_delta: Optional[Callable[[str], None]] = None,
    ) -> List[Message]:
        """让模型回复当前消息列表，返回拆分后的模型消息（不修改 messages）。

        - 默认以最后一条消息为本次输入，其余为历史；传入 custom_message 时
          以它为输入，整个 messages 作为历史。
        - 通道或接口错误转换为一条“连接失败”的模型消息。
        """

        prompt = custom_message or (messages[-1].content if messages else "")
        if not prompt:
            raise ValidationError(code="NOTHING_TO_REPLY", message="没有可回复的消息")
        history = messages if custom_message else messages[:-1]
        start_time = time.time()
        parts: List[str] = []
        try:
            for delta in self.send_message_stream(prompt, history):
                parts.append(delta)
                if on_delta is not None:
                    on_delta(delta)
        except BusinessError as e:
            log_event(logging.ERROR, "Reply failed", code=e.code, error=e.message)
            return [self._model_message(f"连接失败: {e.message or '未知ERROR'}")]
        contents = split_messages("".join(parts))
        log_event(
            logging.INFO,
            "Reply completed",
            messages=len(contents),
            latency_ms=int((time.time() - start_time) * 1000),
        )
        return [self._model_message(c) for c in contents]

    @staticmethod
    def _model_message(content: str) -> Message:
        return Message(
            id=uuid4().hex,
            role="model",
            content=content,
            timestamp=datetime.now(timezone.utc),
        )
