"""Chat Core 顶层包。

该包提供角色扮演聊天的模型网关客户端，
包括系统提示词编译、通道选择（厂商原生 / 通用流式）、
流式响应解析、多消息拆分与翻译等能力。
"""

from chat_core.api.session import ChatSession
from chat_core.domain.message_splitter import MSG_BREAK, split_messages
from chat_core.domain.models import ChatConfig, Message, WorldEntry
from chat_core.prompts import build_system_instruction
from chat_core.services.translator import Translator, toggle_translation

__all__ = [
    "ChatConfig",
    "ChatSession",
    "MSG_BREAK",
    "Message",
    "Translator",
    "WorldEntry",
    "build_system_instruction",
    "split_messages",
    "toggle_translation",
]
