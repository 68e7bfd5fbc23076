"""统一的聊天配置与消息数据模型。

本模块定义了 chat_core 内部以及与 UI 层之间共享的数据结构：

- WorldEntry: 世界书条目（按注入位置拼进系统提示词）。
- ChatConfig: 一次会话初始化所需的全部配置。
- Message: UI 消息列表中的一条消息（由 UI 持有和存储）。
- ChatMessage: 发给通用 chat/completions 接口的一条消息。
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional


# 世界书条目的注入区域；缺省（None）按 middle 处理
InjectionPosition = Literal["front", "middle", "back"]

# 回复语言代码，未知代码一律按 zh 处理
ResponseLanguage = Literal["zh", "ja", "en", "ko"]

# UI 消息角色
MessageRole = Literal["user", "model"]

# chat/completions 协议中的消息角色
WireRole = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class WorldEntry:
    """一条世界书条目。

    条目归 UI 的持久化存储所有，本模块只读取，不做修改。
    """

    id: str
    title: str
    content: str
    category: str = ""
    injection_position: Optional[InjectionPosition] = None

    @property
    def position(self) -> InjectionPosition:
        return self.injection_position or "middle"


@dataclass
class ChatConfig:
    """会话配置，由 UI 层（设置页、世界书页、聊天页）汇总后传入。

    - api_url / api_key / model_name / temperature: 连接参数。
    - language: 回复语言（zh/ja/en/ko）。
    - time_awareness: 是否在提示词里注入双方的当地时间。
    - user_timezone / ai_timezone: IANA 时区名，例如 "Asia/Shanghai"。
    - min/max_response_count, max_character_count: 多消息拆分的格式约束。
    """

    user_name: str = ""
    ai_persona: str = ""
    user_persona: str = ""
    world_entries: List[WorldEntry] = field(default_factory=list)
    model_name: str = ""
    api_url: str = ""
    api_key: str = ""
    temperature: float = 1.0
    language: str = "zh"
    time_awareness: bool = False
    user_timezone: str = "Asia/Shanghai"
    ai_timezone: str = "Asia/Shanghai"
    min_response_count: int = 1
    max_response_count: int = 3
    max_character_count: int = 50


@dataclass
class Message:
    """UI 消息列表中的一条消息。

    translated_content / show_translation 由翻译功能维护，
    其中 translated_content 也可能是翻译失败的提示文本。
    """

    id: str
    role: MessageRole
    content: str
    timestamp: datetime
    translated_content: Optional[str] = None
    show_translation: Optional[bool] = None


@dataclass
class ChatMessage:
    """发给 chat/completions 接口的一条消息。"""

    role: WireRole
    content: str

    def to_payload(self) -> dict:
        return {"role": self.role, "content": self.content}
