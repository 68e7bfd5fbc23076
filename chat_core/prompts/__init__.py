"""系统提示词构建工具。

提示词模板按语言(locale) 放在 prompts/<locale>/ 目录下，以 string.Template
语法（${name}）占位。build_system_instruction 负责把 ChatConfig 编译成
一条完整的系统指令，除开启时间感知时的“当前分钟”外，结果完全确定。
"""

from datetime import datetime, timezone
from pathlib import Path
from string import Template
from typing import Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chat_core.domain.exceptions import ValidationError
from chat_core.domain.message_splitter import MSG_BREAK
from chat_core.domain.models import ChatConfig, WorldEntry
from chat_core.providers.registry import get_language_directive


PROMPTS_DIR = Path(__file__).resolve().parent

WORLD_HEADING = "[世界设定/背景知识]"
DEFAULT_AI_PERSONA = "一个正在与人交流的对象。"
DEFAULT_USER_PERSONA = "普通对话者。"


def load_prompt_template(name: str, locale: str = "zh") -> Template:
    """根据模板名和语言加载提示词模板。"""

    fname = PROMPTS_DIR / locale / f"{name}.md"
    return Template(fname.read_text(encoding="utf-8"))


def format_world_entries(entries: Iterable[WorldEntry]) -> str:
    """按 front → middle → back 分组拼接世界书条目，组内保持输入顺序。"""

    groups: Dict[str, List[str]] = {"front": [], "middle": [], "back": []}
    for entry in entries:
        groups[entry.position].append(f"【{entry.title}】: {entry.content}")
    blocks = ["\n".join(lines) for lines in groups.values() if lines]
    return "\n".join([WORLD_HEADING, *blocks])


def _local_time(tz_name: str, now: datetime) -> str:
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(code="INVALID_TIMEZONE", message=f"Unknown timezone: {tz_name!r}")
    return now.astimezone(tz).strftime("%H:%M")


def build_time_context(config: ChatConfig, now: Optional[datetime] = None) -> str:
    """时间感知块；未开启 time_awareness 时返回空串。"""

    if not config.time_awareness:
        return ""
    now = now or datetime.now(timezone.utc)
    ai_time = _local_time(config.ai_timezone, now)
    user_time = _local_time(config.user_timezone, now)
    return f"[时空校准] 当前你的本地时间是 {ai_time}，对方的时间是 {user_time}。"


def build_output_control(config: ChatConfig) -> str:
    return load_prompt_template("output_control").substitute(
        min_count=config.min_response_count,
        max_count=config.max_response_count,
        msg_break=MSG_BREAK,
        max_chars=config.max_character_count,
    ).strip()


def build_system_instruction(config: ChatConfig, now: Optional[datetime] = None) -> str:
    """把 ChatConfig 编译成系统指令。

    段落顺序固定：核心人设 → 交互对象 → 世界设定与时间 → 语言与格式要求 → 开发者声明。
    now 仅用于测试注入，默认取当前时刻。
    """

    return load_prompt_template("roleplay_system").substitute(
        ai_persona=config.ai_persona or DEFAULT_AI_PERSONA,
        user_name=config.user_name,
        user_persona=config.user_persona or DEFAULT_USER_PERSONA,
        world_context=format_world_entries(config.world_entries),
        time_context=build_time_context(config, now),
        language_directive=get_language_directive(config.language),
        output_control=build_output_control(config),
    ).strip()


def build_translation_prompt(text: str, language_name: str) -> str:
    return load_prompt_template("translate").substitute(
        language_name=language_name,
        text=text,
    ).strip()
