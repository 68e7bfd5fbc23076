"""语言与协议相关的固定配置。

本模块把“语言代码”与提示词中使用的文本解耦：

- LANGUAGE_DIRECTIVES: 系统提示词中的强制语言指令块。
- LANGUAGE_NAMES: 翻译提示词中使用的目标语言名称。

未知语言代码统一回落到 DEFAULT_LANGUAGE（中文）。
"""

from typing import Mapping

DEFAULT_LANGUAGE = "zh"

LANGUAGE_DIRECTIVES: Mapping[str, str] = {
    "zh": "### 核心指令：强制语言环境\n你必须且只能使用“中文（简体中文）”进行回复。",
    "ja": "### 核心指令：强制语言环境\n你现在必须且只能使用“日语（日本語）”进行所有回复。",
    "en": "### CORE INSTRUCTION: MANDATORY LANGUAGE\nYou MUST respond exclusively in English.",
    "ko": "### 핵심 지침: 필수 언어 설정\n당신은 이제부터 오직 “한국어”로만 답변해야 합니다.",
}

LANGUAGE_NAMES: Mapping[str, str] = {
    "zh": "中文（简体）",
    "ja": "日语（日本語）",
    "en": "英语（English）",
    "ko": "韩语（한국어）",
}

# 通用协议的聊天补全端点（相对 base URL）
CHAT_COMPLETIONS_PATH = "/v1/chat/completions"


def get_language_directive(code: str) -> str:
    """根据语言代码获取强制语言指令，未知代码回落到中文。"""

    return LANGUAGE_DIRECTIVES.get(code, LANGUAGE_DIRECTIVES[DEFAULT_LANGUAGE])


def get_language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, LANGUAGE_NAMES[DEFAULT_LANGUAGE])
