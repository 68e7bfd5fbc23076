from datetime import datetime, timezone

import pytest

from chat_core.domain.exceptions import ValidationError
from chat_core.domain.models import ChatConfig, WorldEntry
from chat_core.prompts import (
    DEFAULT_AI_PERSONA,
    WORLD_HEADING,
    build_system_instruction,
    format_world_entries,
)
from chat_core.providers.registry import LANGUAGE_DIRECTIVES


NOW = datetime(2024, 1, 1, 4, 5, tzinfo=timezone.utc)


def _entry(idx, position=None):
    return WorldEntry(
        id=f"e{idx}",
        title=f"T{idx}",
        content=f"C{idx}",
        category="place",
        injection_position=position,
    )


def test_world_entries_grouped_front_middle_back():
    entries = [
        _entry(1, "back"),
        _entry(2, None),
        _entry(3, "front"),
        _entry(4, "middle"),
        _entry(5, "front"),
        _entry(6, "back"),
    ]
    text = format_world_entries(entries)
    lines = text.split("\n")
    assert lines == [
        WORLD_HEADING,
        "【T3】: C3",
        "【T5】: C5",
        "【T2】: C2",
        "【T4】: C4",
        "【T1】: C1",
        "【T6】: C6",
    ]


def test_world_entries_each_line_once_in_instruction():
    entries = [_entry(i, pos) for i, pos in enumerate(["front", "middle", "back", None])]
    instruction = build_system_instruction(ChatConfig(world_entries=entries))
    for e in entries:
        assert instruction.count(f"【{e.title}】: {e.content}") == 1


def test_empty_world_has_heading_only():
    assert format_world_entries([]) == WORLD_HEADING


@pytest.mark.parametrize("code", ["zh", "ja", "en", "ko"])
def test_language_block_per_code(code):
    instruction = build_system_instruction(ChatConfig(language=code))
    assert LANGUAGE_DIRECTIVES[code] in instruction
    for other, block in LANGUAGE_DIRECTIVES.items():
        if other != code:
            assert block not in instruction


def test_unknown_language_falls_back_to_zh():
    instruction = build_system_instruction(ChatConfig(language="fr"))
    assert LANGUAGE_DIRECTIVES["zh"] in instruction


def test_time_block_uses_each_timezone():
    cfg = ChatConfig(time_awareness=True, ai_timezone="Asia/Tokyo", user_timezone="America/New_York")
    instruction = build_system_instruction(cfg, now=NOW)
    assert "当前你的本地时间是 13:05，对方的时间是 23:05" in instruction


def test_time_block_omitted_when_disabled():
    instruction = build_system_instruction(ChatConfig(time_awareness=False), now=NOW)
    assert "[时空校准]" not in instruction


def test_invalid_timezone_rejected():
    cfg = ChatConfig(time_awareness=True, ai_timezone="Mars/Olympus")
    with pytest.raises(ValidationError) as exc:
        build_system_instruction(cfg, now=NOW)
    assert exc.value.code == "INVALID_TIMEZONE"


def test_output_control_embeds_limits():
    cfg = ChatConfig(min_response_count=2, max_response_count=5, max_character_count=80)
    instruction = build_system_instruction(cfg)
    assert "拆分为 2 到 5 条独立的消息" in instruction
    assert '"---MSG_BREAK---"' in instruction
    assert "不得超过 80 个字符" in instruction


def test_section_order_and_defaults():
    cfg = ChatConfig(
        user_name="小明",
        user_persona="",
        ai_persona="",
        world_entries=[_entry(1)],
        time_awareness=True,
    )
    instruction = build_system_instruction(cfg, now=NOW)
    assert DEFAULT_AI_PERSONA in instruction
    assert "- 对方昵称：小明" in instruction
    markers = ["## 1. 核心人设", "## 2. 交互对象", WORLD_HEADING, "[时空校准]", "## 4. 语言与格式要求", "### 开发者声明"]
    positions = [instruction.index(m) for m in markers]
    assert positions == sorted(positions)


def test_persona_text_inserted_verbatim():
    persona = "价格是 $100 的 ${name} 商人"
    instruction = build_system_instruction(ChatConfig(ai_persona=persona))
    assert persona in instruction


def test_instruction_deterministic_without_time():
    cfg = ChatConfig(ai_persona="猫", world_entries=[_entry(1, "front")])
    assert build_system_instruction(cfg) == build_system_instruction(cfg)
