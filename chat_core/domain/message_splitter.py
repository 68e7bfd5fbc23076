"""把模型的整段回复拆成多条独立消息。

系统提示词要求模型用 MSG_BREAK 分隔多条消息，这里是该约定的消费方。
"""

from typing import List

MSG_BREAK = "---MSG_BREAK---"


def split_messages(full_text: str) -> List[str]:
    """按分隔符拆分回复，去掉首尾空白并丢弃空段。

    模型没有使用分隔符、或者拆完全是空段时，只要原文非空就整体作为一条消息返回。
    """

    parts = [part.strip() for part in full_text.split(MSG_BREAK)]
    parts = [part for part in parts if part]
    if parts:
        return parts
    whole = full_text.strip()
    return [whole] if whole else []
