"""领域层模型与协议。

包含：
- models: ChatConfig / WorldEntry / Message / ChatMessage。
- message_splitter: 按 MSG_BREAK 拆分模型回复。
- exceptions: 业务异常类型定义。
"""
