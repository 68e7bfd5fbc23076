"""会话之外的独立服务（目前只有翻译）。"""
