"""对上层 UI 暴露的会话接口。"""
