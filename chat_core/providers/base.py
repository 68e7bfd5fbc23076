"""厂商原生会话能力接口。

chat_core 不直接依赖任何厂商 SDK，而是依赖此协议：

- 上层把某个厂商 SDK 包装成 VendorSession 注入进来（测试里注入替身）。
- NativeClient 只通过这里的三个方法与厂商交互。

这样协议选择逻辑与具体厂商绑定完全隔离。
"""

from typing import Any, Iterable, Protocol


class VendorSession(Protocol):
    """厂商原生会话能力。

    - create_session: 以模型、系统指令、温度创建一个有状态的对话会话，返回不透明句柄。
    - stream_send: 在会话上发送一条用户消息，逐段产出文本增量；序列有限且正常结束。
    - generate_content: 一次性非流式生成，不占用对话会话（翻译使用）。
    """

    def create_session(self, model: str, instruction: str, temperature: float) -> Any:
        ...

    def stream_send(self, handle: Any, text: str) -> Iterable[str]:
        ...

    def generate_content(self, model: str, prompt: str) -> str:
        ...
