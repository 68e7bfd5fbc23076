"""通用 chat/completions 流式客户端。

接口风格与 OpenAI 兼容服务一致：
- URL: {base_url}/v1/chat/completions
- 认证: Authorization: Bearer <api_key>（由 headers.build_headers 决定是否携带）
- 流式响应: 每行一帧 `data: <json>`，以 `data: [DONE]` 结束。

响应体按字节增量读取，由 StreamDeltaParser 负责跨块的 UTF-8 解码与按行切分，
因此无论网络分块落在多字节字符中间还是 JSON 帧中间，产出的增量序列都相同。
"""

import codecs
import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence

import httpx

from chat_core.config.settings import settings as default_settings
from chat_core.domain.exceptions import ApiError, NetworkError, RateLimitError
from chat_core.domain.models import ChatMessage
from chat_core.infrastructure.logging.logger import log_event
from chat_core.providers.registry import CHAT_COMPLETIONS_PATH


DATA_PREFIX = "data: "
DONE_MARKER = "[DONE]"


def parse_frame(line: str) -> Optional[str]:
    """解析一行 SSE 帧，返回其中的内容增量。

    空行、[DONE]、非 JSON 或结构不符的帧一律返回 None（丢弃该行，不中断流）。
    """

    if line.startswith(DATA_PREFIX):
        line = line[len(DATA_PREFIX):]
    data_str = line.strip()
    if not data_str or data_str == DONE_MARKER:
        return None
    try:
        payload = json.loads(data_str)
    except json.JSONDecodeError:
        return None
    try:
        content = payload["choices"][0]["delta"].get("content")
    except (KeyError, IndexError, TypeError, AttributeError):
        return None
    if isinstance(content, str) and content:
        return content
    return None


class StreamDeltaParser:
    """增量解析流式响应体。

    - 解码器状态跨 feed 保留，多字节字符被拆到两块时也能正确解码。
    - 行缓冲只保留最后一个不完整片段，完整的行立即解析。
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, data: bytes) -> List[str]:
        self._buffer += self._decoder.decode(data)
        *lines, self._buffer = self._buffer.split("\n")
        deltas: List[str] = []
        for line in lines:
            delta = parse_frame(line)
            if delta is not None:
                deltas.append(delta)
        return deltas

    @property
    def pending(self) -> str:
        """尚未遇到换行的剩余片段。"""

        return self._buffer


def _error_message(resp: httpx.Response) -> str:
    """优先取服务端返回的 error.message，解析失败时给出通用提示。"""

    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"请求失败: {resp.status_code}"


def _raise_for_status(resp: httpx.Response) -> None:
    if 200 <= resp.status_code < 300:
        return
    message = _error_message(resp)
    if resp.status_code == 429:
        raise RateLimitError(code="RATE_LIMIT", message=message, http_status=429)
    raise ApiError(code="API_ERROR", message=message, http_status=resp.status_code)


class GenericStreamClient:
    """OpenAI 兼容协议客户端。

    每次 send_stream 调用都会新建一个连接；返回的生成器不可重启。
    """

    name = "generic"

    def __init__(self, cfg=default_settings):
        self._settings = cfg

    def send_stream(
        self,
        base_url: str,
        headers: Dict[str, str],
        model: str,
        messages: Sequence[ChatMessage],
        temperature: float,
    ) -> Iterator[str]:
        """发起一次流式对话，逐个 yield 内容增量。

        调用方提前结束迭代时，生成器关闭会退出 httpx 的 stream 上下文并释放连接。
        """

        payload = {
            "model": model,
            "messages": [m.to_payload() for m in messages],
            "temperature": temperature,
            "stream": True,
        }
        url = f"{base_url}{CHAT_COMPLETIONS_PATH}"
        log_event(logging.INFO, "Stream request started", model=model, messages=len(payload["messages"]))
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                with client.stream("POST", url, json=payload, headers=headers) as resp:
                    if not 200 <= resp.status_code < 300:
                        resp.read()
                        _raise_for_status(resp)
                    parser = StreamDeltaParser()
                    for chunk in resp.iter_bytes():
                        for delta in parser.feed(chunk):
                            yield delta
                    if parser.pending.strip():
                        # 末尾没有换行的片段按约定直接丢弃
                        log_event(logging.DEBUG, "Discarded trailing stream fragment", size=len(parser.pending))
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e))

    def complete(self, base_url: str, headers: Dict[str, str], payload: Dict[str, Any]) -> Dict[str, Any]:
        """非流式调用，返回响应 JSON。"""

        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(f"{base_url}{CHAT_COMPLETIONS_PATH}", json=payload, headers=headers)
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        _raise_for_status(resp)
        return resp.json()
