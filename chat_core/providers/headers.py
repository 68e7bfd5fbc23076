"""请求头构造。

HTTP 头只能承载 ASCII，用户误填中文等字符的密钥时直接跳过 Authorization，
请求照常发出（由服务端返回鉴权错误）。
"""

from typing import Dict


def is_header_safe(value: str) -> bool:
    """value 的每个字符都在 7-bit ASCII 范围内时返回 True。"""

    return value.isascii()


def build_headers(api_key: str) -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if is_header_safe(api_key):
        headers["Authorization"] = f"Bearer {api_key}"
    return headers
