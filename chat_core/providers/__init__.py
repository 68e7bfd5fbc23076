"""模型通道集成层。

该包下的模块负责：
- 定义厂商原生会话能力接口 (base)。
- 维护语言与端点等固定配置 (registry)。
- 提供两种通道的实现 (native_client、generic_client)。
- 在会话初始化时选择其中一种 (select_transport)。
"""

import logging
from typing import Optional, Union

from chat_core.config.settings import settings as default_settings
from chat_core.infrastructure.logging.logger import log_event
from chat_core.providers.base import VendorSession
from chat_core.providers.generic_client import GenericStreamClient
from chat_core.providers.native_client import NativeClient

Transport = Union[NativeClient, GenericStreamClient]


def is_vendor_url(base_url: str, cfg=default_settings) -> bool:
    return cfg.vendor_host in base_url


def select_transport(
    base_url: str,
    model: str,
    instruction: str,
    temperature: float,
    vendor: Optional[VendorSession] = None,
    cfg=default_settings,
) -> Transport:
    """根据 base URL 选择通道，每次会话初始化只调用一次。

    base URL 指向厂商域名且注入了 VendorSession 时走原生会话，否则走通用流式协议。
    """

    if is_vendor_url(base_url, cfg):
        if vendor is not None:
            return NativeClient(vendor, model, instruction, temperature, cfg)
        log_event(logging.WARNING, "Vendor URL without vendor session, using generic protocol", base_url=base_url)
    return GenericStreamClient(cfg)


__all__ = ["GenericStreamClient", "NativeClient", "Transport", "VendorSession", "select_transport"]
