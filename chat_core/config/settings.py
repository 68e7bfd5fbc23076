"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。
ChatConfig（人设、世界书、模型参数等）由上层 UI 提供，这里只放与部署环境相关的项。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("CHAT_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- 凭证 ----
    api_key: Optional[str] = Field(
        default=None,
        description="ChatConfig 未提供密钥时使用的兜底 API 密钥（环境变量 API_KEY）",
    )

    # ---- 协议选择 ----
    vendor_host: str = Field(
        default="generativelanguage.googleapis.com",
        description="base URL 中包含该域名时走厂商原生会话",
    )
    native_translation_model: str = Field(
        default="gemini-3-flash-preview",
        description="原生通道翻译使用的模型",
    )
    translation_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="通用通道翻译请求的温度",
    )

    # ---- HTTP ----
    http_timeout: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="HTTP 超时时间（秒），为空表示不设超时，由调用方自行控制",
    )

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_level: str = Field(default="INFO", description="日志级别")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = Settings()
