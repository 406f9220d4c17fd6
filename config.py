"""
Configuration loaded from environment variables, optionally overlaid by a
JSON config file. Fail-fast on invalid values.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True, "extra": "ignore"}

    # Credentials (generated in the Aliyun console; required to send)
    access_key_id: str = Field(default="", description="Aliyun AccessKey ID")
    access_key_secret: str = Field(default="", description="Aliyun AccessKey secret")

    # API endpoints
    sms_endpoint: str = "https://dysmsapi.aliyuncs.com/"
    vms_endpoint: str = "https://dyvmsapi.aliyuncs.com/"
    region_id: str = "cn-hangzhou"

    # Transport
    timeout_sec: float = Field(default=10.0, gt=0)

    log_level: str = "INFO"

    # SMS defaults for the CLI
    phone_numbers: list[str] = Field(default_factory=list)
    sign_name: str = ""
    template_code: str = ""
    template_param: str = ""

    # Voice call defaults for the CLI
    called_show_number: str = ""
    called_number: str = ""
    tts_code: str = ""
    tts_param: str = ""


def has_credentials(cfg: Config) -> bool:
    return bool(cfg.access_key_id and cfg.access_key_secret)


def _read_config_file(path: str) -> dict:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"load config file error: {path}: {e}") from e
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ValueError(f"parse config error: {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"parse config error: {path}: expected a JSON object")
    return data


def load_config(path: str | None = None) -> Config:
    """
    Load and validate config from environment.

    If `path` points to a JSON file (e.g. config.json with access_key_id,
    access_key_secret, phone_numbers, sign_name, ...), its values win over
    the environment.
    """
    if path is None:
        return Config()
    return Config(**_read_config_file(path))
