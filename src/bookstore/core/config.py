import os
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field

ENV_PREFIX = "BOOKSTORE_"


class AppConfig(BaseModel):
    repository: Literal["memory", "sqlite"] = "memory"
    dsn: str = "sqlite://"
    seed_sample_data: bool = True
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = Field(3000, ge=1, le=65535)


def _env_overrides(environ: Dict[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in AppConfig.model_fields:
        key = ENV_PREFIX + name.upper()
        if key in environ and environ[key] != "":
            out[name] = environ[key]
    return out


def load_config(path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> AppConfig:
    """Build the app config from an optional YAML file, then ``BOOKSTORE_*`` env vars."""
    data: Dict[str, Any] = {}
    if path:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"config file must contain a mapping: {path}")
    data.update(_env_overrides(dict(os.environ) if environ is None else environ))
    return AppConfig(**data)
