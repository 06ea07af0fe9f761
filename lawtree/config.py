# === FILE: lawtree/config.py ===
"""
Loading and validation of the LawTree crawler configuration.
The schema is described and checked with Pydantic.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    model_validator,
)


class RetryPolicy(BaseModel):
    """Exponential backoff schedule used by the fetcher."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    initial_interval: float = Field(0.5, gt=0, description="First retry delay (seconds).")
    multiplier: float = Field(1.5, ge=1, description="Growth factor between retries.")
    randomization_factor: float = Field(0.5, ge=0, lt=1, description="Jitter, +/- share of the delay.")
    max_interval: float = Field(60.0, gt=0, description="Upper bound of a single delay (seconds).")
    max_elapsed_time: float = Field(900.0, gt=0, description="Retry budget per URL (seconds).")

    @model_validator(mode="after")
    def _check_bounds(self) -> RetryPolicy:
        if self.max_interval < self.initial_interval:
            raise ValueError("max_interval must be >= initial_interval")
        return self


class CrawlerConfig(BaseModel):
    """Configuration of one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    root_url: Optional[HttpUrl] = Field(None, description="Root index page of the code.")
    timeout: float = Field(30.0, gt=0, description="Timeout of one request (seconds).")
    user_agent: str = Field("LawTreeBot/1.0", min_length=1, description="User-Agent header.")
    concurrency: int = Field(4, ge=1, description="Maximum number of simultaneous fetches.")
    retry: RetryPolicy = Field(default_factory=RetryPolicy)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Read a YAML or JSON file and return a validated CrawlerConfig.

    With *path* ``None`` the default file is used when it exists, otherwise the
    built-in defaults. An explicit path that does not exist raises
    FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)
