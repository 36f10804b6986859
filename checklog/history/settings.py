"""Centralized settings with environment + runtime config overlay.

Lookup order for every value: environment variable, then the lower-cased
variable name in config/runtime.yml, then the built-in default.
"""
from __future__ import annotations
from pathlib import Path
import os, yaml
from dataclasses import dataclass

_RUNTIME_CACHE: dict | None = None

CONFIG_DIR = Path(__file__).resolve().parent.parent / 'config'

DEFAULT_ARTIFACT_NAME = 'check-history'


def _load_runtime() -> dict:
    global _RUNTIME_CACHE
    if _RUNTIME_CACHE is None:
        cfg_file = Path(os.getenv('CHECKLOG_RUNTIME_FILE') or CONFIG_DIR / 'runtime.yml')
        if cfg_file.exists():
            try:
                _RUNTIME_CACHE = yaml.safe_load(cfg_file.read_text(encoding='utf-8')) or {}
            except yaml.YAMLError:
                _RUNTIME_CACHE = {}
        else:
            _RUNTIME_CACHE = {}
    return _RUNTIME_CACHE


def reset_runtime_cache():
    global _RUNTIME_CACHE
    _RUNTIME_CACHE = None


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is not None:
        try:
            return float(v)
        except ValueError:
            return default
    try:
        return float(_load_runtime().get(name.lower(), default))
    except (TypeError, ValueError):
        return default


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    if v is not None:
        return v
    value = _load_runtime().get(name.lower(), default)
    return default if value is None else str(value)


@dataclass(frozen=True)
class Settings:
    artifact_name: str
    work_dir: Path
    output_dir: Path
    http_timeout: float
    api_url: str
    token: str
    repository: str
    workflow_name: str


def load_settings() -> Settings:
    return Settings(
        artifact_name=_env_str('CHECKLOG_ARTIFACT_NAME', DEFAULT_ARTIFACT_NAME),
        work_dir=Path(_env_str('CHECKLOG_WORK_DIR', '.checklog')),
        output_dir=Path(_env_str('CHECKLOG_OUTPUT_DIR', '.')),
        http_timeout=_env_float('CHECKLOG_HTTP_TIMEOUT', 20.0),
        api_url=_env_str('GITHUB_API_URL', 'https://api.github.com').rstrip('/'),
        token=_env_str('GITHUB_TOKEN', ''),
        repository=_env_str('GITHUB_REPOSITORY', ''),
        workflow_name=_env_str('GITHUB_WORKFLOW', ''),
    )
