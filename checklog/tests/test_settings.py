from pathlib import Path
import pytest

from checklog.history import settings as settings_mod
from checklog.history.settings import load_settings, reset_runtime_cache

_ENV_KEYS = [
    'CHECKLOG_ARTIFACT_NAME', 'CHECKLOG_WORK_DIR', 'CHECKLOG_OUTPUT_DIR', 'CHECKLOG_HTTP_TIMEOUT',
    'GITHUB_API_URL', 'GITHUB_TOKEN', 'GITHUB_REPOSITORY', 'GITHUB_WORKFLOW',
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for k in _ENV_KEYS:
        monkeypatch.delenv(k, raising=False)
    monkeypatch.setenv('CHECKLOG_RUNTIME_FILE', str(tmp_path / 'missing.yml'))
    reset_runtime_cache()
    yield monkeypatch
    reset_runtime_cache()


def test_defaults(clean_env):
    s = load_settings()
    assert s.artifact_name == 'check-history'
    assert s.work_dir == Path('.checklog')
    assert s.http_timeout == 20.0
    assert s.api_url == 'https://api.github.com'
    assert s.token == ''


def test_runtime_file_overlay(clean_env, tmp_path):
    cfg = tmp_path / 'runtime.yml'
    cfg.write_text("checklog_artifact_name: lint-history\ngithub_api_url: https://ghe.example.com/api/v3/\n", encoding='utf-8')
    clean_env.setenv('CHECKLOG_RUNTIME_FILE', str(cfg))
    reset_runtime_cache()
    s = load_settings()
    assert s.artifact_name == 'lint-history'
    assert s.api_url == 'https://ghe.example.com/api/v3'


def test_env_wins_over_runtime_file(clean_env, tmp_path):
    cfg = tmp_path / 'runtime.yml'
    cfg.write_text("checklog_artifact_name: from-file\n", encoding='utf-8')
    clean_env.setenv('CHECKLOG_RUNTIME_FILE', str(cfg))
    clean_env.setenv('CHECKLOG_ARTIFACT_NAME', 'from-env')
    reset_runtime_cache()
    assert load_settings().artifact_name == 'from-env'


def test_bad_numeric_env_falls_back(clean_env):
    clean_env.setenv('CHECKLOG_HTTP_TIMEOUT', 'soon')
    assert load_settings().http_timeout == 20.0


def test_unparsable_runtime_file_is_ignored(clean_env, tmp_path):
    cfg = tmp_path / 'runtime.yml'
    cfg.write_text("key: [unclosed\n", encoding='utf-8')
    clean_env.setenv('CHECKLOG_RUNTIME_FILE', str(cfg))
    reset_runtime_cache()
    assert load_settings().artifact_name == 'check-history'
    assert settings_mod._RUNTIME_CACHE == {}


def test_bundled_runtime_file_exists():
    assert (settings_mod.CONFIG_DIR / 'runtime.yml').exists()
