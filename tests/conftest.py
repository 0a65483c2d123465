import pytest

from chatgpt_cli.config import (
    ENV_API_KEY,
    ENV_API_URL,
    ENV_CONFIG_DIR,
    ENV_MAX_TOKENS,
    ENV_MODEL,
    ENV_TEMPERATURE,
    ENV_TIMEOUT,
    Config,
)

ALL_ENV_VARS = [
    ENV_API_KEY,
    ENV_API_URL,
    ENV_MODEL,
    ENV_TIMEOUT,
    ENV_MAX_TOKENS,
    ENV_TEMPERATURE,
    ENV_CONFIG_DIR,
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ALL_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "chatgpt-cli"
    monkeypatch.setenv(ENV_CONFIG_DIR, str(path))
    return path


@pytest.fixture
def make_config(tmp_path):
    def _factory(**overrides):
        values = {"api_key": "sk-test-key-123456", "config_dir": tmp_path}
        values.update(overrides)
        return Config(**values)

    return _factory
