import pytest

from dbgate.concurrency.shared import reset_gate
from dbgate.config import hierarchy


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep user/project config files and env vars out of every test."""
    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml")
    monkeypatch.chdir(tmp_path)
    for env_key in hierarchy._ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)
    reset_gate()
    yield tmp_path
    reset_gate()


@pytest.fixture
def project_config(tmp_path):
    """Write a dbgate.yaml in the working directory and return its path."""
    def _write(content: str):
        path = tmp_path / "dbgate.yaml"
        path.write_text(content)
        return path

    return _write
