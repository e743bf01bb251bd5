import pytest
from fastapi.testclient import TestClient

from svgcad.main import app


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv("SVGCAD_CONFIG_PATH", raising=False)
    monkeypatch.delenv("SVGCAD_WORKDIR", raising=False)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    directory = tmp_path / "drawings"
    directory.mkdir()
    monkeypatch.setenv("SVGCAD_WORKDIR", str(directory))
    return directory


@pytest.fixture
def client(workdir):
    return TestClient(app)
