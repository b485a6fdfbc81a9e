import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_file=tmp_path / "data" / "products.json",
        upload_dir=tmp_path / "uploads",
        cors_origins=["*"],
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
