import os

# Required settings must exist before jobtracker.config / the container is imported
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import dataclasses

import pytest

from jobtracker.config import Config
from tests.helpers import FakeDatabase


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def config(upload_dir):
    base = Config.from_env()
    return dataclasses.replace(
        base,
        upload=dataclasses.replace(base.upload, upload_dir=str(upload_dir)),
        gemini=dataclasses.replace(base.gemini, timeout_seconds=2.0),
    )


@pytest.fixture
def fake_db():
    return FakeDatabase()
