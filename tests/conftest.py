"""
Shared test fixtures for the blog service.

The app is built through create_app with an in-memory SQLite database and a
fake media store, so no PostgreSQL server or Cloudinary account is needed.
"""
import os

# Must be set before apps.shared.database reads it at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "test-cloud")
os.environ.setdefault("CLOUDINARY_API_KEY", "test-key")
os.environ.setdefault("CLOUDINARY_API_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from apps.blog.main import create_app
from apps.blog.schemas import ImageAsset
from apps.shared.database import Database
from apps.shared.errors import MediaStoreError


class FakeMediaStore:
    """Records uploads and deletes instead of talking to Cloudinary."""

    def __init__(self):
        self.uploads = []
        self.destroyed = []
        self.fail_uploads = False
        self._counter = 0

    def upload(self, data: bytes, folder: str) -> ImageAsset:
        if self.fail_uploads:
            raise MediaStoreError("Upload rejected")
        self._counter += 1
        public_id = f"{folder}/image{self._counter}"
        self.uploads.append((folder, data))
        return ImageAsset(public_id=public_id, url=f"https://res.example.com/{public_id}.png")

    def destroy(self, public_id: str) -> None:
        self.destroyed.append(public_id)


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(database, media_store):
    app = create_app(database=database, media_store=media_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_post(client):
    """
    Factory for creating posts through the API.

    Usage:
        post = create_post("My title")
    """

    def _create(title="A post", content="Some content", feature=False):
        files = {"coverImage": ("cover.png", b"cover-bytes", "image/png")}
        if feature:
            files["featureImage"] = ("feature.png", b"feature-bytes", "image/png")
        response = client.post(
            "/api/posts",
            data={"title": title, "content": content},
            files=files,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
