import json
from typing import Dict, List, Set, Union

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gameserve.api.dependencies import get_storage
from gameserve.config import Settings, get_settings
from gameserve.database import Base, get_db, get_optional_db
from gameserve.main import app
from gameserve.services.storage import StorageService

SERVICE_KEY = "service-key"
OBJECT_ROOT = "/storage/v1/object/published-games/"


class FakeBucket:
    """In-memory stand-in for the Supabase Storage REST API."""

    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.requests: List[str] = []
        self.status_overrides: Dict[str, int] = {}
        self.unreachable: Set[str] = set()

    def put(self, path: str, body: Union[bytes, str, dict, list]) -> None:
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.objects[path] = body

    def reads(self, path: str) -> int:
        return self.requests.count(path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        assert request.headers["authorization"] == f"Bearer {SERVICE_KEY}"
        assert request.url.path.startswith(OBJECT_ROOT)
        key = request.url.path[len(OBJECT_ROOT):]
        self.requests.append(key)

        if key in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if key in self.status_overrides:
            code = self.status_overrides[key]
            return httpx.Response(code, json={"statusCode": str(code), "error": "storage failure"})
        if key in self.objects:
            return httpx.Response(200, content=self.objects[key])
        # What Supabase actually returns for a missing object
        return httpx.Response(400, json={"statusCode": "404", "error": "not_found", "message": "Object not found"})


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        supabase_url="https://storage.test/",
        supabase_secret_key=SERVICE_KEY,
        site_url="https://playcraft.dev",
    )


@pytest.fixture
def bucket():
    return FakeBucket()


@pytest.fixture
def storage(settings, bucket):
    return StorageService(settings, transport=httpx.MockTransport(bucket.handler))


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(settings, storage, db_session):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_optional_db] = lambda: db_session
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
