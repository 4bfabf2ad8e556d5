"""
Shared fixtures: an in-process app with a temporary SQLite database,
a fake OpenAI client and a mocked Azure TTS endpoint.
"""

from types import SimpleNamespace
from typing import List, Optional

import httpx
import pytest

from app.config import Settings, get_settings
from app.core.dependencies import get_db, get_http_client, get_openai_client
from app.database import Database
from app.main import app
from app.rate_limit import limiter


class FakeCompletions:
    """Stands in for ``client.chat.completions``."""

    def __init__(self):
        self.reply: Optional[str] = ""
        self.error: Optional[Exception] = None
        self.calls: List[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self):
        self.completions = FakeCompletions()
        self.chat = SimpleNamespace(completions=self.completions)


class AzureStub:
    """Records TTS requests and answers with a configurable response."""

    def __init__(self):
        self.status_code = 200
        self.content = b"ID3-fake-mp3-bytes"
        self.error: Optional[Exception] = None
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.content)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url=None,
        openai_api_key="test-openai-key",
        jwt_secret_key="test-secret",
        jwt_expire_days=7,
        azure_tts_key="test-azure-key",
        azure_tts_region="eastus",
        rate_limit_enabled=False,
    )


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def openai_fake() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def azure() -> AzureStub:
    return AzureStub()


@pytest.fixture
async def client(database, settings, openai_fake, azure):
    async def override_get_db():
        async with database.session() as session:
            yield session

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(azure.handler))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_openai_client] = lambda: openai_fake
    app.dependency_overrides[get_http_client] = lambda: http_client
    limiter.enabled = False

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    await http_client.aclose()


@pytest.fixture
def register(client):
    """Sign a user up and return the response body."""

    async def _register(email: str = "ghalib@example.com",
                        password: str = "Hazaron-1797",
                        name: Optional[str] = None) -> dict:
        body = {"email": email, "password": password}
        if name is not None:
            body["name"] = name
        response = await client.post("/auth/signup", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def uncommitted_db(client, database):
    """
    Serve requests a session that is never committed on the way out.

    Writes only survive if the route commits them before it responds.
    """

    async def override_get_db():
        async with database.session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return database
