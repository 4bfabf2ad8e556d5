import base64

import httpx
import pytest

from app.config import Settings, get_settings
from app.main import app
from app.speech.service import build_ssml


@pytest.mark.parametrize("body", [{"text": ""}, {"text": "  \n"}, {"language": "urdu"}])
async def test_blank_text_is_rejected_without_calling_provider(client, azure, body):
    response = await client.post("/tts", json=body)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert azure.requests == []


async def test_urdu_speech(client, azure):
    response = await client.post("/tts", json={"text": "دل ہی تو ہے", "language": "urdu"})

    assert response.status_code == 200
    expected = "data:audio/mp3;base64," + base64.b64encode(azure.content).decode()
    assert response.json() == {"audio": expected, "success": True}

    [request] = azure.requests
    assert str(request.url) == "https://eastus.tts.speech.microsoft.com/cognitiveservices/v1"
    assert request.headers["Ocp-Apim-Subscription-Key"] == "test-azure-key"
    assert request.headers["Content-Type"] == "application/ssml+xml"
    assert request.headers["X-Microsoft-OutputFormat"] == "audio-16khz-32kbitrate-mono-mp3"
    ssml = request.content.decode("utf-8")
    assert 'xml:lang="ur-PK"' in ssml
    assert '<voice name="ur-PK-AsadNeural">' in ssml
    assert "دل ہی تو ہے" in ssml


async def test_english_is_the_default_voice(client, azure):
    response = await client.post("/tts", json={"text": "It is but a heart"})

    assert response.status_code == 200
    ssml = azure.requests[0].content.decode("utf-8")
    assert 'xml:lang="en-US"' in ssml
    assert '<voice name="en-US-AriaNeural">' in ssml


async def test_unknown_language_is_rejected(client, azure):
    response = await client.post("/tts", json={"text": "hello", "language": "klingon"})

    assert response.status_code == 400
    assert azure.requests == []


def test_ssml_escapes_markup():
    ssml = build_ssml("<b>love & loss</b>", "en-US-AriaNeural", "en-US")

    assert "&lt;b&gt;love &amp; loss&lt;/b&gt;" in ssml


async def test_provider_status_is_propagated(client, azure):
    azure.status_code = 401
    azure.content = b"Invalid subscription key"

    response = await client.post("/tts", json={"text": "hello"})

    assert response.status_code == 401
    body = response.json()
    assert body["code"] == "UPSTREAM_UNAVAILABLE"
    assert body["error"] == "Azure TTS Error: 401 - Invalid subscription key"


async def test_transport_failure(client, azure):
    azure.error = httpx.ConnectTimeout("timed out")

    response = await client.post("/tts", json={"text": "hello"})

    assert response.status_code == 500
    assert response.json()["code"] == "UPSTREAM_UNAVAILABLE"


@pytest.mark.parametrize("missing", ["azure_tts_key", "azure_tts_region"])
async def test_missing_credentials(client, azure, settings, missing):
    app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={missing: None})

    response = await client.post("/tts", json={"text": "hello"})

    assert response.status_code == 500
    assert response.json() == {"error": "Azure TTS credentials not configured", "code": "CONFIGURATION_ERROR"}
    assert azure.requests == []


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_server_settings_come_from_environment(monkeypatch):
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")

    settings = Settings(_env_file=None)

    assert (settings.host, settings.port) == ("127.0.0.1", 9000)
