import json

import httpx
import openai
import pytest

from app.core.dependencies import get_openai_client
from app.main import app

COUPLET = "ہزاروں خواہشیں ایسی کہ ہر خواہش پہ دم نکلے"

ANALYSIS = {
    "summary": "A couplet on the endlessness of desire.",
    "meaning": "So many desires, each worth dying for.",
    "poeticDevices": ["hyperbole", "repetition"],
    "themes": ["desire", "longing"],
    "emotionalTone": "wistful",
    "historicalContext": "Mirza Ghalib, 19th century Delhi.",
    "wordAnalysis": {"خواہش": "desire, wish"},
    "interpretation": "Fulfilment never catches up with wanting.",
    "englishTranslation": "Thousands of desires, each worth dying for.",
}


@pytest.mark.parametrize("body", [{"text": ""}, {"text": "   "}, {"text": "\n\t"}, {}])
async def test_blank_text_is_rejected_without_calling_provider(client, openai_fake, body):
    response = await client.post("/analyze", json=body)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert openai_fake.completions.calls == []


async def test_analysis_is_extracted_from_prose(client, openai_fake, settings):
    openai_fake.completions.reply = f"Certainly! Here you go:\n{json.dumps(ANALYSIS, ensure_ascii=False)}\nEnjoy."

    response = await client.post("/analyze", json={"text": COUPLET})

    assert response.status_code == 200, response.text
    assert response.json()["analysis"] == ANALYSIS

    [call] = openai_fake.completions.calls
    assert call["model"] == settings.openai_model
    assert call["max_tokens"] == 2048
    assert call["timeout"] == settings.openai_timeout_seconds
    assert COUPLET in call["messages"][0]["content"]


async def test_partial_reply_leaves_fields_empty(client, openai_fake):
    openai_fake.completions.reply = '{"summary": "Short"}'

    response = await client.post("/analyze", json={"text": COUPLET})

    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert analysis["summary"] == "Short"
    assert analysis["themes"] is None
    assert analysis["wordAnalysis"] is None


async def test_reply_without_json_is_malformed(client, openai_fake):
    openai_fake.completions.reply = "Sorry, I can't help with that."

    response = await client.post("/analyze", json={"text": COUPLET})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to parse AI response", "code": "MALFORMED_RESPONSE"}


async def test_reply_with_wrong_shape_is_malformed(client, openai_fake):
    openai_fake.completions.reply = '{"poeticDevices": 42}'

    response = await client.post("/analyze", json={"text": COUPLET})

    assert response.status_code == 500
    assert response.json()["code"] == "MALFORMED_RESPONSE"


async def test_provider_failure_is_upstream_unavailable(client, openai_fake):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    openai_fake.completions.error = openai.APIConnectionError(request=request)

    response = await client.post("/analyze", json={"text": COUPLET})

    assert response.status_code == 500
    assert response.json()["code"] == "UPSTREAM_UNAVAILABLE"


async def test_missing_api_key_is_configuration_error(client):
    app.dependency_overrides[get_openai_client] = lambda: None

    response = await client.post("/analyze", json={"text": COUPLET})

    assert response.status_code == 500
    assert response.json()["code"] == "CONFIGURATION_ERROR"


async def test_api_prefix_serves_the_same_route(client, openai_fake):
    openai_fake.completions.reply = '{"summary": "ok"}'

    response = await client.post("/api/analyze", json={"text": COUPLET})

    assert response.status_code == 200
    assert response.json()["analysis"]["summary"] == "ok"


async def test_truncated_reply_is_malformed(client, openai_fake):
    reply = json.dumps(ANALYSIS, ensure_ascii=False)
    openai_fake.completions.reply = reply[: reply.index('"interpretation"') + 30]

    response = await client.post("/analyze", json={"text": COUPLET})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to parse AI response", "code": "MALFORMED_RESPONSE"}
