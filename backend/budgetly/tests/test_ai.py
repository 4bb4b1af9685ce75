"""
Tests for the AI service and the /api/test-ai endpoint.
"""
import asyncio
import base64
import json
import httpx
import pytest
from budgetly.core.config import settings
from budgetly.models.expense import Currency, ExpenseCategory
from budgetly.services import ai_service
from budgetly.services.ai_service import AIServiceError, parse_expense_items

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
PNG_BASE64 = base64.b64encode(PNG_BYTES).decode("utf-8")


def chat_reply(content):
    """OpenAI chat completion body carrying the given message content."""
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


def test_test_ai_requires_auth(client):
    response = client.post("/api/test-ai", json={"prompt": "hi"})
    assert response.status_code == 401


def test_prompt_returns_text(auth_client, mock_openai):
    requests = mock_openai(lambda request: chat_reply("Spend less on coffee."))

    response = auth_client.post("/api/test-ai", json={"prompt": "How do I save money?"})
    assert response.status_code == 200
    assert response.json() == {"response": "Spend less on coffee."}

    sent = json.loads(requests[0].content)
    assert sent["model"] == settings.OPENAI_MODEL
    assert sent["messages"][-1] == {"role": "user", "content": "How do I save money?"}
    assert requests[0].headers["Authorization"] == f"Bearer {settings.OPENAI_API_KEY}"


def test_image_returns_items(auth_client, mock_openai):
    reply = """```json
[
  {"amount": 45000, "currency": "VND", "category": "food"},
  {"amount": 12.5, "currency": "usd", "category": "health"},
  {"amount": 3, "currency": "gbp", "category": "food"}
]
```"""
    requests = mock_openai(lambda request: chat_reply(reply))

    response = auth_client.post("/api/test-ai", json={"prompt": "", "image": PNG_BASE64})
    assert response.status_code == 200
    assert response.json() == {"response": [
        {"amount": 45000, "currency": "vnd", "category": "food"},
        {"amount": 12.5, "currency": "usd", "category": "health"},
    ]}

    sent = json.loads(requests[0].content)
    assert sent["model"] == settings.OPENAI_VISION_MODEL
    content = sent["messages"][-1]["content"]
    assert content[1]["image_url"]["url"] == f"data:image/png;base64,{PNG_BASE64}"
    assert "Additional instructions" not in content[0]["text"]


def test_image_with_prompt_passes_instructions(auth_client, mock_openai):
    requests = mock_openai(lambda request: chat_reply("[]"))

    response = auth_client.post("/api/test-ai", json={"prompt": "Only the drinks", "image": PNG_BASE64})
    assert response.status_code == 200
    assert response.json() == {"response": []}

    text = json.loads(requests[0].content)["messages"][-1]["content"][0]["text"]
    assert text.endswith("Only the drinks")


def test_data_url_prefix_is_accepted(auth_client, mock_openai):
    mock_openai(lambda request: chat_reply("[]"))
    response = auth_client.post("/api/test-ai", json={"image": f"data:image/png;base64,{PNG_BASE64}"})
    assert response.status_code == 200


def test_empty_request_rejected(auth_client, mock_openai):
    requests = mock_openai(lambda request: chat_reply("unused"))
    response = auth_client.post("/api/test-ai", json={"prompt": "   "})
    assert response.status_code == 400
    assert "error" in response.json()
    assert requests == []


def test_invalid_base64_rejected(auth_client, mock_openai):
    mock_openai(lambda request: chat_reply("[]"))
    response = auth_client.post("/api/test-ai", json={"image": "not base64!!"})
    assert response.status_code == 400
    assert response.json() == {"error": "Image is not valid base64"}


def test_oversized_image_rejected(auth_client, mock_openai, monkeypatch):
    requests = mock_openai(lambda request: chat_reply("[]"))
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 8)

    response = auth_client.post("/api/test-ai", json={"image": PNG_BASE64})
    assert response.status_code == 400
    assert response.json() == {"error": "Image is too large"}
    assert requests == []


def test_decode_image_size_limit(monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", len(PNG_BYTES))
    assert ai_service.decode_image(PNG_BASE64) == PNG_BYTES

    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", len(PNG_BYTES) - 1)
    with pytest.raises(ValueError, match="too large"):
        ai_service.decode_image(PNG_BASE64)


def test_upstream_error_is_502(auth_client, mock_openai):
    mock_openai(lambda request: httpx.Response(500, text="boom"))
    response = auth_client.post("/api/test-ai", json={"prompt": "hi"})
    assert response.status_code == 502
    assert response.json() == {"error": "AI provider returned status 500"}


def test_empty_choices_is_502(auth_client, mock_openai):
    mock_openai(lambda request: httpx.Response(200, json={"choices": []}))
    response = auth_client.post("/api/test-ai", json={"prompt": "hi"})
    assert response.status_code == 502
    assert response.json() == {"error": "AI response was malformed"}


def test_non_json_provider_body_is_502(auth_client, mock_openai):
    mock_openai(lambda request: httpx.Response(200, text="<html>gateway</html>"))
    response = auth_client.post("/api/test-ai", json={"prompt": "hi"})
    assert response.status_code == 502
    assert response.json() == {"error": "AI response was malformed"}


def test_unparseable_image_reply_is_502(auth_client, mock_openai):
    mock_openai(lambda request: chat_reply("I could not read this receipt."))
    response = auth_client.post("/api/test-ai", json={"image": PNG_BASE64})
    assert response.status_code == 502
    assert response.json()["error"] == "AI response was not valid JSON"


def test_missing_api_key(auth_client, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
    response = auth_client.post("/api/test-ai", json={"prompt": "hi"})
    assert response.status_code == 502
    assert "OPENAI_API_KEY" in response.json()["error"]


def test_timeout_raises_service_error(mock_openai):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    mock_openai(handler)
    with pytest.raises(AIServiceError, match="timed out"):
        asyncio.run(ai_service.generate_response("hi"))


def test_generate_response_requires_input():
    with pytest.raises(ValueError):
        asyncio.run(ai_service.generate_response("", None))


def test_parse_wrapped_items():
    items = parse_expense_items('{"items": [{"amount": 10, "currency": "eur", "category": "rent"}]}')
    assert len(items) == 1
    assert items[0].currency is Currency.EUR
    assert items[0].category is ExpenseCategory.RENT


def test_parse_single_item_object():
    items = parse_expense_items('{"amount": 7, "currency": "usd", "category": "utility"}')
    assert [item.amount for item in items] == [7]


def test_parse_skips_non_positive_amounts():
    items = parse_expense_items('[{"amount": -4, "currency": "usd", "category": "food"}, {"amount": 4, "currency": "usd", "category": "food"}]')
    assert [item.amount for item in items] == [4]


def test_parse_rejects_non_list():
    with pytest.raises(AIServiceError):
        parse_expense_items('"just a string"')


def test_detect_image_format():
    assert ai_service.detect_image_format(b"\xff\xd8\xff\xe0rest") == "jpeg"
    assert ai_service.detect_image_format(PNG_BYTES) == "png"
    assert ai_service.detect_image_format(b"GIF89a") == "gif"
    assert ai_service.detect_image_format(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "webp"
    assert ai_service.detect_image_format(b"unknown") == "jpeg"
