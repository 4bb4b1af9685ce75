"""
AI service for receipt extraction and free-text answers.
Uses the OpenAI Chat Completions API (vision model when an image is attached).
"""
import base64
import binascii
import json
import logging
from typing import List, Optional, Union
import httpx
from pydantic import ValidationError
from budgetly.core.config import settings
from budgetly.models.expense import Currency, ExpenseCategory
from budgetly.schemas.expense import ExpenseItem

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """Raised when the AI provider cannot produce a usable answer."""


CURRENCIES = [c.value for c in Currency]
CATEGORIES = [c.value for c in ExpenseCategory]

RECEIPT_PROMPT = f"""Analyze this receipt image and extract every purchased item or charge.

For each item, extract:
1. amount: the price paid, as a positive number
2. currency: one of {", ".join(CURRENCIES)}
3. category: one of {", ".join(CATEGORIES)}

Rules:
- Use "vnd" for Vietnamese dong (đ, VND), "usd" for dollars ($), "eur" for euros (€)
- Pick the closest category; groceries and restaurants are "food", taxis and fuel are "transportation",
  electricity, water, phone and internet are "utility", medicine and clinics are "health"
- SKIP subtotals, totals, taxes shown as summary lines, change and payment lines

Return a JSON array in this exact format:
[
  {{"amount": 45000, "currency": "vnd", "category": "food"}}
]

If nothing can be extracted, return an empty array: []

Return ONLY valid JSON, no explanation, no markdown formatting, no code blocks."""


def decode_image(image_base64: str) -> bytes:
    """
    Decode a base64 image, tolerating a leading "data:...;base64," prefix.

    Rejects images larger than MAX_UPLOAD_SIZE once decoded.
    """
    if image_base64.startswith("data:") and "," in image_base64:
        image_base64 = image_base64.split(",", 1)[1]
    # Encoded form is 4/3 of the decoded size; skip decoding obviously oversized input
    if len(image_base64) > (settings.MAX_UPLOAD_SIZE + 2) // 3 * 4:
        raise ValueError("Image is too large")
    try:
        content = base64.b64decode(image_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Image is not valid base64") from e
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValueError("Image is too large")
    return content


def detect_image_format(file_content: bytes) -> str:
    """Guess the image subtype from magic bytes."""
    if file_content.startswith(b'\xff\xd8\xff'):
        return "jpeg"
    if file_content.startswith(b'\x89PNG'):
        return "png"
    if file_content.startswith(b'GIF'):
        return "gif"
    if file_content[:4] == b'RIFF' and file_content[8:12] == b'WEBP':
        return "webp"
    return "jpeg"


def _strip_code_fence(content: str) -> str:
    content = content.strip()
    if content.startswith("```json"):
        content = content[7:]
    elif content.startswith("```"):
        content = content[3:]
    if content.endswith("```"):
        content = content[:-3]
    return content.strip()


def parse_expense_items(content: str) -> List[ExpenseItem]:
    """
    Parse a model reply into expense items.

    Accepts a bare JSON array, an object wrapping the array under "items",
    "expenses" or "transactions", or a single item object. Items that fail
    validation are skipped.
    """
    content = _strip_code_fence(content)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse AI JSON response: {e}. Response: {content[:200]}")
        raise AIServiceError("AI response was not valid JSON") from e

    if isinstance(data, dict):
        for key in ("items", "expenses", "transactions"):
            if key in data:
                data = data[key]
                break
        else:
            data = [data]

    if not isinstance(data, list):
        raise AIServiceError("AI response was not a list of items")

    items = []
    for raw in data:
        try:
            items.append(ExpenseItem.model_validate(raw))
        except ValidationError:
            logger.warning(f"Skipping invalid item in AI response: {raw}")

    logger.info(f"AI extracted {len(items)} expense items")
    return items


async def _chat_completion(model: str, messages: list, max_tokens: int) -> str:
    """Send a chat completion request and return the reply text."""
    if not settings.OPENAI_API_KEY:
        raise AIServiceError("OpenAI API key not configured. Set OPENAI_API_KEY in .env file")

    try:
        async with httpx.AsyncClient(timeout=settings.OPENAI_TIMEOUT) as client:
            response = await client.post(
                settings.OPENAI_API_URL,
                headers={
                    "Authorization": f"Bearer {settings.OPENAI_API_KEY}",
                    "Content-Type": "application/json"
                },
                json={
                    "model": model,
                    "messages": messages,
                    "temperature": 0.1,
                    "max_tokens": max_tokens
                }
            )
    except httpx.TimeoutException as e:
        logger.error("OpenAI API request timed out.")
        raise AIServiceError("AI request timed out") from e
    except httpx.HTTPError as e:
        logger.error(f"OpenAI API request failed: {e}")
        raise AIServiceError(f"AI request failed: {e}") from e

    if response.status_code != 200:
        logger.error(f"OpenAI API error {response.status_code}: {response.text}")
        raise AIServiceError(f"AI provider returned status {response.status_code}")

    try:
        result = response.json()
        return result["choices"][0]["message"].get("content") or ""
    except (ValueError, LookupError, AttributeError, TypeError) as e:
        logger.error(f"Malformed OpenAI API response: {response.text[:200]}")
        raise AIServiceError("AI response was malformed") from e


async def extract_receipt_items(file_content: bytes, prompt: Optional[str] = None) -> List[ExpenseItem]:
    """Extract expense items from a receipt image."""
    image_format = detect_image_format(file_content)
    image_base64 = base64.b64encode(file_content).decode("utf-8")

    text = RECEIPT_PROMPT
    if prompt:
        text = f"{RECEIPT_PROMPT}\n\nAdditional instructions from the user:\n{prompt}"

    content = await _chat_completion(
        settings.OPENAI_VISION_MODEL,
        [
            {
                "role": "system",
                "content": "You are an expert at extracting expense line items from receipt images. Always return valid JSON arrays."
            },
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": text},
                    {"type": "image_url", "image_url": {"url": f"data:image/{image_format};base64,{image_base64}"}}
                ]
            }
        ],
        max_tokens=2000
    )
    return parse_expense_items(content)


async def answer_prompt(prompt: str) -> str:
    """Free-text answer to a prompt."""
    return await _chat_completion(
        settings.OPENAI_MODEL,
        [
            {"role": "system", "content": "You are a helpful assistant for a personal budgeting app."},
            {"role": "user", "content": prompt}
        ],
        max_tokens=1000
    )


async def generate_response(prompt: str, image_base64: Optional[str] = None) -> Union[str, List[ExpenseItem]]:
    """
    Answer a prompt, or extract expense items when an image is attached.

    Raises ValueError for unusable input and AIServiceError for provider failures.
    """
    prompt = (prompt or "").strip()
    if not prompt and not image_base64:
        raise ValueError("A prompt or an image is required")

    if image_base64:
        return await extract_receipt_items(decode_image(image_base64), prompt or None)

    return await answer_prompt(prompt)
