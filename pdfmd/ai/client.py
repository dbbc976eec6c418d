"""HTTP client for the Qwen VL (DashScope) multimodal generation API."""

import base64
import json
import logging
from typing import Any, Dict, Optional

import requests

from ..config import DEFAULT_MODELS

logger = logging.getLogger(__name__)

DEFAULT_MODEL = DEFAULT_MODELS["qwen"]
MARKDOWN_PROMPT = (
    "Please convert this image to markdown format. "
    "Extract all text, tables, and structure accurately."
)


class AIClientError(Exception):
    """Base exception for vision client errors."""
    pass


class AIConnectionError(AIClientError):
    """Raised when connection to the vision service fails."""
    pass


class AIAPIError(AIClientError):
    """Raised when the vision API returns a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AIResponseError(AIClientError):
    """Raised when the vision API response lacks the expected text."""
    pass


def image_data_uri(image_bytes: bytes, mime: str = "image/png") -> str:
    b64 = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime};base64,{b64}"


def build_request_body(image_bytes: bytes, mime: str = "image/png", model: str = DEFAULT_MODEL, prompt: str = MARKDOWN_PROMPT) -> Dict[str, Any]:
    """Build the DashScope multimodal request body for one image."""
    return {
        "model": model,
        "input": {
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"image": image_data_uri(image_bytes, mime)},
                        {"text": prompt},
                    ],
                }
            ]
        },
    }


def extract_text(result: Any) -> str:
    """Pull the transcription out of a DashScope response payload.

    Accepts both the flat ``output.text`` shape and the chat shape
    ``output.choices[0].message.content[*].text``.

    Raises:
        AIResponseError: If no text is present
    """
    output = result.get("output") if isinstance(result, dict) else None
    if isinstance(output, dict):
        text = output.get("text")
        if isinstance(text, str) and text:
            return text

        choices = output.get("choices") or []
        if choices and isinstance(choices[0], dict):
            content = (choices[0].get("message") or {}).get("content")
            if isinstance(content, str) and content:
                return content
            if isinstance(content, list):
                parts = [
                    item["text"] for item in content
                    if isinstance(item, dict) and isinstance(item.get("text"), str)
                ]
                if parts:
                    return "".join(parts)

    raise AIResponseError(f"Unexpected API response format: {json.dumps(result)[:500]}")


class QwenVLClient:
    """Client for the Qwen VL multimodal generation endpoint."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: int = 120
    ):
        """Initialize client.

        Args:
            api_url: Full endpoint URL (e.g. ".../multimodal-generation/generation")
            api_key: API key sent as a Bearer token
            model: Model name (default: qwen-vl-max)
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'Authorization': f'Bearer {api_key}',
        })

    def image_to_markdown(self, image_bytes: bytes, mime: str = "image/png", prompt: str = MARKDOWN_PROMPT) -> str:
        """Send one image and return the model's markdown transcription.

        Raises:
            AIConnectionError: If the request times out or cannot connect
            AIAPIError: If the API returns a non-2xx status
            AIResponseError: If the body is not JSON or lacks the text field
        """
        body = build_request_body(image_bytes, mime=mime, model=self.model, prompt=prompt)
        try:
            response = self.session.post(self.api_url, json=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise AIConnectionError(
                f"Request to {self.api_url} timed out after {self.timeout}s"
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise AIConnectionError(f"Failed to connect to {self.api_url}: {e}") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            reason = e.response.reason if e.response is not None else ""
            text = e.response.text[:500] if e.response is not None else ""
            raise AIAPIError(
                f"Qwen API request failed: {status} {reason} - {text}",
                status_code=status,
            ) from e

        try:
            result = response.json()
        except ValueError as e:
            raise AIResponseError(
                f"Qwen API returned invalid JSON: {response.text[:200]}"
            ) from e

        return extract_text(result)
