"""Vision provider abstraction for Qwen VL and OpenAI-compatible models.

Images are constrained before sending: PNG or JPEG, max 4096 px longest side,
20 MB, one image per request.
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple

try:
    from openai import OpenAI
except ImportError:
    OpenAI = None

from PIL import Image

from .. import config
from .client import (
    MARKDOWN_PROMPT,
    AIAPIError,
    AIClientError,
    AIConnectionError,
    DEFAULT_MODEL,
    AIResponseError,
    QwenVLClient,
    image_data_uri,
)

logger = logging.getLogger(__name__)

VISION_MAX_PIXELS_LONGEST_SIDE = 4096
VISION_MAX_FILE_BYTES = 20 * 1024 * 1024  # 20 MB


def prepare_vision_image(image_bytes: bytes) -> Tuple[bytes, str]:
    """Enforce vision input limits on an encoded image.

    Images within limits are passed through untouched. Larger ones are scaled
    down so the longest side is <= 4096 px; if the PNG still exceeds 20 MB,
    JPEG at decreasing quality is tried.

    Returns:
        (image_bytes, mime_type) e.g. (b'...', 'image/png')

    Raises:
        ValueError: If the image cannot be decoded or made small enough
    """
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except Exception as e:
        raise ValueError(f"Vision input is not a readable image: {e}") from e

    with img:
        fmt = (img.format or "").lower()
        w, h = img.size
        longest = max(w, h)
        if fmt == "png" and longest <= VISION_MAX_PIXELS_LONGEST_SIDE and len(image_bytes) <= VISION_MAX_FILE_BYTES:
            return (image_bytes, "image/png")

        rgb = img.convert("RGB")
        if longest > VISION_MAX_PIXELS_LONGEST_SIDE:
            scale = VISION_MAX_PIXELS_LONGEST_SIDE / longest
            new_w = max(1, int(w * scale))
            new_h = max(1, int(h * scale))
            logger.info(f"Scaling vision image from {w}x{h} to {new_w}x{new_h}")
            rgb = rgb.resize((new_w, new_h), Image.Resampling.LANCZOS)

        buf = io.BytesIO()
        rgb.save(buf, format="PNG")
        out = buf.getvalue()
        if len(out) <= VISION_MAX_FILE_BYTES:
            return (out, "image/png")

        for q in [85, 70, 50]:
            buf = io.BytesIO()
            rgb.save(buf, format="JPEG", quality=q, optimize=True)
            if len(buf.getvalue()) <= VISION_MAX_FILE_BYTES:
                return (buf.getvalue(), "image/jpeg")
    raise ValueError(f"Image exceeds {VISION_MAX_FILE_BYTES // (1024*1024)} MB after scaling")


class VisionProvider(ABC):
    """Abstract base class for vision transcription providers."""

    name = "base"

    @abstractmethod
    def image_to_markdown(self, image_bytes: bytes) -> str:
        """Transcribe a page image to markdown.

        Args:
            image_bytes: PNG-encoded page image

        Returns:
            Markdown text

        Raises:
            AIClientError: If the service call fails or returns no text
        """
        pass


class QwenVLProvider(VisionProvider):
    """Qwen VL through the DashScope multimodal generation endpoint."""

    name = "qwen"

    def __init__(self, api_url: str, api_key: str, model: str = DEFAULT_MODEL, timeout: int = 120):
        self.client = QwenVLClient(api_url, api_key, model=model, timeout=timeout)
        self.model = model

    def image_to_markdown(self, image_bytes: bytes) -> str:
        try:
            img_bytes, mime = prepare_vision_image(image_bytes)
        except ValueError as e:
            raise AIClientError(str(e)) from e
        try:
            return self.client.image_to_markdown(img_bytes, mime=mime)
        except AIClientError as e:
            logger.error(f"Qwen VL API error: {e}")
            raise


class OpenAIVisionProvider(VisionProvider):
    """OpenAI (or OpenAI-compatible) chat completions with an image input."""

    name = "openai"

    def __init__(self, api_key: str, model: str = config.DEFAULT_MODELS["openai"], base_url: Optional[str] = None, timeout: int = 120):
        """Initialize OpenAI provider.

        Args:
            api_key: API key
            model: Model name (default: gpt-4o)
            base_url: Optional base URL for OpenAI-compatible endpoints
            timeout: Request timeout in seconds
        """
        if OpenAI is None:
            raise ImportError(
                "openai library is required. Install with: pip install openai"
            )

        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
        self.model = model

    def image_to_markdown(self, image_bytes: bytes) -> str:
        try:
            img_bytes, mime = prepare_vision_image(image_bytes)
        except ValueError as e:
            raise AIClientError(str(e)) from e

        user_content = [
            {"type": "image_url", "image_url": {"url": image_data_uri(img_bytes, mime)}},
            {"type": "text", "text": MARKDOWN_PROMPT},
        ]
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": user_content}],
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise _map_openai_error(e) from e

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content or not content.strip():
            raise AIResponseError(f"Unexpected API response format: {response!r}"[:500])
        return content.strip()


def _map_openai_error(e: Exception) -> AIClientError:
    """Translate openai SDK exceptions into the vision client taxonomy."""
    import openai

    if isinstance(e, (openai.APITimeoutError, openai.APIConnectionError)):
        return AIConnectionError(f"Failed to connect to OpenAI API: {e}")
    if isinstance(e, openai.APIStatusError):
        return AIAPIError(f"OpenAI API request failed: {e.status_code} - {e.message}", status_code=e.status_code)
    return AIClientError(f"Unexpected error: {e}")


def create_provider(
    provider: Optional[str] = None,
    api_url: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    timeout: Optional[int] = None,
) -> VisionProvider:
    """Create a vision provider, filling unset arguments from configuration.

    Raises:
        ConfigurationError: If credentials are missing or the provider is unknown
    """
    provider = (provider or config.get_vision_provider()).lower()
    if provider not in config.SUPPORTED_PROVIDERS:
        raise config.ConfigurationError(
            f"Unknown vision provider: {provider} (must be one of {', '.join(config.SUPPORTED_PROVIDERS)})"
        )
    if api_key is None or (provider == "qwen" and api_url is None):
        env_url, env_key = config.require_vision_credentials(provider)
        api_url = api_url or env_url
        api_key = api_key or env_key
    model = model or config.get_vision_model(provider)
    timeout = timeout or config.get_vision_timeout()

    logger.debug(f"Using vision provider {provider} with model {model}")
    if provider == "openai":
        return OpenAIVisionProvider(api_key, model=model, base_url=api_url, timeout=timeout)
    return QwenVLProvider(api_url, api_key, model=model, timeout=timeout)
