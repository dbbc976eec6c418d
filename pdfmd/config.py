"""Central configuration for pdf-page-markdown, read from environment variables."""

import logging
import math
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Points to pixels: 1.0 renders at 72 DPI, 2.0 at 144 DPI
DEFAULT_RENDER_SCALE = 2.0
MIN_RENDER_SCALE = 0.1
MAX_RENDER_SCALE = 8.0
DEFAULT_VISION_TIMEOUT = 120
SUPPORTED_PROVIDERS = ("qwen", "openai")
DEFAULT_MODELS = {
    "qwen": "qwen-vl-max",
    "openai": "gpt-4o",
}


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
            return pyproject.get("project", {}).get("version", "1.0.0")
    except (OSError, ImportError, ValueError):
        # Installed without the source tree
        from . import __version__
        return __version__


def get_vision_api_url() -> Optional[str]:
    """Get vision model endpoint URL.

    Returns:
        URL from QWEN_API_URL environment variable, or None
    """
    return os.getenv('QWEN_API_URL') or None


def get_vision_api_key() -> Optional[str]:
    """Get vision model API key.

    Returns:
        API key from QWEN_API_KEY environment variable, or None
    """
    return os.getenv('QWEN_API_KEY') or None


def get_vision_provider() -> str:
    """Get vision provider name.

    Returns:
        Provider name ("qwen" or "openai"), default "qwen"
    """
    provider = os.getenv('VISION_PROVIDER', 'qwen').lower()
    if provider not in SUPPORTED_PROVIDERS:
        logger.warning(f"Invalid vision provider: {provider}, using 'qwen'")
        return 'qwen'
    return provider


def get_vision_model(provider: Optional[str] = None) -> str:
    """Get vision model name (provider-specific default if VISION_MODEL is not set)."""
    model = os.getenv('VISION_MODEL')
    if model:
        return model
    return DEFAULT_MODELS.get(provider or get_vision_provider(), DEFAULT_MODELS["qwen"])


def get_vision_timeout() -> int:
    """Get vision request timeout in seconds (VISION_TIMEOUT, default 120)."""
    raw = os.getenv('VISION_TIMEOUT')
    if not raw:
        return DEFAULT_VISION_TIMEOUT
    try:
        timeout = int(raw)
    except ValueError:
        logger.warning(f"Invalid VISION_TIMEOUT '{raw}', using {DEFAULT_VISION_TIMEOUT}")
        return DEFAULT_VISION_TIMEOUT
    if timeout <= 0:
        logger.warning(f"Invalid VISION_TIMEOUT '{raw}', using {DEFAULT_VISION_TIMEOUT}")
        return DEFAULT_VISION_TIMEOUT
    return timeout


def get_render_scale() -> float:
    """Get page rendering scale factor.

    Returns:
        Scale from PDFMD_RENDER_SCALE environment variable, default 2.0.
        Values that are not finite numbers within
        MIN_RENDER_SCALE..MAX_RENDER_SCALE fall back to the default.
    """
    raw = os.getenv('PDFMD_RENDER_SCALE')
    if not raw:
        return DEFAULT_RENDER_SCALE
    try:
        scale = float(raw)
    except ValueError:
        logger.warning(f"Invalid PDFMD_RENDER_SCALE '{raw}', using {DEFAULT_RENDER_SCALE}")
        return DEFAULT_RENDER_SCALE
    if not math.isfinite(scale) or not MIN_RENDER_SCALE <= scale <= MAX_RENDER_SCALE:
        logger.warning(f"Invalid PDFMD_RENDER_SCALE '{raw}', using {DEFAULT_RENDER_SCALE}")
        return DEFAULT_RENDER_SCALE
    return scale


def require_vision_credentials(provider: Optional[str] = None) -> tuple:
    """Return (api_url, api_key) or raise if either is missing.

    The OpenAI provider only needs the key; its URL may be left unset to use
    the SDK default.

    Raises:
        ConfigurationError: If required environment variables are not set
    """
    api_url = get_vision_api_url()
    api_key = get_vision_api_key()
    if (provider or get_vision_provider()) == 'openai':
        if not api_key:
            raise ConfigurationError(
                "Missing required environment variable: QWEN_API_KEY must be set"
            )
        return api_url, api_key
    if not api_url or not api_key:
        raise ConfigurationError(
            "Missing required environment variables: QWEN_API_URL and QWEN_API_KEY must be set"
        )
    return api_url, api_key
