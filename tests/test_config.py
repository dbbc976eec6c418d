"""Unit tests for environment-based configuration."""

import logging

import pytest

from pdfmd import config


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("QWEN_API_URL", "QWEN_API_KEY", "VISION_PROVIDER", "VISION_MODEL",
                 "VISION_TIMEOUT", "PDFMD_RENDER_SCALE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_render_scale_default(clean_env):
    assert config.get_render_scale() == 2.0


def test_render_scale_from_env(clean_env):
    clean_env.setenv("PDFMD_RENDER_SCALE", "1.5")
    assert config.get_render_scale() == 1.5


@pytest.mark.parametrize("raw", ["fast", "0", "-2", "20", "inf", "nan"])
def test_render_scale_invalid_falls_back(clean_env, caplog, raw):
    clean_env.setenv("PDFMD_RENDER_SCALE", raw)
    with caplog.at_level(logging.WARNING, logger="pdfmd.config"):
        assert config.get_render_scale() == config.DEFAULT_RENDER_SCALE
    assert "Invalid PDFMD_RENDER_SCALE" in caplog.text


def test_vision_provider_default_and_invalid(clean_env, caplog):
    assert config.get_vision_provider() == "qwen"
    clean_env.setenv("VISION_PROVIDER", "OpenAI")
    assert config.get_vision_provider() == "openai"
    clean_env.setenv("VISION_PROVIDER", "bard")
    with caplog.at_level(logging.WARNING, logger="pdfmd.config"):
        assert config.get_vision_provider() == "qwen"
    assert "Invalid vision provider" in caplog.text


def test_vision_model(clean_env):
    assert config.get_vision_model() == "qwen-vl-max"
    assert config.get_vision_model("openai") == "gpt-4o"
    clean_env.setenv("VISION_MODEL", "qwen-vl-plus")
    assert config.get_vision_model() == "qwen-vl-plus"


def test_vision_timeout(clean_env):
    assert config.get_vision_timeout() == 120
    clean_env.setenv("VISION_TIMEOUT", "30")
    assert config.get_vision_timeout() == 30
    clean_env.setenv("VISION_TIMEOUT", "soon")
    assert config.get_vision_timeout() == 120


def test_require_credentials_missing(clean_env):
    with pytest.raises(config.ConfigurationError) as exc_info:
        config.require_vision_credentials()
    assert "QWEN_API_URL" in str(exc_info.value)
    assert "QWEN_API_KEY" in str(exc_info.value)


def test_require_credentials_present(clean_env):
    clean_env.setenv("QWEN_API_URL", "https://example.com/generation")
    clean_env.setenv("QWEN_API_KEY", "key")
    assert config.require_vision_credentials() == ("https://example.com/generation", "key")


def test_require_credentials_openai_needs_key_only(clean_env):
    clean_env.setenv("QWEN_API_KEY", "key")
    assert config.require_vision_credentials("openai") == (None, "key")


def test_empty_values_treated_as_unset(clean_env):
    clean_env.setenv("QWEN_API_URL", "")
    assert config.get_vision_api_url() is None


def test_app_version():
    assert config.get_app_version() == "1.0.0"


def test_render_scale_bounds_accepted(clean_env):
    clean_env.setenv("PDFMD_RENDER_SCALE", str(config.MAX_RENDER_SCALE))
    assert config.get_render_scale() == config.MAX_RENDER_SCALE
    clean_env.setenv("PDFMD_RENDER_SCALE", str(config.MIN_RENDER_SCALE))
    assert config.get_render_scale() == config.MIN_RENDER_SCALE


def test_renderer_shares_scale_constants():
    from pdfmd.pipeline import pdf_renderer
    assert pdf_renderer.DEFAULT_RENDER_SCALE is config.DEFAULT_RENDER_SCALE
    assert pdf_renderer.MAX_RENDER_SCALE == config.MAX_RENDER_SCALE


def test_client_default_model_matches_config():
    from pdfmd.ai import client
    assert client.DEFAULT_MODEL == config.DEFAULT_MODELS["qwen"]
