"""FastAPI application exposing convert_pdf_page_to_markdown."""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from .. import config
from ..ai.client import AIClientError
from ..pipeline.converter import convert_pdf_page, convert_pdf_page_to_image
from ..pipeline.errors import (
    InvalidArgumentError,
    PageOutOfRangeError,
    PDFParseError,
    PDFRenderError,
)
from .models import ErrorResponse, HealthResponse, MarkdownResponse, PageRequest

logger = logging.getLogger(__name__)

app = FastAPI(
    title="PDF Page to Markdown API",
    description="Convert a specific page from a PDF file to markdown using a vision model",
    version=config.get_app_version(),
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def _to_http_error(e: Exception, action: str = "converting PDF page to markdown") -> HTTPException:
    """Map pipeline and vision errors to HTTP errors, keeping the cause text."""
    message = f"Error {action}: {e}"
    if isinstance(e, (InvalidArgumentError, PageOutOfRangeError)):
        return HTTPException(status_code=400, detail=message)
    if isinstance(e, FileNotFoundError):
        return HTTPException(status_code=404, detail=message)
    if isinstance(e, PDFParseError):
        return HTTPException(status_code=422, detail=message)
    if isinstance(e, config.ConfigurationError):
        return HTTPException(status_code=503, detail=message)
    if isinstance(e, AIClientError):
        return HTTPException(status_code=502, detail=message)
    return HTTPException(status_code=500, detail=message)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "PDF Page to Markdown API",
        "version": config.get_app_version(),
        "docs": "/docs",
    }


@app.get("/api/health", response_model=HealthResponse)
def health():
    """Report service status and whether vision credentials are configured."""
    try:
        config.require_vision_credentials()
        configured = True
    except config.ConfigurationError:
        configured = False
    return HealthResponse(
        status="ok",
        version=config.get_app_version(),
        vision_provider=config.get_vision_provider(),
        vision_configured=configured,
    )


@app.post("/api/pages/markdown", response_model=MarkdownResponse, responses=ERROR_RESPONSES)
def convert_page_to_markdown(request: PageRequest):
    """Convert one PDF page to markdown.

    The page is rendered to PNG and transcribed by the configured vision model.
    """
    try:
        markdown, image = convert_pdf_page(
            request.pdf_path, request.page_number, scale=request.scale
        )
    except (OSError, PDFParseError, PDFRenderError, PageOutOfRangeError, InvalidArgumentError,
            AIClientError, config.ConfigurationError) as e:
        logger.warning(f"Conversion failed for {request.pdf_path} page {request.page_number}: {e}")
        raise _to_http_error(e) from e

    return MarkdownResponse(
        pdf_path=request.pdf_path,
        page_number=request.page_number,
        markdown=markdown,
        image_bytes=len(image),
    )


@app.post(
    "/api/pages/image",
    response_class=Response,
    responses={**ERROR_RESPONSES, 200: {"content": {"image/png": {}}}},
)
def convert_page_to_image(request: PageRequest):
    """Render one PDF page and return the PNG."""
    try:
        image = convert_pdf_page_to_image(
            request.pdf_path, request.page_number, scale=request.scale
        )
    except (OSError, PDFParseError, PDFRenderError, PageOutOfRangeError, InvalidArgumentError) as e:
        logger.warning(f"Rendering failed for {request.pdf_path} page {request.page_number}: {e}")
        raise _to_http_error(e, action="rendering PDF page") from e

    return Response(content=image, media_type="image/png")
