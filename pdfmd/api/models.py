"""API request and response models."""

from typing import Optional

from pydantic import BaseModel, Field


class PageRequest(BaseModel):
    """Request model for page conversion endpoints."""

    pdf_path: str = Field(
        ...,
        description="Absolute path to the PDF file to convert. The file must exist and be readable."
    )
    page_number: int = Field(
        ...,
        description="Page number to convert (1-indexed). Must be between 1 and the total number of pages in the PDF."
    )
    scale: Optional[float] = Field(None, gt=0, description="Optional render scale (points to pixels)")


class MarkdownResponse(BaseModel):
    """Response model for the markdown conversion endpoint."""

    pdf_path: str
    page_number: int
    markdown: str
    image_bytes: int = Field(..., description="Size of the rendered PNG sent to the vision model")


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""

    status: str
    version: str
    vision_provider: str
    vision_configured: bool


class ErrorResponse(BaseModel):
    """Error response body."""

    detail: str
