"""Render a PDF page to PNG and transcribe it to markdown with a vision model."""

__version__ = "1.0.0"
