"""REST API exposing the PDF page to markdown tool."""
