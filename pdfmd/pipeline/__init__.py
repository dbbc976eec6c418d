"""PDF page rasterization pipeline."""
