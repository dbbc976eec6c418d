"""Start the REST API with uvicorn."""
import os
import sys
from pathlib import Path

root = Path(__file__).parent.resolve()
sys.path.insert(0, str(root))

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "pdfmd.api.main:app",
        host=os.getenv("PDFMD_HOST", "127.0.0.1"),
        port=int(os.getenv("PDFMD_PORT", "8000")),
    )
