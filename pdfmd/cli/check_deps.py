"""Verify that the libraries the rendering and vision pipeline need are available."""

from __future__ import annotations

import sys
from typing import List, Tuple


def check_dependencies() -> List[Tuple[str, bool, str]]:
    """Check required dependencies. Returns list of (name, ok, message)."""
    results: List[Tuple[str, bool, str]] = []

    # --- Rendering ---
    try:
        import fitz  # pymupdf
        results.append(("pymupdf (fitz)", True, f"OK, MuPDF {fitz.VersionFitz}"))
    except ImportError as e:
        results.append(("pymupdf (fitz)", False, f"Missing: {e}"))

    try:
        import PIL
        results.append(("Pillow (PIL)", True, f"OK, version {PIL.__version__}"))
    except ImportError as e:
        results.append(("Pillow (PIL)", False, f"Missing: {e}"))

    # --- Vision service and API ---
    try:
        import requests
        results.append(("requests", True, "OK"))
    except ImportError as e:
        results.append(("requests", False, f"Missing: {e}"))

    try:
        import pydantic
        results.append(("pydantic", True, "OK"))
    except ImportError as e:
        results.append(("pydantic", False, f"Missing: {e}"))

    try:
        import fastapi
        results.append(("fastapi", True, "OK"))
    except ImportError as e:
        results.append(("fastapi", False, f"Missing: {e}"))

    try:
        import mcp
        results.append(("mcp", True, "OK"))
    except ImportError as e:
        results.append(("mcp", False, f"Missing: {e}"))

    try:
        import openai
        results.append(("openai (optional provider)", True, "OK"))
    except ImportError as e:
        results.append(("openai (optional provider)", False, f"Missing: {e}"))

    return results


def run_check(verbose: bool = True) -> bool:
    """Run dependency check, print report, return True if all OK."""
    results = check_dependencies()
    ok_count = sum(1 for _, ok, _ in results if ok)
    all_ok = ok_count == len(results)

    if verbose:
        print("Dependency check (rendering + vision pipeline)\n")
        for name, ok, msg in results:
            if ok and msg == "OK":
                print(f"  {name}: OK")
            else:
                status = "OK" if ok else "MISSING"
                print(f"  {name}: {status}  {msg}")
        print()
        if all_ok:
            print("All checked dependencies are available.")
        else:
            print(f"Problems with {len(results) - ok_count} of {len(results)}. Install missing with: pip install -e .")

    return all_ok


if __name__ == "__main__":
    success = run_check(verbose=True)
    sys.exit(0 if success else 1)
