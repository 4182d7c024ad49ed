"""Serve the Formula Finder API with uvicorn.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``8000``).  All other settings are
described in ``formula_finder_api/app/core/config.py``.

Usage:
    python run.py
"""
import os

import uvicorn


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("formula_finder_api.app.main:app", host=host, port=port, reload=False, log_level="info")


if __name__ == "__main__":
    main()
