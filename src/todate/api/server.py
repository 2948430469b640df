"""
ASGI entry point for the Todate API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
Environment variables are loaded from `.env` before the settings module is
first imported, so `TODATE_*` overrides there take effect.

Usage
-----
Run via the module entry point:
    $ python -m todate.api.server

Or via uvicorn directly:
    $ uvicorn todate.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #

load_dotenv(dotenv_path=Path(".env"))

from todate.api.app import create_app  # noqa: E402
from todate.core.settings import current_settings  # noqa: E402

app = create_app()


def main() -> None:
    """Run the API server locally for development."""
    cfg = current_settings()
    uvicorn.run(
        "todate.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=cfg.is_dev,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
