"""
Entry point to run the AI Search Stream backend with one command.

Usage:
    python main.py

The web UI (or `ai_search_stream.client`) then talks to
http://localhost:8000/search/stream.
"""

import uvicorn

from ai_search_stream.backend import app
from ai_search_stream.config import settings
from ai_search_stream.logging_config import configure_logging


if __name__ == "__main__":
    configure_logging(settings.log_level)
    uvicorn.run(app, host="0.0.0.0", port=8000)
