"""
ChoreLog: Entry Point.

Single entry point: `python main.py` starts the HTTP API.
"""

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

import uvicorn

from src.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
    )
