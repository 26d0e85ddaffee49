#!/usr/bin/env python3
"""
Startup script for the Task Manager Backend
This script starts the FastAPI server with proper configuration
"""

import logging
import os

import uvicorn
from dotenv import load_dotenv

from task_manager.config import setup_logging

logger = logging.getLogger("start_server")


def main():
    # Load environment variables
    load_dotenv()
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    # Server configuration
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "true").lower() == "true"

    logger.info(f"Starting Task Manager Backend Server on {host}:{port} (reload={reload})")

    # Start the server
    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


if __name__ == "__main__":
    main()
