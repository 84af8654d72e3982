"""Main application entry point.

Runs FastAPI with the NiceGUI chat interface mounted on the same server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

from gemini_chat.config import get_app_config  # noqa: E402

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once for the whole process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main() -> None:
    """Application entry point.

    FastAPI serves ``/api/chat`` and ``/health``, NiceGUI serves the chat
    page at ``/``. Both share one port.
    """
    config = get_app_config()
    configure_logging(config.log_level)

    # NiceGUI reads its storage location when first imported
    os.environ.setdefault("NICEGUI_STORAGE_PATH", str(config.data_dir))

    import uvicorn
    from nicegui import ui

    from gemini_chat.api.app import create_app
    from gemini_chat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="Gemini Chat",
        favicon="💬",
    )

    logger.info(f"Starting Gemini Chat on http://localhost:{config.port}")
    logger.info(f"API docs available at http://localhost:{config.port}/docs")
    logger.info(f"Local state stored in {os.environ['NICEGUI_STORAGE_PATH']}")

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
