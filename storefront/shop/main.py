"""Material Store - Main application entry point."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from dotenv import load_dotenv

import flet as ft
from storefront.shared.core.configuration import ValidationLevel, get_config
from storefront.shared.core.event_bus import EventBus
from storefront.shared.core.service_registry import register_cleanup_handler
from storefront.shop.state import Store
from storefront.shop.ui.layouts.shell import build_shell

PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()

# Load environment variables from .env file in project root
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")

LOGS_DIR = PROJECT_ROOT / "data" / "logs"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """File log at LOG_LEVEL (default DEBUG), console at WARNING and above."""
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    log_file_path = LOGS_DIR / "storefront.log"

    log_level_str = os.getenv("LOG_LEVEL", "DEBUG").upper()
    file_log_level = getattr(logging, log_level_str, logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("flet_controls").setLevel(logging.WARNING)
    logging.getLogger("flet_transport").setLevel(logging.WARNING)
    logging.getLogger("fletx.core.state").setLevel(logging.CRITICAL)  # Observer noise during shutdown

    logger.info(f"Logging configured: file={log_file_path}, console=WARNING+")


async def main(page: ft.Page) -> None:
    """Main Flet application entry point."""
    logger.info("Initializing Material Store...")
    page.title = "Material Store"

    config = get_config(ValidationLevel.LENIENT)
    store = Store(EventBus(), config)
    register_cleanup_handler(store.dispose)
    await store.initialize()

    page.views.append(build_shell(page, store))
    page.update()

    # First load; the Refresh and Retry buttons call the same method
    page.run_task(store.catalog.fetch_products)
    logger.info("Application initialized successfully")


def run() -> None:
    configure_logging()
    config = get_config(ValidationLevel.LENIENT)
    if config.ui.flet_web_mode:
        logger.info(f"Starting Flet app in WEB mode on port {config.ui.flet_port}")
        ft.app(target=main, view=ft.AppView.WEB_BROWSER, port=config.ui.flet_port, host="127.0.0.1")
    else:
        logger.info("Starting Flet app in DESKTOP mode")
        ft.app(target=main, view=ft.AppView.FLET_APP)


if __name__ == "__main__":
    run()
