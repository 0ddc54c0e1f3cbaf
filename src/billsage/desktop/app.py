"""Main Flet desktop application entry point."""

from __future__ import annotations

import flet as ft

from ..config import BaseConfig
from ..context import UserSession, create_app_context
from ..logging_config import setup_logging
from ..scheduler import create_scheduler
from ..services.auth import ensure_local_user
from .calendar_view import build_calendar_view
from .notifier import FletNotifier


def main(page: ft.Page) -> None:
    """Build the calendar screen for the local profile and start reminders."""

    config = BaseConfig()
    logger = setup_logging(config)
    logger.info("BillSage desktop application starting")

    notifier = FletNotifier(page)
    ctx = create_app_context(config, notifier=notifier)
    session = UserSession.for_user(ensure_local_user(ctx.session_factory))

    page.title = "BillSage (DEV)" if config.DEV_MODE else "BillSage"
    page.padding = 12
    page.window_width = 1200
    page.window_height = 780
    page.window_min_width = 900
    page.window_min_height = 600
    page.add(build_calendar_view(ctx, page, session))

    ctx.reminders.run(session)
    scheduler = create_scheduler(ctx, session, auto_start=True)

    def on_page_close(_):
        logger.info("Application closing, shutting down scheduler")
        scheduler.stop()

    page.on_close = on_page_close


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
