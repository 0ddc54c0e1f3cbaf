"""Bill reminders rendered as page banners."""

from __future__ import annotations

from typing import Optional

import flet as ft

from ..logging_config import get_logger
from ..services.notifications import BaseNotifier, BillNotification

logger = get_logger("desktop.notifier")


class FletNotifier(BaseNotifier):
    """Shows each reminder as a banner; a newer banner with the same tag replaces the old one."""

    def __init__(self, page: Optional[ft.Page] = None, *, enabled: bool = True):
        super().__init__()
        self.page = page
        self.enabled = enabled
        self.shown: dict[str, ft.Banner] = {}

    def _ask_permission(self) -> bool:
        return self.enabled and self.page is not None

    def show(self, notification: BillNotification) -> None:
        if self.page is None:
            return
        previous = self.shown.get(notification.tag)
        if previous is not None:
            previous.open = False

        banner = ft.Banner(
            bgcolor=ft.Colors.AMBER_50,
            leading=ft.Icon(ft.Icons.NOTIFICATIONS_ACTIVE, color=ft.Colors.AMBER_700),
            content=ft.Column(
                [
                    ft.Text(notification.title, weight=ft.FontWeight.BOLD),
                    ft.Text(notification.body),
                ],
                tight=True,
                spacing=2,
            ),
            actions=[ft.TextButton("Dismiss", on_click=lambda _: self.dismiss(notification.tag))],
            open=True,
        )
        self.shown[notification.tag] = banner
        self.page.banner = banner
        self.page.update()
        logger.info("Reminder shown", extra={"tag": notification.tag})

    def dismiss(self, tag: str) -> None:
        banner = self.shown.pop(tag, None)
        if banner is None or self.page is None:
            return
        banner.open = False
        self.page.update()


__all__ = ["FletNotifier"]
