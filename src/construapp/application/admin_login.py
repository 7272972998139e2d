"""Application service: Admin Login / Logout."""

from __future__ import annotations

from construapp.application.notifications import Notifier
from construapp.application.session import StorefrontSession


class AdminLoginHandler:

    def __init__(self, session: StorefrontSession, notifier: Notifier) -> None:
        self._session = session
        self._notifier = notifier

    def login(self, pin: str) -> bool:
        if not self._session.admin.login(pin):
            self._notifier.error("Incorrect PIN")
            return False
        self._notifier.success("Admin mode enabled.")
        return True

    def logout(self) -> None:
        self._session.admin.logout()
