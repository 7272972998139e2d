"""Domain service: Admin Gate.

A single shared PIN compared in memory. This is a usability gate that
keeps shoppers out of the price editor; it is not an authorization
boundary. A production deployment must rely on per-admin credentials at
the identity layer instead.
"""

from __future__ import annotations

from construapp.domain.exceptions import AccessDeniedError

ADMIN_PIN = "1234"


class AdminGate:

    def __init__(self) -> None:
        self._unlocked = False

    @property
    def is_admin(self) -> bool:
        return self._unlocked

    def login(self, pin: str) -> bool:
        """Enter admin mode if *pin* matches. No lockout, no expiry."""
        if pin != ADMIN_PIN:
            return False
        self._unlocked = True
        return True

    def logout(self) -> None:
        self._unlocked = False

    def require_admin(self) -> None:
        if not self._unlocked:
            raise AccessDeniedError("Admin mode is required to edit prices")
