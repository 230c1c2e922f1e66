"""Screen navigation seam used by the view models."""

import logging
from typing import Protocol
from urllib.parse import parse_qs, quote, urlsplit

logger = logging.getLogger(__name__)

HOME_PATH = "/"
LOGIN_PATH = "/auth/login"
MY_RESERVATIONS_PATH = "/cabinet/reservations"


def place_path(slug: str) -> str:
    """Detail page of a restaurant."""
    return f"/place/{slug}"


def login_path(return_to: str | None = None) -> str:
    """Login screen carrying the page to come back to after login."""
    if not return_to:
        return LOGIN_PATH
    return f"{LOGIN_PATH}?redirect={quote(return_to, safe='')}"


def redirect_target(path: str, default: str = HOME_PATH) -> str:
    """The return target carried by a login path."""
    values = parse_qs(urlsplit(path).query).get("redirect")
    return values[0] if values else default


class Navigator(Protocol):
    """Moves the user to another screen."""

    def push(self, path: str) -> None: ...


class RecordingNavigator:
    """Navigator that remembers where it was sent."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None

    def push(self, path: str) -> None:
        logger.info(f"Navigate to {path}")
        self.history.append(path)
