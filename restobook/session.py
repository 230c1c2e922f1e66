"""Authentication token session shared by the API client."""

import json
import logging
from pathlib import Path
from typing import Protocol

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from restobook.models import AuthTokens

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh/"


class RefreshOk(BaseModel):
    """The refresh token was exchanged for a new access token."""

    model_config = ConfigDict(frozen=True)

    access: str


class RefreshErr(BaseModel):
    """The refresh attempt failed; the session has been cleared."""

    model_config = ConfigDict(frozen=True)

    reason: str


RefreshResult = RefreshOk | RefreshErr


class TokenStorage(Protocol):
    """Where a session keeps its tokens between runs."""

    def load(self) -> AuthTokens | None: ...

    def save(self, tokens: AuthTokens) -> None: ...

    def clear(self) -> None: ...


class FileTokenStorage:
    """Persist the token pair as a small JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> AuthTokens | None:
        if not self.path.exists():
            return None
        try:
            return AuthTokens.model_validate(json.loads(self.path.read_text("utf-8")))
        except (OSError, ValueError, ValidationError):
            logger.warning(f"Ignoring unreadable token file {self.path}")
            return None

    def save(self, tokens: AuthTokens) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(tokens.model_dump_json(), "utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class Session:
    """Holds the access/refresh token pair.

    The session is created once and injected into the API client. It is
    written on login/register, read on every request, rewritten by
    ``refresh`` and cleared on logout or when a refresh fails.
    """

    def __init__(self, storage: TokenStorage | None = None) -> None:
        self._storage = storage
        self._access: str | None = None
        self._refresh: str | None = None

        if storage is not None:
            tokens = storage.load()
            if tokens is not None:
                self._access = tokens.access
                self._refresh = tokens.refresh

    @property
    def access(self) -> str | None:
        return self._access

    @property
    def refresh_token(self) -> str | None:
        return self._refresh

    @property
    def is_authenticated(self) -> bool:
        return self._access is not None

    def set_tokens(self, tokens: AuthTokens) -> None:
        """Store a freshly issued token pair."""
        self._access = tokens.access
        self._refresh = tokens.refresh
        self._persist()

    def clear(self) -> None:
        """Forget both tokens."""
        self._access = None
        self._refresh = None
        if self._storage is not None:
            self._storage.clear()

    async def refresh(self, http: httpx.AsyncClient) -> RefreshResult:
        """Exchange the refresh token for a new access token.

        Args:
            http: Client used for the raw refresh call (no auth, no retry)

        Returns:
            RefreshOk with the new access token, or RefreshErr with a reason.
            On RefreshErr the session is cleared.
        """
        if not self._refresh:
            self.clear()
            return RefreshErr(reason="no refresh token")

        try:
            response = await http.post(REFRESH_PATH, json={"refresh": self._refresh})
        except httpx.TransportError as e:
            logger.warning(f"Token refresh failed: {e}")
            self.clear()
            return RefreshErr(reason=f"transport error: {e}")

        if response.status_code != 200:
            logger.info(f"Token refresh rejected with status {response.status_code}")
            self.clear()
            return RefreshErr(reason=f"status {response.status_code}")

        try:
            access = response.json()["access"]
        except (ValueError, KeyError, TypeError):
            self.clear()
            return RefreshErr(reason="malformed refresh response")

        self._access = access
        self._persist()
        logger.info("Access token refreshed")
        return RefreshOk(access=access)

    def _persist(self) -> None:
        if self._storage is not None and self._access and self._refresh:
            self._storage.save(AuthTokens(access=self._access, refresh=self._refresh))
