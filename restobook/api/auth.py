"""Authentication endpoints."""

import logging

from restobook.api.client import ApiClient, parse
from restobook.models import AuthResponse, User

logger = logging.getLogger(__name__)


class AuthApi:
    """``/auth/`` endpoints."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def register(
        self,
        username: str,
        full_name: str,
        password: str,
        password_confirm: str,
        phone: str | None = None,
    ) -> AuthResponse:
        data = await self.client.post(
            "/auth/register/",
            json={
                "username": username,
                "full_name": full_name,
                "password": password,
                "password_confirm": password_confirm,
                "phone": phone,
            },
            auth=False,
        )
        return parse(AuthResponse, data)

    async def login(self, username: str, password: str) -> AuthResponse:
        data = await self.client.post(
            "/auth/login/",
            json={"username": username, "password": password},
            auth=False,
        )
        return parse(AuthResponse, data)

    async def logout(self, refresh: str) -> None:
        await self.client.post("/auth/logout/", json={"refresh": refresh})

    async def me(self) -> User:
        return parse(User, await self.client.get("/auth/me/"))

    async def update_profile(
        self, full_name: str | None = None, email: str | None = None
    ) -> User:
        payload = {"full_name": full_name, "email": email}
        data = await self.client.patch(
            "/auth/me/", json={k: v for k, v in payload.items() if v is not None}
        )
        return parse(User, data)
