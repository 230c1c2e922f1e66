"""Authentication session store and role gate."""

import logging

from restobook.api import Backend
from restobook.exceptions import ApiError, RestobookError
from restobook.models import AuthResponse, User, UserRole
from restobook.navigation import HOME_PATH, LOGIN_PATH, Navigator, login_path

logger = logging.getLogger(__name__)


class AuthStore:
    """Holds the current user and the authentication flag.

    Tokens live in the injected Session; this store keeps the user profile
    in sync with them and gates role-restricted screens.
    """

    def __init__(self, backend: Backend, navigator: Navigator) -> None:
        self.backend = backend
        self.navigator = navigator
        self.user: User | None = None
        self.is_authenticated = False
        self.is_loading = True

    async def login(self, username: str, password: str) -> User:
        response = await self.backend.auth.login(username, password)
        return self._accept(response)

    async def register(
        self,
        username: str,
        full_name: str,
        password: str,
        password_confirm: str,
        phone: str | None = None,
    ) -> User:
        response = await self.backend.auth.register(
            username, full_name, password, password_confirm, phone
        )
        return self._accept(response)

    async def logout(self) -> None:
        """Log out on the server if possible; always clear local state."""
        refresh = self.backend.session.refresh_token
        try:
            if refresh:
                await self.backend.auth.logout(refresh)
        except RestobookError as e:
            logger.warning(f"Server logout failed, clearing local session anyway: {e}")
        finally:
            self.backend.session.clear()
            self.user = None
            self.is_authenticated = False
            logger.info("Logged out")

    async def check_auth(self) -> bool:
        """Restore the user from a persisted token.

        Returns:
            Whether a valid session exists
        """
        if not self.backend.session.is_authenticated:
            self.user = None
            self.is_authenticated = False
            self.is_loading = False
            return False

        try:
            self.user = await self.backend.auth.me()
            self.is_authenticated = True
        except RestobookError as e:
            logger.info(f"Stored session is not valid: {e}")
            self.backend.session.clear()
            self.user = None
            self.is_authenticated = False
        finally:
            self.is_loading = False
        return self.is_authenticated

    def expire(self) -> None:
        """Tear down the session after an unrecoverable 401 and force re-login."""
        self.backend.session.clear()
        self.user = None
        self.is_authenticated = False
        self.navigator.push(LOGIN_PATH)

    def has_role(self, *roles: UserRole) -> bool:
        return self.user is not None and self.user.role in roles

    def require(self, path: str, *roles: UserRole) -> bool:
        """Gate a screen.

        Anonymous users go to login with ``path`` as the return target;
        authenticated users without one of ``roles`` go home.

        Args:
            path: The screen being opened
            roles: Accepted roles; empty means any authenticated user

        Returns:
            True if the screen may be shown
        """
        if not self.is_authenticated:
            self.navigator.push(login_path(path))
            return False
        if roles and not self.has_role(*roles):
            logger.info(f"Role {self.user.role.value if self.user else None} denied {path}")
            self.navigator.push(HOME_PATH)
            return False
        return True

    def _accept(self, response: AuthResponse) -> User:
        self.backend.session.set_tokens(response.tokens)
        self.user = response.user
        self.is_authenticated = True
        self.is_loading = False
        logger.info(f"Signed in as user {response.user.id} ({response.user.role.value})")
        return response.user


class LoginForm:
    """Login screen state."""

    EMPTY_USERNAME = "Enter your login"
    LOGIN_FAILED = "Login failed"

    def __init__(self, store: AuthStore, redirect: str = HOME_PATH) -> None:
        self.store = store
        self.redirect = redirect or HOME_PATH
        self.error = ""
        self.is_loading = False

    async def submit(self, username: str, password: str) -> bool:
        self.error = ""
        if not username.strip():
            self.error = self.EMPTY_USERNAME
            return False

        self.is_loading = True
        try:
            await self.store.login(username, password)
        except ApiError as e:
            self.error = e.detail or self.LOGIN_FAILED
            return False
        except RestobookError:
            self.error = self.LOGIN_FAILED
            return False
        finally:
            self.is_loading = False

        self.store.navigator.push(self.redirect)
        return True
