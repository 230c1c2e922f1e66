"""Shared fixtures: configuration, a scripted fake API and wired view models."""

import httpx
import pytest
from fakes import FakeApi

from restobook.api import Backend
from restobook.auth import AuthStore
from restobook.config import Config
from restobook.models import AuthTokens, Restaurant, User, UserRole
from restobook.navigation import RecordingNavigator
from restobook.session import Session


@pytest.fixture
def config(tmp_path):
    """Configuration isolated from the environment and the working directory."""
    return Config(
        api_url="http://testserver/api",
        request_timeout=5.0,
        token_file=tmp_path / "tokens.json",
        pending_selection_db=tmp_path / "pending.db",
        success_redirect_delay=0,
        search_debounce=0.01,
    )


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
async def backend(config, session, fake_api):
    backend = Backend(config, session, transport=httpx.MockTransport(fake_api.handler))
    yield backend
    await backend.aclose()


@pytest.fixture
def auth_store(backend, navigator):
    store = AuthStore(backend, navigator)
    backend.client.on_auth_expired = store.expire
    return store


@pytest.fixture
def signed_in(auth_store, session):
    """An authenticated regular user."""
    session.set_tokens(AuthTokens(access="access-1", refresh="refresh-1"))
    auth_store.user = User(id=5, full_name="Test User", role=UserRole.USER)
    auth_store.is_authenticated = True
    auth_store.is_loading = False
    return auth_store


@pytest.fixture
def restaurant():
    return Restaurant(
        id=7,
        name="Cafe X",
        slug="cafe-x",
        type="cafe",
        latitude="42.4619",
        longitude="59.6166",
        slot_duration=60,
        min_booking_hours=2,
        is_open=True,
    )
