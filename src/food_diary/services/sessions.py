"""Session lifecycle for the signed-in user."""

import logging
from dataclasses import dataclass, field, replace

import httpx

from food_diary.adapters.diary_api_client import DiaryApiClient
from food_diary.domain.auth import AuthResponse, User
from food_diary.domain.sessions import SessionState
from food_diary.services.events import UNAUTHORIZED, EventBus
from food_diary.services.token_store import TokenStore

logger = logging.getLogger(__name__)


@dataclass
class SessionService:
    """Owns the session flags, the persisted token and the outgoing header.

    The token slot and the client's bearer header only change together, through
    ``_transition``. The service subscribes to ``unauthorized`` events so any
    401 from the API ends the session.
    """

    api_client: DiaryApiClient
    token_store: TokenStore
    events: EventBus
    token_key: str = "token"
    state: SessionState = field(default_factory=SessionState)

    def __post_init__(self) -> None:
        self.events.subscribe(UNAUTHORIZED, self._on_unauthorized)

    async def login(self, email: str, password: str) -> User:
        """Sign in with credentials and start a session."""
        raw = await self.api_client.login(email, password)
        auth = AuthResponse.model_validate(raw)
        self._transition(token=auth.access_token, user=auth.user)
        return auth.user

    async def register(self, email: str, password: str) -> User:
        """Create an account and start a session for it."""
        raw = await self.api_client.register(email, password)
        auth = AuthResponse.model_validate(raw)
        self._transition(token=auth.access_token, user=auth.user)
        return auth.user

    def logout(self) -> None:
        """End the session locally."""
        self._transition(token=None, user=None)

    async def check_auth(self) -> SessionState:
        """Restore the session from the persisted token, once per process."""
        if not self.state.is_loading:
            return self.state
        token = self.token_store.get(self.token_key)
        if token is None:
            self.state = replace(self.state, is_loading=False)
            return self.state
        self.api_client.set_auth_token(token)
        try:
            raw = await self.api_client.me()
            user = User.model_validate(raw)
        except (httpx.HTTPError, ValueError):
            logger.info("Stored credential rejected; starting signed out")
            self._transition(token=None, user=None, is_loading=False)
            return self.state
        self._transition(token=token, user=user, is_loading=False)
        return self.state

    def _on_unauthorized(self) -> None:
        if self.state.is_authenticated:
            logger.info("API rejected credential; signing out")
        self.logout()

    def _transition(
        self, token: str | None, user: User | None, is_loading: bool | None = None
    ) -> None:
        if token is None:
            self.token_store.remove(self.token_key)
            self.api_client.clear_auth_token()
        else:
            self.token_store.set(self.token_key, token)
            self.api_client.set_auth_token(token)
        self.state = SessionState(
            is_authenticated=user is not None,
            is_loading=self.state.is_loading if is_loading is None else is_loading,
            user=user,
        )
