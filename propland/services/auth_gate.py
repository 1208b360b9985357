"""Auth gate - projects the listing store's session state onto an is-authenticated flag."""

from typing import Any, Callable, Optional

from propland.services.listing_store import ListingStore
from propland.utils.errors import AuthError
from propland.utils.logging import get_structured_logger, mask_email

logger = get_structured_logger(__name__)

MIN_PASSWORD_LENGTH = 6

SessionListener = Callable[[bool], None]


class AuthGate:
    """
    Thin projection of the store's authentication state.

    Holds no credentials or tokens of its own: login, signup and logout are
    delegated to the store, and `is_authenticated` follows the store's
    session-change feed. Listeners are called synchronously from that feed.
    """

    def __init__(self, store: ListingStore):
        self._store = store
        self._session: Optional[Any] = None
        self._listeners: list[SessionListener] = []
        self._handle: Optional[Any] = None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def user(self) -> Optional[Any]:
        return getattr(self._session, "user", None) if self._session is not None else None

    def add_listener(self, callback: SessionListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: SessionListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    async def start(self) -> None:
        """Seed state from the current session and follow session changes."""
        if self._handle is None:
            self._handle = await self._store.on_auth_change(self._on_auth_change)
        self._set_session(await self._store.get_session())

    async def close(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            await self._store.remove_auth_listener(handle)

    async def __aenter__(self) -> "AuthGate":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    async def login(self, email: str, password: str) -> None:
        """Sign in with e-mail and password; raises AuthError with the store's message."""
        session = await self._store.sign_in(email, password)
        logger.info("Admin signed in", email=mask_email(email))
        self._set_session(session)

    async def signup(self, email: str, password: str) -> None:
        """
        Register a new admin account.

        Passwords shorter than MIN_PASSWORD_LENGTH are rejected before the store
        is contacted. Stores that require e-mail confirmation return no session,
        in which case the gate stays unauthenticated.
        """
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        session = await self._store.sign_up(email, password)
        logger.info("Admin signed up", email=mask_email(email), has_session=session is not None)
        if session is not None:
            self._set_session(session)

    async def logout(self) -> None:
        await self._store.sign_out()
        logger.info("Admin signed out")
        self._set_session(None)

    def _on_auth_change(self, event: Any, session: Optional[Any]) -> None:
        logger.debug("Session change", auth_event=str(event), has_session=session is not None)
        self._set_session(session)

    def _set_session(self, session: Optional[Any]) -> None:
        was_authenticated = self.is_authenticated
        self._session = session
        if self.is_authenticated != was_authenticated:
            for callback in list(self._listeners):
                try:
                    callback(self.is_authenticated)
                except Exception:
                    logger.error("Session listener failed", exc_info=True)
