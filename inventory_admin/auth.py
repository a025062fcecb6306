# inventory_admin/auth.py
"""
Auth collaborator contract and its binding to session state.

The provider performs the actual credential exchange and token refresh; this
module only turns its notifications into session-state changes.
"""
import enum
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, NamedTuple, Optional

from inventory_admin.exceptions import AuthenticationError
from inventory_admin.stores.session import SessionState

logger = logging.getLogger(__name__)


class AuthEvent(enum.Enum):
    """Auth notifications that change the session principal."""
    SIGNED_IN = 'SIGNED_IN'
    SIGNED_OUT = 'SIGNED_OUT'
    TOKEN_REFRESHED = 'TOKEN_REFRESHED'

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Optional['AuthEvent']:
        """Map a provider event name; events with no session effect give None."""
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


class AuthChange(NamedTuple):
    event: AuthEvent
    principal: Optional[Any] = None


AuthCallback = Callable[[AuthChange], None]


class AuthSubscription:
    """Cancellable subscription to auth changes; released at most once."""

    def __init__(self, release: Callable[[], None]):
        self._release = release
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._release()


class AuthProvider(ABC):
    """External authentication service."""

    @abstractmethod
    async def get_current_principal(self) -> Optional[Any]:
        """Principal of the current session, or None when signed out."""
        pass

    @abstractmethod
    def subscribe(self, callback: AuthCallback) -> AuthSubscription:
        """Deliver every session-affecting auth change to callback."""
        pass

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Any:
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        pass


class SupabaseAuthProvider(AuthProvider):
    """Supabase Auth through the async client."""

    def __init__(self, client):
        self.client = client

    async def get_current_principal(self):
        try:
            session = await self.client.auth.get_session()
        except Exception as e:
            raise AuthenticationError(f"Failed to get session: {e}") from e
        return session.user if session else None

    def subscribe(self, callback):
        def on_change(event, session):
            auth_event = AuthEvent.from_string(event)
            if auth_event is None:
                logger.debug(f"Ignoring auth event {event}")
                return
            callback(AuthChange(auth_event, session.user if session else None))

        subscription = self.client.auth.on_auth_state_change(on_change)
        return AuthSubscription(subscription.unsubscribe)

    async def sign_in(self, email, password):
        try:
            response = await self.client.auth.sign_in_with_password({'email': email, 'password': password})
        except Exception as e:
            raise AuthenticationError(f"Sign-in failed: {e}") from e
        return response.user

    async def sign_out(self):
        try:
            await self.client.auth.sign_out()
        except Exception as e:
            raise AuthenticationError(f"Sign-out failed: {e}") from e


class SessionBinding:
    """Keeps a SessionState in step with an AuthProvider.

    Usage:
        async with SessionBinding(session, provider):
            ...
    """

    def __init__(self, session: SessionState, provider: AuthProvider):
        self.session = session
        self.provider = provider
        self._subscription: Optional[AuthSubscription] = None

    async def start(self) -> None:
        """Resolve the current session, then follow auth changes."""
        await self.session.load(self.provider)

        if self._subscription is None or not self._subscription.active:
            self._subscription = self.provider.subscribe(self.handle)

    def handle(self, change: AuthChange) -> None:
        """Apply one auth change to the session state."""
        if change.event in (AuthEvent.SIGNED_IN, AuthEvent.TOKEN_REFRESHED):
            self.session.set_principal(change.principal)
        elif change.event == AuthEvent.SIGNED_OUT:
            self.session.clear_session()
        logger.info(f"Auth event {change.event}")

    def close(self) -> None:
        """Release the auth subscription; further calls do nothing."""
        if self._subscription is not None:
            self._subscription.unsubscribe()

    async def sign_in(self, email: str, password: str):
        return await self.provider.sign_in(email, password)

    async def sign_out(self) -> None:
        await self.provider.sign_out()

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()
