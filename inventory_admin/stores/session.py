# inventory_admin/stores/session.py
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class SessionState:
    """Holds zero or one authenticated principal plus loading and error flags.

    Pure state: the auth handshake itself belongs to the auth provider, which
    reports changes through ``SessionBinding``.
    """

    def __init__(self):
        self.principal: Optional[Any] = None
        # True until the first session lookup has resolved
        self.loading = True
        self.error: Optional[str] = None

    def __repr__(self):
        return f"<SessionState authenticated={self.is_authenticated} loading={self.loading}>"

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    def set_principal(self, principal: Optional[Any]) -> None:
        self.principal = principal
        self.loading = False

    def clear_session(self) -> None:
        self.principal = None
        self.loading = False
        self.error = None

    def fail(self, message: str) -> None:
        """Record a failed session lookup."""
        self.error = message
        self.loading = False

    async def load(self, provider) -> None:
        """One-shot lookup of the current session through the auth provider."""
        self.loading = True
        self.error = None
        try:
            principal = await provider.get_current_principal()
        except Exception as e:
            logger.error(f"Session lookup failed: {e}")
            self.fail(str(e) or 'Failed to get session')
            return

        self.set_principal(principal)
