"""In-memory session state shared by every tool call of a server process."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..config import Config

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Connection and identity state for the Storno API."""

    base_url: str
    token: Optional[str] = None
    refresh_token: Optional[str] = None
    company_id: Optional[str] = None


class SessionStore:
    """Lazily-initialized holder of the current :class:`Session`.

    The session is built from configuration on the first ``get()`` and is
    afterwards only changed through ``update()`` (login, token refresh,
    company selection). Nothing is persisted.
    """

    UPDATABLE_FIELDS = frozenset({"token", "refresh_token", "company_id"})

    def __init__(
        self,
        config: Optional[Config] = None,
        config_factory: Callable[[], Config] = Config,
    ):
        self._config = config
        self._config_factory = config_factory
        self._session: Optional[Session] = None

    @property
    def config(self) -> Config:
        """Configuration the session is (or will be) built from."""
        if self._config is None:
            self._config = self._config_factory()
        return self._config

    def get(self) -> Session:
        """Return the current session, creating it on first access."""
        if self._session is None:
            config = self.config
            self._session = Session(
                base_url=config.base_url,
                token=config.token,
                refresh_token=config.refresh_token,
                company_id=config.company_id,
            )
        return self._session

    def update(self, **fields: Optional[str]) -> Session:
        """Merge ``fields`` into the session in place.

        Values are stored as given. The base URL cannot be changed once the
        session exists.
        """
        unknown = set(fields) - self.UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update session field(s): {', '.join(sorted(unknown))}")

        session = self.get()
        for name, value in fields.items():
            setattr(session, name, value)
        logger.debug("Session updated: %s", ", ".join(sorted(fields)) or "<nothing>")
        return session
