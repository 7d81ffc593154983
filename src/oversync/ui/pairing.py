"""
Pairing coordinator — ticket-exchange handshake for one pairing dialog.

Lifecycle::

    open()     -> new PairingSession; request a local ticket (one-shot)
                  unless request_ticket=False
    connect()  -> submit the remote ticket; success closes the session
    close()    -> drop the session; late responses for it are discarded

A successful connect consumes the session: the next pairing must ``open()``
again, which requests a fresh local ticket.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from oversync.core.backend import SyncBackend
from oversync.ui.state import PairingSession

logger = structlog.get_logger()


class PairingCoordinator:
    def __init__(
        self,
        backend: SyncBackend,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self._backend = backend
        self._on_close = on_close
        self._session: PairingSession | None = None

    @property
    def session(self) -> PairingSession | None:
        return self._session

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def can_connect(self) -> bool:
        s = self._session
        return s is not None and bool(s.remote_ticket_input.strip()) and not s.connecting

    async def open(self, *, request_ticket: bool = True) -> PairingSession:
        """Start a new session and request this device's pairing ticket.

        With ``request_ticket=False`` the session only connects outward and the
        engine is not asked to issue a ticket.
        """
        session = PairingSession()
        self._session = session
        if not request_ticket:
            return session
        try:
            ticket = await self._backend.generate_pairing_ticket()
        except Exception as exc:  # noqa: BLE001
            logger.warning("pairing_ticket_failed", error=str(exc))
            if self._session is session:
                session.last_error = str(exc)
            return session

        if self._session is session:
            session.local_ticket = ticket
        else:
            logger.debug("pairing_ticket_discarded")
        return session

    def set_remote_ticket(self, text: str) -> None:
        if self._session is None:
            return
        self._session.remote_ticket_input = text

    async def connect(self) -> bool:
        """Submit the remote ticket.  Returns True when the peer is connected.

        A no-op while the input is empty or another connect is outstanding.
        """
        if not self.can_connect:
            return False
        session = self._session
        assert session is not None
        session.connecting = True
        session.last_error = None
        ticket = session.remote_ticket_input.strip()

        try:
            await self._backend.connect_peer(ticket)
        except Exception as exc:  # noqa: BLE001
            logger.warning("pairing_connect_failed", error=str(exc))
            if self._session is session:
                session.last_error = str(exc)
                session.connecting = False
            return False

        logger.info("pairing_connected")
        if self._session is session:
            self.close()
        return True

    def copy_ticket(self, clipboard: Callable[[str], None]) -> bool:
        """Hand the local ticket to *clipboard*.  Failures are not user-visible."""
        s = self._session
        if s is None or not s.local_ticket:
            return False
        try:
            clipboard(s.local_ticket)
        except Exception as exc:  # noqa: BLE001
            logger.debug("clipboard_copy_failed", error=str(exc))
            return False
        s.copied = True
        return True

    def clear_copied(self) -> None:
        if self._session is not None:
            self._session.copied = False

    def close(self) -> None:
        """Tear down the session, whatever its outcome."""
        if self._session is None:
            return
        self._session = None
        if self._on_close is not None:
            self._on_close()
