"""
Sync-engine command boundary.

The engine (hashing, P2P transport, encryption, GitHub storage) runs out of
process.  The shell reaches it only through the operations of
:class:`SyncBackend`; every failure is raised as :class:`BackendError` whose
message is the engine's own text.

:class:`HttpBackend` is the production adapter: one ``POST`` per command to
``{base_url}/invoke/{command}`` with a JSON object of arguments.  A 2xx reply
carries the JSON result; anything else carries the error message as the
response body.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx
import structlog

from oversync.core.exceptions import BackendError
from oversync.core.models import FileActivityEntry, GithubConfig, SyncStatus

logger = structlog.get_logger()

CMD_STATUS = "get_sync_status"
CMD_ACTIVITY = "get_recent_activity"
CMD_INITIALIZE = "initialize_sync"
CMD_TICKET = "generate_p2p_ticket"
CMD_CONNECT = "connect_peer"


class SyncBackend(Protocol):
    """Operations the shell may invoke on the sync engine."""

    async def probe_status(self) -> SyncStatus: ...

    async def fetch_status(self) -> SyncStatus: ...

    async def fetch_activity(self) -> list[FileActivityEntry]: ...

    async def initialize(
        self,
        vault_path: str,
        github_config: GithubConfig | None,
        encryption_key: str,
    ) -> None: ...

    async def generate_pairing_ticket(self) -> str: ...

    async def connect_peer(self, ticket: str) -> None: ...


class DirectoryPicker(Protocol):
    """External directory-selection service.  Returns None when cancelled."""

    async def select_directory(self) -> str | None: ...


class HttpBackend:
    """SyncBackend over the engine's local HTTP command API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url, timeout=timeout, transport=transport
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpBackend:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _invoke(self, command: str, args: dict[str, Any] | None = None) -> Any:
        try:
            resp = await self._client.post(f"/invoke/{command}", json=args or {})
        except httpx.HTTPError as exc:
            logger.debug("backend_transport_error", command=command, error=str(exc))
            raise BackendError(
                f"Sync engine unreachable at {self._base_url}: {exc}", command=command
            ) from exc

        if resp.is_success:
            if not resp.content:
                return None
            try:
                return resp.json()
            except ValueError as exc:
                raise BackendError(
                    f"Malformed response from {command}: {exc}", command=command
                ) from exc

        message = resp.text.strip()
        if resp.headers.get("content-type", "").startswith("application/json"):
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, str):
                message = body
            elif isinstance(body, dict) and "error" in body:
                message = str(body["error"])
        if not message:
            message = f"{command} failed with HTTP {resp.status_code}"
        raise BackendError(message, command=command)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def probe_status(self) -> SyncStatus:
        return await self.fetch_status()

    async def fetch_status(self) -> SyncStatus:
        data = await self._invoke(CMD_STATUS)
        try:
            return SyncStatus.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise BackendError(f"Malformed status payload: {exc}", command=CMD_STATUS) from exc

    async def fetch_activity(self) -> list[FileActivityEntry]:
        data = await self._invoke(CMD_ACTIVITY)
        try:
            return [FileActivityEntry.from_dict(item) for item in data or []]
        except (KeyError, TypeError, ValueError) as exc:
            raise BackendError(
                f"Malformed activity payload: {exc}", command=CMD_ACTIVITY
            ) from exc

    async def initialize(
        self,
        vault_path: str,
        github_config: GithubConfig | None,
        encryption_key: str,
    ) -> None:
        await self._invoke(
            CMD_INITIALIZE,
            {
                "vaultPath": vault_path,
                "githubConfig": github_config.to_payload() if github_config else None,
                "encryptionKey": encryption_key,
            },
        )

    async def generate_pairing_ticket(self) -> str:
        data = await self._invoke(CMD_TICKET)
        if not isinstance(data, str) or not data:
            raise BackendError("Engine returned an empty pairing ticket", command=CMD_TICKET)
        return data

    async def connect_peer(self, ticket: str) -> None:
        await self._invoke(CMD_CONNECT, {"ticket": ticket})


async def close_backend(backend: SyncBackend) -> None:
    """Release a backend's transport if it holds one (``HttpBackend`` does)."""
    aclose = getattr(backend, "aclose", None)
    if aclose is not None:
        await aclose()
