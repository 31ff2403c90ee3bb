"""One top-level installer run: shared HTTP client, registry, and pipeline."""

from __future__ import annotations

import asyncio
from types import TracebackType

import httpx

from depot.core.install.config import InstallConfig
from depot.core.install.orchestrator import InstallOrchestrator
from depot.core.install.update import UpdateDriver
from depot.registry import RegistryClient, create_client


class InstallSession:
    """Async context manager wiring the installer for one command.

    The scratch directory is wiped when the session opens and again when it
    closes, whether or not the command succeeded.

    Example::

        async with InstallSession(InstallConfig(working_dir=path)) as session:
            await session.orchestrator.install_many(["express@3.x"])
    """

    def __init__(
        self,
        config: InstallConfig,
        *,
        cancel_event: asyncio.Event | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._cancel_event = cancel_event
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.registry: RegistryClient | None = None
        self.orchestrator: InstallOrchestrator | None = None
        self.updater: UpdateDriver | None = None

    async def __aenter__(self) -> InstallSession:
        self._client = create_client(timeout=self.config.timeout, transport=self._transport)
        self.registry = RegistryClient(self._client, self.config.registry_url)
        self.orchestrator = InstallOrchestrator(
            self.config, self.registry, self._client, cancel_event=self._cancel_event
        )
        self.updater = UpdateDriver(self.orchestrator, self.registry)
        await asyncio.to_thread(self.orchestrator.clean_scratch)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if self.orchestrator is not None:
                await asyncio.to_thread(self.orchestrator.clean_scratch)
        finally:
            if self._client is not None:
                await self._client.aclose()
