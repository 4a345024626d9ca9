"""
Connectivity monitors.

A ConnectivityMonitor reports whether the device is online and notifies
subscribers on transitions only (offline -> online, online -> offline). The
sync algorithm depends on this subscription interface, never on a platform
primitive, so it can be driven by hand in tests.

ManualConnectivity is set explicitly by the host application.
HealthProbeConnectivity polls the server's GET /health endpoint.

Dependencies: httpx (probe only)
System role: Network presence signal for the Session State Manager
"""

import asyncio
import logging
from typing import Callable

import httpx

logger = logging.getLogger(__name__)

ConnectivityHandler = Callable[[bool], None]
Unsubscribe = Callable[[], None]


class ConnectivityMonitor:
    """Online/offline state with transition callbacks."""

    def __init__(self, online: bool = True) -> None:
        self._online = online
        self._handlers: list[ConnectivityHandler] = []

    @property
    def is_online(self) -> bool:
        return self._online

    def on_connectivity_change(self, handler: ConnectivityHandler) -> Unsubscribe:
        """
        Register a transition handler.

        Args:
            handler: Called with the new online flag on every transition

        Returns:
            Callable removing the handler
        """
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def _update(self, online: bool) -> None:
        if online == self._online:
            return
        self._online = online
        logger.info("Connection %s", "restored" if online else "lost")
        for handler in list(self._handlers):
            try:
                handler(online)
            except Exception:
                logger.exception("Connectivity handler failed")


class ManualConnectivity(ConnectivityMonitor):
    """Connectivity flipped explicitly by the host (or a test)."""

    def set_online(self, online: bool) -> None:
        self._update(online)


class HealthProbeConnectivity(ConnectivityMonitor):
    """
    Periodically probes GET {base_url}/health.

    Any 2xx answer means online; errors, timeouts and other statuses mean
    offline.
    """

    def __init__(
        self,
        base_url: str,
        interval: float = 15.0,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
        online: bool = False,
    ) -> None:
        super().__init__(online=online)
        self._interval = interval
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
        )
        self._task: asyncio.Task | None = None

    async def probe(self) -> bool:
        """Run one probe, update state and return the observed flag."""
        try:
            response = await self._client.get("/health")
            online = response.is_success
        except httpx.HTTPError as e:
            logger.debug("Health probe failed: %s", type(e).__name__)
            online = False
        self._update(online)
        return online

    async def _run(self) -> None:
        while True:
            await self.probe()
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        """Start probing on the running event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Stop probing and release the HTTP client."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._owns_client:
            await self._client.aclose()
