"""Single-flight access token refresh.

One ``TokenRefresher`` belongs to one client. While a refresh is running,
further callers park on a future and are released together once it settles,
so the refresh endpoint is hit at most once at a time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from pydantic import Field

from terra_client.core.exceptions import RefreshTimeoutError, UnauthenticatedError
from terra_client.core.schemas import CamelModel

if TYPE_CHECKING:
    from terra_client.infra.http.session import SessionStore

logger = logging.getLogger(__name__)


class TokenPair(CamelModel):
    """Payload of the refresh endpoint."""

    access_token: str = Field(min_length=1)
    refresh_token: str | None = None


RefreshCall = Callable[[str], Awaitable[TokenPair]]
RefreshListener = Callable[[], Awaitable[None]]


class TokenRefresher:
    """Coordinates token refreshes for one session.

    Args:
        session: Session whose tokens are refreshed.
        refresh_call: Coroutine function exchanging a refresh token for a
            ``TokenPair``. It must not go through the retrying request path.
        on_failure: Awaited after any failed refresh (including a missing
            refresh token) to tear the session down.
        timeout: Seconds before an in-flight refresh is abandoned.
    """

    def __init__(
        self,
        session: SessionStore,
        refresh_call: RefreshCall,
        on_failure: Callable[[], Awaitable[None]],
        timeout: float = 15.0,
    ) -> None:
        self._session = session
        self._refresh_call = refresh_call
        self._on_failure = on_failure
        self._timeout = timeout
        self._in_progress = False
        self._waiters: list[asyncio.Future[str]] = []
        self._listeners: list[RefreshListener] = []
        self._listener_tasks: set[asyncio.Task[None]] = set()
        self._notifying = False
        self.refresh_count = 0

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    @property
    def pending(self) -> int:
        """Number of callers parked behind the in-flight refresh."""
        return len(self._waiters)

    def add_listener(self, listener: RefreshListener) -> None:
        """Register a coroutine run after each successful refresh.

        Listeners run in a background task once the refresh has settled, so
        the retried request never waits on them. They are best effort: their
        failures are logged and never reach the caller that triggered the
        refresh.
        """
        self._listeners.append(listener)

    async def refresh(self) -> str:
        """Return a fresh access token, joining an in-flight refresh if any.

        Raises:
            UnauthenticatedError: No refresh token, or the refresh was rejected.
            RefreshTimeoutError: The refresh did not settle within the timeout.
        """
        refresh_token = self._session.refresh_token
        if not refresh_token:
            logger.info("No refresh token available; ending session")
            await self._on_failure()
            raise UnauthenticatedError("No refresh token available", code="REFRESH_TOKEN_MISSING")

        if self._in_progress:
            waiter: asyncio.Future[str] = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
            logger.debug("Waiting for in-flight token refresh", extra={"pending": len(self._waiters)})
            return await waiter

        self._in_progress = True
        self.refresh_count += 1
        try:
            try:
                pair = await asyncio.wait_for(self._refresh_call(refresh_token), timeout=self._timeout)
            except asyncio.TimeoutError as exc:
                raise RefreshTimeoutError(self._timeout) from exc
            self._session.update_tokens(pair.access_token, pair.refresh_token)
        except Exception as exc:
            logger.warning(
                "Token refresh failed; ending session",
                extra={"error": str(exc), "pending": len(self._waiters)},
            )
            self._release(error=exc)
            await self._on_failure()
            raise
        else:
            logger.info(
                "Access token refreshed",
                extra={"pending": len(self._waiters), "rotated": pair.refresh_token is not None},
            )
            self._release(token=pair.access_token)
        finally:
            self._in_progress = False
            if self._waiters:
                # Cancelled before settling; nothing else will wake these.
                self._release(error=UnauthenticatedError("Token refresh was interrupted"))

        self._schedule_listeners()
        return pair.access_token

    async def wait_for_listeners(self) -> None:
        """Wait until every scheduled post-refresh listener run has finished."""
        while self._listener_tasks:
            await asyncio.gather(*self._listener_tasks, return_exceptions=True)

    async def cancel_listeners(self) -> None:
        """Cancel listener runs still in flight."""
        tasks = list(self._listener_tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _release(self, *, token: str | None = None, error: BaseException | None = None) -> None:
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if waiter.done():
                continue
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(token)

    def _schedule_listeners(self) -> None:
        # A listener's own requests can trigger a nested refresh; do not re-run listeners then.
        if not self._listeners or self._notifying:
            return
        self._notifying = True
        task = asyncio.get_running_loop().create_task(self._notify_listeners())
        self._listener_tasks.add(task)
        task.add_done_callback(self._listener_done)

    def _listener_done(self, task: asyncio.Task[None]) -> None:
        self._listener_tasks.discard(task)
        self._notifying = False

    async def _notify_listeners(self) -> None:
        for listener in self._listeners:
            try:
                await listener()
            except Exception:
                logger.warning("Post-refresh listener failed", exc_info=True)
