"""Exception-Mapping Acquisition Client — turns a raising submit callable into tagged outcomes.

Invariants:
    - Implements core.repository_protocols.AcquisitionClient; dispatch() never raises
      for client-side failures
    - AcquisitionClientUnavailableError, timeouts and connection errors -> CLIENT_UNAVAILABLE
    - Any other Exception -> FAILED(detail); logged with traceback
    - CancelledError (BaseException) passes through uncaught

Design Decisions:
    - Wrapper over raw client: isolates error mapping from the dispatch loop
    - Optional per-call timeout (Settings.dispatch_timeout_seconds): a hung client
      counts as unavailable, latching its protocol for the rest of the pass
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from release_dispatch.config import Settings, get_settings
from release_dispatch.core.decisions import RemoteContent
from release_dispatch.core.dispatch_outcome import DispatchOutcome
from release_dispatch.core.errors import AcquisitionClientUnavailableError

logger = logging.getLogger(__name__)

SubmitFunc = Callable[[RemoteContent], Awaitable[Any]]


class ExceptionMappingAcquisitionClient:
    """Wraps a raw async submit function with timeout and outcome mapping."""

    def __init__(
        self, submit: SubmitFunc, timeout_seconds: float | None = None,
    ):
        self._submit = submit
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(
        cls, submit: SubmitFunc, settings: Settings | None = None,
    ) -> "ExceptionMappingAcquisitionClient":
        settings = settings or get_settings()
        return cls(submit, timeout_seconds=settings.dispatch_timeout_seconds)

    async def dispatch(self, remote_content: RemoteContent) -> DispatchOutcome:
        try:
            if self._timeout_seconds:
                await asyncio.wait_for(
                    self._submit(remote_content), timeout=self._timeout_seconds,
                )
            else:
                await self._submit(remote_content)
            return DispatchOutcome.success()

        except AcquisitionClientUnavailableError as e:
            return DispatchOutcome.client_unavailable(e.message)

        except asyncio.TimeoutError:
            return DispatchOutcome.client_unavailable(
                f"download client timed out after {self._timeout_seconds}s",
            )

        except ConnectionError as e:
            return DispatchOutcome.client_unavailable(
                f"connection error: {e}",
            )

        except Exception as e:
            logger.error(
                f"Unexpected error sending '{remote_content}' to download client: {e}",
                exc_info=True,
                extra={"release_title": remote_content.release.title},
            )
            return DispatchOutcome.failed(str(e) or type(e).__name__)
