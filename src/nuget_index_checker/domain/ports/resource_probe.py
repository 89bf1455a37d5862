"""Port for checking whether a registry resource exists."""

from __future__ import annotations

from typing import Awaitable, Callable, Protocol, runtime_checkable

from nuget_index_checker.domain.entities import ProbeOutcome

# Cooperative wait primitive (seconds). ``asyncio.sleep`` in production.
SleepFn = Callable[[float], Awaitable[None]]


@runtime_checkable
class ResourceProbePort(Protocol):
    """Answers "does this URL currently resolve to an existing resource?"

    Implementations perform exactly one request per call.
    """

    async def probe(self, url: str) -> ProbeOutcome:
        """Probe *url* once.

        Returns:
            ``FOUND`` for HTTP 200, ``NOT_FOUND`` for HTTP 404.

        Raises:
            ProbeError: Unexpected status or no response at all.
        """
        ...
