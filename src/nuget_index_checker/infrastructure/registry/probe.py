"""Registry package-URL existence probe.

One streamed GET per call: only the status line and headers are read,
so a probe never downloads the package itself. The registry answers a
published version with a redirect to its blob store, so redirects are
followed and the final status is classified:

  200            -> FOUND
  404            -> NOT_FOUND
  other 2xx      -> NOT_FOUND (not served yet)
  anything else  -> ProbeError
  no response    -> ProbeNetworkError
"""

from __future__ import annotations

import httpx
import structlog

from nuget_index_checker.domain.entities import (
    ProbeError,
    ProbeNetworkError,
    ProbeOutcome,
)

log = structlog.get_logger(__name__)


class HttpxResourceProbe:
    """Implements ``ResourceProbePort`` on a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        timeout: float = 30.0,
    ) -> None:
        self._http = http_client
        self._timeout = timeout

    async def probe(self, url: str) -> ProbeOutcome:
        try:
            async with self._http.stream(
                "GET", url, follow_redirects=True, timeout=self._timeout
            ) as resp:
                status = resp.status_code
        except httpx.TransportError as e:
            log.debug("probe_no_response", url=url, error=str(e))
            raise ProbeNetworkError(url=url) from e
        except httpx.HTTPError as e:
            log.debug("probe_http_error", url=url, error=str(e))
            raise ProbeError(f"HTTP error: {e}", url=url) from e

        return self._classify(url, status)

    @staticmethod
    def _classify(url: str, status: int) -> ProbeOutcome:
        if status == 200:
            log.debug("probe_found", url=url)
            return ProbeOutcome.FOUND

        if status == 404 or 200 < status < 300:
            log.debug("probe_not_found", url=url, status=status)
            return ProbeOutcome.NOT_FOUND

        log.debug("probe_unexpected_status", url=url, status=status)
        raise ProbeError(
            f"HTTP error: Request failed with status code {status}",
            url=url,
            status_code=status,
        )
