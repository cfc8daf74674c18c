"""Source acquisition: turn a SourceDescriptor into raw image bytes.

Uploads are already in memory. Remote sources are fetched with a single GET:
redirects are followed up to a cap, there is no retry, and connect/read are
bounded by a timeout.
"""

from __future__ import annotations

import logging

import httpx

from img2brl.models.failures import HttpFetchFailed, TransportError
from img2brl.models.source import AcquiredImage, Origin, Remote, SourceDescriptor, Upload

logger = logging.getLogger(__name__)


class SourceAcquirer:
    def __init__(
        self,
        timeout: float = 10.0,
        max_redirects: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.max_redirects = max_redirects
        # Injected in tests (httpx.MockTransport); None means real network
        self.transport = transport

    def acquire(
        self,
        source: SourceDescriptor | None,
        user_agent: str | None = None,
    ) -> AcquiredImage | None:
        """Resolve ``source`` into an ``AcquiredImage``.

        Returns None when there is nothing to acquire (landing view).

        Raises:
            HttpFetchFailed: remote answered with anything but 200 + body.
            TransportError: the remote fetch failed below HTTP.
        """
        if source is None:
            return None
        if isinstance(source, Upload):
            return self._from_upload(source)
        if isinstance(source, Remote):
            return self._fetch(source, user_agent)
        raise TypeError(f"Unknown source descriptor: {type(source).__name__}")

    def _from_upload(self, source: Upload) -> AcquiredImage | None:
        if not source.data:
            return None
        logger.info("Acquired upload %r (%d bytes)", source.filename, len(source.data))
        return AcquiredImage(
            origin=Origin.UPLOAD,
            identifier=source.filename,
            content_type=source.content_type,
            data=source.data,
        )

    def _fetch(self, source: Remote, user_agent: str | None) -> AcquiredImage:
        headers = {"User-Agent": user_agent} if user_agent else {}
        try:
            with httpx.Client(
                follow_redirects=True,
                max_redirects=self.max_redirects,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = client.get(source.url, headers=headers)
        except httpx.TooManyRedirects as e:
            logger.warning("Fetch %s: more than %d redirects", source.url, self.max_redirects)
            raise TransportError(f"more than {self.max_redirects} redirects") from e
        except httpx.TimeoutException as e:
            logger.warning("Fetch %s timed out: %s", source.url, e)
            raise TransportError(f"timed out after {self.timeout:g}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Fetch %s failed: %s", source.url, e)
            raise TransportError(str(e) or type(e).__name__) from e

        if response.status_code != 200 or not response.content:
            logger.info(
                "Fetch %s: status %d, %d bytes", source.url, response.status_code, len(response.content)
            )
            raise HttpFetchFailed(response.status_code)

        content_type = response.headers.get("content-type")
        if not content_type:
            raise TransportError("response carries no Content-Type")

        logger.info(
            "Fetched %s (%s, %d bytes, %d redirects)",
            source.url,
            content_type,
            len(response.content),
            len(response.history),
        )
        return AcquiredImage(
            origin=Origin.REMOTE,
            identifier=source.url,
            content_type=content_type,
            data=response.content,
        )
