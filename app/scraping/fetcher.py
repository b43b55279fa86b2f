"""
Single-attempt page fetcher with cancellation support.
"""

from __future__ import annotations

import logging

import requests

from app.scraping.cancellation import CancellationToken, call_cancellable
from app.scraping.errors import CancelledError, FetchError, NetworkError
from app.scraping.logging_utils import log_event

logger = logging.getLogger(__name__)

CHUNK_SIZE = 16 * 1024


def _close_response(response: requests.Response) -> None:
    response.close()


class PageFetcher:
    """
    Issues one GET per URL with an identifying User-Agent.

    The body is streamed in chunks so that cancelling the token closes the
    live response and the read aborts instead of waiting for the timeout.
    """

    def __init__(
        self,
        *,
        session: requests.Session,
        user_agent: str,
        timeout_seconds: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.session = session
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds
        self.request_headers = {"User-Agent": user_agent, **(headers or {})}

    def fetch(self, url: str, *, token: CancellationToken | None = None) -> str:
        """
        Return the response body of `url` as text.

        Raises `FetchError` on a non-2xx status, `CancelledError` when the
        token is set, and `NetworkError` for any other transport failure.
        """

        if token is not None:
            token.raise_if_cancelled()

        response: requests.Response | None = None
        unregister = None
        try:
            response = call_cancellable(
                lambda: self.session.get(
                    url,
                    headers=self.request_headers,
                    timeout=self.timeout_seconds,
                    allow_redirects=True,
                    stream=True,
                ),
                token=token,
                on_abandon=_close_response,
            )
            if token is not None:
                unregister = token.on_cancel(response.close)
            if not 200 <= response.status_code < 300:
                raise FetchError(response.status_code)
            body = self._read_body(response, token)
        except (FetchError, CancelledError):
            raise
        except Exception as exc:
            # Closing the response from the cancelling thread surfaces as
            # arbitrary read errors here.
            if token is not None and token.cancelled:
                raise CancelledError(f"Request to {url} was cancelled") from exc
            if not isinstance(exc, (requests.RequestException, ValueError, OSError)):
                raise
            message = str(exc) or exc.__class__.__name__
            log_event(
                logger,
                logging.DEBUG,
                "fetch_network_error",
                url=url,
                error_type=exc.__class__.__name__,
                error=message,
            )
            raise NetworkError(message) from exc
        finally:
            if unregister is not None:
                unregister()
            if response is not None:
                response.close()

        log_event(
            logger,
            logging.DEBUG,
            "page_fetched",
            url=url,
            status_code=response.status_code,
            bytes=len(body),
        )
        return body

    @staticmethod
    def _read_body(response: requests.Response, token: CancellationToken | None) -> str:
        chunks: list[bytes] = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if token is not None:
                token.raise_if_cancelled()
            if chunk:
                chunks.append(chunk)
        if token is not None:
            token.raise_if_cancelled()

        encoding = response.encoding or "utf-8"
        try:
            return b"".join(chunks).decode(encoding, errors="replace")
        except LookupError:
            return b"".join(chunks).decode("utf-8", errors="replace")
