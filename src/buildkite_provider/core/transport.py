"""Authenticated HTTP transport shared by the REST and GraphQL clients.

Every outbound request goes through AuthenticatedTransport.request, which
attaches the bearer token and User-Agent and classifies the outcome:

    - 404                 -> NotFoundError (when the caller asks for it)
    - other non-2xx       -> HTTPStatusError, carrying the status and body
    - no response at all  -> TransportError
    - 2xx                 -> the requests.Response, untouched

Keeping the classification here means every reconciler gets the same
not-found semantics without checking status codes itself.

Sessions are created lazily, one per thread, so a single transport can be
shared by concurrent resource operations. The session of a thread that has
exited is closed the next time any thread opens one, so short-lived threads do
not accumulate open sessions. Requests are never retried.
"""

import logging
import threading

import requests

from buildkite_provider.version import __version__

from .exceptions import HTTPStatusError, NotFoundError, TransportError

USER_AGENT = f"buildkite-provider/{__version__}"


class AuthenticatedTransport:
    """Sends authenticated requests to Buildkite and classifies their status."""

    CONNECT_TIMEOUT = 10  # Connection timeout in seconds
    READ_TIMEOUT = 30  # Socket read timeout in seconds
    MAX_ERROR_BODY = 500  # Characters of the response body kept on errors

    def __init__(
        self,
        token: str,
        user_agent: str = USER_AGENT,
        timeout: tuple[float, float] = (CONNECT_TIMEOUT, READ_TIMEOUT),
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {token}",
            "User-Agent": user_agent,
            "Accept": "application/json",
        }

        # Sessions
        self._local = threading.local()
        self._sessions: dict[threading.Thread, requests.Session] = {}
        self._sessions_lock = threading.Lock()

    ### Session methods
    @property
    def session(self) -> requests.Session:
        """Lazy initialization of the calling thread's session."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._create_session()
            self._local.session = session
            with self._sessions_lock:
                self._close_finished_sessions()
                self._sessions[threading.current_thread()] = session
        return session

    def _create_session(self) -> requests.Session:
        """Creates a new requests session."""
        return requests.Session()

    def _close_finished_sessions(self) -> None:
        """Close the sessions of threads that have exited. Caller holds the lock."""
        for thread in [thread for thread in self._sessions if not thread.is_alive()]:
            logging.debug("client: closing session of finished thread %s", thread.name)
            self._sessions.pop(thread).close()

    def close(self) -> None:
        """Close every session opened by this transport."""
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, {}
        for session in sessions.values():
            session.close()
        self._local = threading.local()

    ### Request methods
    def request(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        content_type: str | None = None,
        classify_not_found: bool = True,
    ) -> requests.Response:
        """
        Send one request and classify the response.

        Args:
            method: HTTP verb
            url: Absolute URL
            body: Encoded request body, or None for a bodyless request
            content_type: Content-Type of the body
            classify_not_found: Turn 404 into NotFoundError instead of HTTPStatusError

        Returns:
            requests.Response: The 2xx response

        Raises:
            NotFoundError: On 404 when classify_not_found is set
            HTTPStatusError: On any other non-2xx status
            TransportError: When no response was received
        """
        headers = dict(self.headers)
        if content_type is not None:
            headers["Content-Type"] = content_type

        logging.debug("client: %s %s", method, url)
        try:
            response = self.session.request(method, url, data=body, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error("client: Request error: %s - %s %s", type(e).__name__, method, url)  # noqa: TRY400
            raise TransportError(f"{method} {url}: {e}") from e

        status = response.status_code
        if status == 404 and classify_not_found:  # noqa: PLR2004
            logging.debug("client: [404] %s %s", method, url)
            raise NotFoundError

        if status < 200 or status > 299:  # noqa: PLR2004
            logging.error("client: [%s] %s - %s %s", status, response.reason, method, url)
            raise HTTPStatusError(status, response.reason or "", response.text[: self.MAX_ERROR_BODY])

        return response
