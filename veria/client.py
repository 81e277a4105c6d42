import logging
import socket
import threading
import time
from contextlib import suppress
from typing import Any, Dict, List, Optional

import requests
from urllib3.exceptions import ReadTimeoutError
from urllib3.util import Timeout

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS, VeriaConfig
from .decision import should_block
from .errors import NETWORK_ERROR, REQUEST_FAILED, TIMEOUT, VeriaError
from .models import ScreenResult

logger = logging.getLogger(__name__)


class VeriaClient:
    """Client for the Veria compliance screening API.

    Example::

        client = VeriaClient(api_key="veria_live_xxx")
        result = client.screen("0x742d35Cc6634C0532925a3b844Bc454e4438f44e")
        if client.should_block(result):
            raise RuntimeError("Transaction blocked for compliance")

    One instance can be shared between threads: each thread gets its own
    ``requests.Session``. A ``session`` passed in is used by every thread as-is,
    so sharing it across threads is up to the caller.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT_MS,
        *,
        config: VeriaConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or VeriaConfig(api_key=api_key or "", base_url=base_url, timeout=timeout)
        self._session = session
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._lock = threading.Lock()

    def __enter__(self) -> "VeriaClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def session(self) -> requests.Session:
        """The session for the calling thread."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            # No retrying adapter is mounted: every call is a single request.
            session = self._local.session = requests.Session()
            with self._lock:
                self._sessions.append(session)
        return session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
        with self._lock:
            for session in self._sessions:
                session.close()
            self._sessions.clear()

    def screen(self, input: str) -> ScreenResult:
        """Screen an Ethereum address, ENS name, Solana address or IBAN.

        The whole call, from dispatch to the last body byte, must finish
        within ``config.timeout`` milliseconds.

        Raises :class:`VeriaError` if the request times out, fails in transit,
        or the service answers with a non-success status.
        """

        url = self.config.screen_url
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        logger.debug("Veria screen request url=%s input=%s", url, input)
        deadline = time.monotonic() + self.config.timeout_seconds
        try:
            response = self.session.post(
                url,
                headers=headers,
                json={"input": input},
                # connect and the wait for headers share one budget
                timeout=Timeout(total=self.config.timeout_seconds),
                stream=True,
            )
            with response:
                self._read_body(response, deadline)
                if not 200 <= response.status_code < 300:
                    raise _error_from_response(response)
                result: ScreenResult = response.json()
        except VeriaError as exc:
            logger.debug("Veria screen failed code=%s status=%s", exc.code, exc.status_code)
            raise
        except requests.Timeout as exc:
            raise self._timed_out() from exc
        except requests.RequestException as exc:
            logger.debug("Veria screen transport failure: %s", exc)
            raise VeriaError(str(exc) or "Unknown error", NETWORK_ERROR) from exc

        logger.debug("Veria screen ok input=%s", input)
        return result

    def should_block(self, result: ScreenResult) -> bool:
        """Return True if ``result`` calls for refusing the transaction."""

        return should_block(result)

    def _read_body(self, response: requests.Response, deadline: float) -> None:
        """Load the response body, cutting the connection once ``deadline`` passes."""

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise self._timed_out()

        expired = threading.Event()
        watchdog = threading.Timer(remaining, _abort, (response, expired))
        watchdog.daemon = True
        watchdog.start()
        try:
            response.content  # loads and caches the body
        except requests.RequestException as exc:
            if expired.is_set() or _is_read_timeout(exc):
                raise self._timed_out() from exc
            raise
        finally:
            watchdog.cancel()
        if expired.is_set():
            raise self._timed_out()

    def _timed_out(self) -> VeriaError:
        logger.debug("Veria screen timed out after %sms", self.config.timeout)
        return VeriaError("Request timed out", TIMEOUT)


def _abort(response: requests.Response, expired: threading.Event) -> None:
    """Mark ``response`` as expired and shut its socket so a blocked read returns."""

    expired.set()
    connection = getattr(response.raw, "connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        response.close()
        return
    # the socket may already be closed by the reading thread
    with suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


def _is_read_timeout(exc: requests.RequestException) -> bool:
    """True for the ``ConnectionError`` requests raises when a body read times out."""

    if not isinstance(exc, requests.ConnectionError):
        return False
    causes = list(exc.args) + [exc.__cause__, exc.__context__]
    return any(isinstance(cause, ReadTimeoutError) for cause in causes)


def _error_from_response(response: requests.Response) -> VeriaError:
    """Build the error for a non-success response, tolerating any body."""

    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    error: Dict[str, Any] = body.get("error") if isinstance(body.get("error"), dict) else {}

    message: Optional[str] = error.get("message")
    if message is None:
        message = body.get("message")
    if message is None:
        message = f"Request failed with status {response.status_code}"
    code = error.get("code")
    if code is None:
        code = REQUEST_FAILED
    return VeriaError(str(message), str(code), response.status_code)
