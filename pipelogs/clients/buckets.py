"""Bounded reads of archived build logs from a bucket URL.

``http``/``https`` URLs are read with httpx after the caller's
authorisation function has had a chance to sign them; ``file`` URLs are
read from the local filesystem.  The whole read, not just each socket
operation, must finish within the timeout.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from pathlib import Path
from urllib.parse import unquote

import httpx

from pipelogs.clients import CredentialResolver
from pipelogs.core.deadline import Deadline
from pipelogs.core.errors import DeadlineExceededError, FallbackFetchError

logger = logging.getLogger(__name__)

AuthorizeFn = Callable[[str], str]


def create_bucket_auth_fn(resolver: CredentialResolver) -> AuthorizeFn:
    """Return a function that adds bucket credentials to a URL.

    The resolver is only consulted when the function is called, so
    storage that needs no credentials never triggers a lookup.
    """

    def authorize(url: str) -> str:
        try:
            credentials = resolver.resolve_bucket_access()
        except Exception as exc:  # noqa: BLE001
            raise FallbackFetchError(
                f"failed to resolve bucket credentials: {exc}", url=url
            ) from exc
        if credentials is None:
            return url
        parsed = httpx.URL(url)
        if credentials.host and credentials.host != parsed.host:
            return url
        return str(parsed.copy_with(username=credentials.username, password=credentials.token))

    return authorize


def read_url(
    url: str,
    timeout: float,
    authorize: AuthorizeFn,
    *,
    client: httpx.Client | None = None,
) -> bytes:
    """Read the object at *url* in full within *timeout* seconds.

    The download runs on a daemon thread and the caller waits at most
    *timeout* for its result.  httpx timeouts apply per socket operation,
    so they alone cannot bound the whole read.

    Raises
    ------
    FallbackFetchError
        On any network, HTTP status, authorisation or deadline failure,
        and for schemes that cannot be read.
    """
    scheme = url.split("://", 1)[0].lower() if "://" in url else ""
    if scheme == "file":
        return _read_file(url)
    if scheme not in ("http", "https"):
        raise FallbackFetchError(f"unsupported bucket URL scheme {scheme!r}", url=url)

    signed = authorize(url)
    deadline = Deadline(timeout)
    result_queue: queue.Queue[tuple[str, bytes | BaseException]] = queue.Queue()

    def _download_worker() -> None:
        try:
            result_queue.put(("ok", _download(url, signed, deadline, client)))
        except BaseException as exc:
            result_queue.put(("error", exc))

    thread = threading.Thread(target=_download_worker, daemon=True, name="bucket_read")
    thread.start()

    try:
        status, value = result_queue.get(timeout=max(timeout, 0.0))
    except queue.Empty:
        # the worker sees the cancelled deadline at its next chunk
        deadline.cancel()
        raise FallbackFetchError(f"read did not finish within {timeout}s", url=url) from None

    if status == "error":
        assert isinstance(value, BaseException)
        raise value
    assert isinstance(value, bytes)
    logger.debug("Read %d bytes of archived logs from %s", len(value), url)
    return value


def _download(
    url: str,
    signed: str,
    deadline: Deadline,
    client: httpx.Client | None,
) -> bytes:
    owns_client = client is None
    http = client or httpx.Client(follow_redirects=True)
    try:
        deadline.check(f"reading {url}")
        request_timeout = httpx.Timeout(deadline.remaining())
        with http.stream("GET", signed, timeout=request_timeout) as response:
            response.raise_for_status()
            chunks: list[bytes] = []
            for chunk in response.iter_bytes():
                deadline.check(f"reading {url}")
                chunks.append(chunk)
    except httpx.HTTPStatusError as exc:
        raise FallbackFetchError(
            f"bucket returned HTTP {exc.response.status_code}", url=url
        ) from exc
    except httpx.HTTPError as exc:
        raise FallbackFetchError(f"failed to read bucket object: {exc}", url=url) from exc
    except DeadlineExceededError as exc:
        raise FallbackFetchError(f"read did not finish: {exc}", url=url) from exc
    finally:
        if owns_client:
            http.close()
    return b"".join(chunks)


def _read_file(url: str) -> bytes:
    path = Path(unquote(url.split("://", 1)[1]))
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FallbackFetchError(f"failed to read archived log file: {exc}", url=url) from exc
