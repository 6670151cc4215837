"""Fallback to the archived copy of a build's logs.

Once the build pods are gone the only copy left is the one the log
sidecar pushed to the long term storage bucket.  It is read in full and
written through the writer in a single call.
"""

from __future__ import annotations

import logging

import httpx

from pipelogs.clients import CredentialResolver
from pipelogs.clients.buckets import create_bucket_auth_fn, read_url
from pipelogs.core.streamer import write_line
from pipelogs.writers import LogWriter

logger = logging.getLogger(__name__)

DEFAULT_READ_TIMEOUT_SECONDS = 20.0


def stream_pipeline_persistent_logs(
    writer: LogWriter,
    logs_url: str,
    credential_resolver: CredentialResolver,
    *,
    timeout: float = DEFAULT_READ_TIMEOUT_SECONDS,
    client: httpx.Client | None = None,
) -> None:
    """Read the archived log at *logs_url* and write it once.

    Raises
    ------
    FallbackFetchError
        The object could not be read; carries *logs_url*.
    LogWriteError
        The writer rejected the log.
    """
    logger.info("Reading archived build logs from %s", logs_url)
    data = read_url(logs_url, timeout, create_bucket_auth_fn(credential_resolver), client=client)
    write_line(writer, data.decode("utf-8", errors="replace"))
