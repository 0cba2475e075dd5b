"""HTTP helpers built on ``requests`` with cross-platform TLS guidance."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager, nullcontext
import logging
import os
from pathlib import Path
from typing import Any

import requests


logger = logging.getLogger(__name__)

USER_AGENT = "fontpull"
CHUNK_SIZE = 64 * 1024

# Called with the expected byte count (None when unknown); yields an advance callback.
ProgressFactory = Callable[[int | None], AbstractContextManager[Callable[[int], None]]]


class TLSCertificateError(requests.exceptions.SSLError):
    """Raised when TLS certificate verification fails during a request."""


def _tls_help(url: str) -> str:
    return (
        "TLS certificate verification failed while requesting "
        f"'{url}'. On macOS run the Python 'Install Certificates.command' "
        "(from the python.org installer). On Windows run 'py -m pip install --upgrade certifi'. "
        "On Linux install your 'ca-certificates' package (apt/yum/apk). "
        "Also check system date/time and any proxy or corporate SSL inspection."
    )


def create_session(*, headers: Mapping[str, str] | None = None) -> requests.Session:
    """Return a session carrying the default headers.

    ``GITHUB_TOKEN`` is forwarded as a bearer token when set so API listings
    are not throttled by anonymous rate limits.
    """
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        session.headers["Authorization"] = f"Bearer {token}"
    if headers:
        session.headers.update(headers)
    return session


def request(
    session: requests.Session,
    method: str,
    url: str,
    *,
    timeout: float | None = None,
    **kwargs: Any,
) -> requests.Response:
    """Issue a single request, translating certificate failures."""
    logger.debug("%s %s", method.upper(), url)
    try:
        return session.request(method, url, timeout=timeout, **kwargs)
    except requests.exceptions.SSLError as exc:
        if "CERTIFICATE_VERIFY_FAILED" in str(exc):
            raise TLSCertificateError(_tls_help(url)) from exc
        raise


def fetch_json(session: requests.Session, url: str, *, timeout: float | None = None) -> Any:
    """GET ``url`` and decode its JSON payload, raising on HTTP errors."""
    response = request(
        session,
        "get",
        url,
        timeout=timeout,
        headers={"Accept": "application/vnd.github+json"},
    )
    response.raise_for_status()
    return response.json()


def url_exists(session: requests.Session, url: str, *, timeout: float | None = None) -> bool:
    """Return whether ``url`` answers a HEAD request without an HTTP error."""
    try:
        response = request(session, "head", url, timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        logger.debug("HEAD %s failed: %s", url, exc)
        return False
    return response.status_code < 400


def _content_length(response: requests.Response) -> int | None:
    value = response.headers.get("Content-Length")
    if value is None or not value.isdigit():
        return None
    return int(value)


def download_file(
    session: requests.Session,
    url: str,
    destination: Path,
    *,
    timeout: float | None = None,
    progress: ProgressFactory | None = None,
) -> Path:
    """Stream ``url`` into ``destination``; partial files are removed on failure.

    ``progress`` receives the ``Content-Length`` of the response and must
    yield a callback advanced by the size of every written chunk.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        with request(session, "get", url, timeout=timeout, stream=True) as response:
            response.raise_for_status()
            total = _content_length(response)
            tracker = progress(total) if progress is not None else nullcontext(None)
            with tracker as advance, destination.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        handle.write(chunk)
                        if advance is not None:
                            advance(len(chunk))
    except (requests.RequestException, OSError):
        destination.unlink(missing_ok=True)
        raise
    return destination


__all__ = [
    "ProgressFactory",
    "TLSCertificateError",
    "create_session",
    "download_file",
    "fetch_json",
    "request",
    "url_exists",
]
