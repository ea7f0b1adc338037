# hookwatch/net.py
# Shared requests session plus JSON GET/POST helpers that turn every
# transport failure into TransportError (RateLimited for HTTP 429).

from __future__ import annotations
from typing import Any, Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT, USER_AGENT

DEFAULT_TIMEOUT = (HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT)  # (connect, read) seconds


class TransportError(Exception):
    """Network failure or non-2xx response on fetch or delivery."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class RateLimited(TransportError):
    """The remote answered 429."""


def make_session(pool_size: int = 10, user_agent: str = USER_AGENT) -> requests.Session:
    s = requests.Session()
    s.headers.update({
        "User-Agent": user_agent,
        "Accept": "application/json",
        "Connection": "keep-alive",
    })
    # No transport retries: a failed fetch is retried by the next cycle,
    # a failed delivery is dropped.
    retry = Retry(total=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry, pool_connections=pool_size, pool_maxsize=pool_size)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    return s


def _check(r: requests.Response, url: str) -> None:
    if r.status_code == 429:
        raise RateLimited(f"429 Too Many Requests for url: {url}", status=429)
    try:
        r.raise_for_status()
    except requests.HTTPError as e:
        raise TransportError(str(e), status=r.status_code) from e


def get_json(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: Tuple[float, float] = DEFAULT_TIMEOUT,
) -> Any:
    try:
        r = session.get(url, params=params, headers=headers or {}, timeout=timeout)
    except requests.RequestException as e:
        raise TransportError(f"GET {url} failed: {e}") from e
    _check(r, url)
    try:
        return r.json()
    except ValueError as e:
        raise TransportError(f"GET {url} returned a non-JSON body", status=r.status_code) from e


def post_json(
    session: requests.Session,
    url: str,
    payload: Dict[str, Any],
    timeout: Tuple[float, float] = DEFAULT_TIMEOUT,
) -> requests.Response:
    try:
        r = session.post(url, json=payload, headers={"Content-Type": "application/json"}, timeout=timeout)
    except requests.RequestException as e:
        raise TransportError(f"POST {url} failed: {e}") from e
    _check(r, url)
    return r
