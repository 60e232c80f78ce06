"""
Fetching the running order page and wrapping the result in a JSend
envelope (https://github.com/omniti-labs/jsend).

    {"status": "success", "data": {"days": [...]}}
    {"status": "error", "message": "...", "code": 502}

`code` is the HTTP status describing the failure: 502 when the festival site
answered with an error, 500 for everything else.
"""

from __future__ import annotations

import json
from datetime import tzinfo
from http import HTTPStatus
from typing import Any, Dict, Optional, TextIO

import requests

from runningorder.errors import ParseError
from runningorder.logging_utils import get_logger
from runningorder.model import RunningOrder
from runningorder.parse import parse_running_order
from runningorder.settings import request_timeout, running_order_url


logger = get_logger(__name__)


class FetchError(Exception):
    """
    The running order page could not be retrieved.
    """

    def __init__(self, message: str, code: int) -> None:
        self.code = code
        super().__init__(message)


# ---------------------------------------------------------------------------
# JSend
# ---------------------------------------------------------------------------


def jsend_success(ro: RunningOrder) -> Dict[str, Any]:
    return {"status": "success", "data": ro.to_dict()}


def jsend_error(message: str, code: int) -> Dict[str, Any]:
    return {"status": "error", "message": message, "code": code}


def to_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def fetch_running_order_html(url: Optional[str] = None, timeout: Optional[float] = None) -> bytes:
    """
    Download the running order page and return its raw bytes.

    The page declares its charset in a meta tag only, so decoding is left to
    BeautifulSoup instead of the (often missing) Content-Type charset.
    """
    url = url or running_order_url()
    timeout = request_timeout() if timeout is None else timeout

    logger.info("fetching %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(f"{url}: {exc}", HTTPStatus.INTERNAL_SERVER_ERROR) from exc

    if resp.status_code != HTTPStatus.OK:
        raise FetchError(f'{url} returned "{resp.status_code} {resp.reason}"', HTTPStatus.BAD_GATEWAY)

    return resp.content


def fetch_running_order(
    year: int,
    url: Optional[str] = None,
    tz: Optional[tzinfo] = None,
    timeout: Optional[float] = None,
) -> RunningOrder:
    html = fetch_running_order_html(url, timeout)
    return parse_running_order(year, html, tz)


def envelope(year: int, url: Optional[str] = None, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    """
    Fetch and parse the running order and return the JSend envelope.

    Errors propagate; use `dump` to get the error envelope written out.
    """
    return jsend_success(fetch_running_order(year, url, tz))


def dump(year: int, out: TextIO, url: Optional[str] = None, tz: Optional[tzinfo] = None) -> None:
    """
    Write the JSend JSON document for the running order at `url` to `out`.

    On failure the error envelope is written and the error is re-raised.
    """
    try:
        payload = envelope(year, url, tz)
    except FetchError as exc:
        out.write(to_json(jsend_error(str(exc), int(exc.code))) + "\n")
        raise
    except ParseError as exc:
        out.write(to_json(jsend_error(str(exc), int(HTTPStatus.INTERNAL_SERVER_ERROR))) + "\n")
        raise

    out.write(to_json(payload) + "\n")
