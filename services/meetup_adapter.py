# services/meetup_adapter.py
# Adapter to call Meetup's /find/groups.
#
# One GET per attempt. Configure via env:
#   HTTP_TIMEOUT / HTTP_CONNECT_TIMEOUT   seconds
#   FETCH_RETRIES                         extra attempts after a transport failure (default 0)

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from config import FETCH_RETRIES, HTTP_CONNECT_TIMEOUT, HTTP_TIMEOUT
from services.errors import FetchError, ParseError

log = logging.getLogger(__name__)


def _headers() -> Dict[str, str]:
    return {"Accept": "application/json"}


def default_timeout() -> httpx.Timeout:
    return httpx.Timeout(HTTP_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT)


def _parse_body(body: str) -> List[Dict[str, Any]]:
    try:
        meetups = json.loads(body)
    except ValueError as e:
        raise ParseError(f"Meetup API returned invalid JSON: {e}") from e
    if not isinstance(meetups, list):
        raise ParseError(f"Meetup API returned {type(meetups).__name__}, expected a list")
    return meetups


async def _get_once(http: httpx.AsyncClient, url: str) -> str:
    try:
        r = await http.get(url, headers=_headers())
        r.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(f"Meetup API answered {e.response.status_code}") from e
    except httpx.TransportError as e:
        raise FetchError(f"Meetup API unreachable: {e!r}") from e
    return r.text


async def fetch_meetups(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[httpx.Timeout] = None,
    retries: int = FETCH_RETRIES,
) -> List[Dict[str, Any]]:
    """
    GET `url` and return the decoded JSON array.

    FetchError: transport failure or non-2xx (retried `retries` times).
    ParseError: body is not a JSON array (never retried).
    """
    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=timeout or default_timeout())
    try:
        attempt = 0
        while True:
            try:
                body = await _get_once(http, url)
                break
            except FetchError as e:
                if attempt >= retries:
                    raise
                attempt += 1
                log.warning("fetch failed (%s), retry %d/%d", e, attempt, retries)
    finally:
        if owns_client:
            await http.aclose()

    meetups = _parse_body(body)
    log.info("Meetup API payload: %s", json.dumps(meetups, ensure_ascii=False))
    return meetups
