# services/query.py
# Query string for Meetup's /find/groups.

from typing import Dict
from urllib.parse import urlencode

from config import (
    MEETUP_API_URL,
    MEETUP_CATEGORY,
    MEETUP_FIELDS,
    MEETUP_PAGE_SIZE,
    MEETUP_ZIP,
)


def build_params(api_key: str, topic: str = "") -> Dict[str, str]:
    params = {
        "key": api_key,
        "sign": "true",
        "zip": MEETUP_ZIP,
        "category": MEETUP_CATEGORY,
    }
    if topic:
        params["text"] = topic
    params["only"] = MEETUP_FIELDS
    params["page"] = str(MEETUP_PAGE_SIZE)
    return params


def build_query(api_key: str, topic: str = "") -> str:
    # commas in `only` stay readable, everything else is percent-encoded
    return urlencode(build_params(api_key, topic), safe=",")


def build_url(api_key: str, topic: str = "", base_url: str = MEETUP_API_URL) -> str:
    return f"{base_url}?{build_query(api_key, topic)}"


def redact_url(url: str, api_key: str) -> str:
    """URL safe to log: the key value is masked."""
    if not api_key:
        return url
    return url.replace(urlencode({"key": api_key}, safe=","), "key=***")
