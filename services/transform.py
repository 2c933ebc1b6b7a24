# services/transform.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List

from services.params import parse_timestamp

log = logging.getLogger(__name__)

MISSING_EVENT_NAME = "error"


@dataclass(frozen=True)
class EventDetail:
    """One upcoming event, flattened out of a Meetup group."""

    name: str
    link: str
    event_name: str
    event_date: datetime


def has_next_event(meetup: Dict[str, Any]) -> bool:
    return isinstance(meetup.get("next_event"), dict)


def _event_date(meetup: Dict[str, Any]):
    try:
        return parse_timestamp(meetup["next_event"].get("time"))
    except (ValueError, OverflowError, OSError) as e:
        log.warning("skipping %s: bad next_event.time (%s)", meetup.get("name"), e)
        return None


def in_window(meetup: Dict[str, Any], date_from: datetime, date_to: datetime) -> bool:
    # both bounds inclusive
    when = _event_date(meetup)
    return when is not None and date_from <= when <= date_to


def to_event_detail(meetup: Dict[str, Any]) -> EventDetail:
    next_event = meetup["next_event"]
    event_name = next_event.get("name")
    return EventDetail(
        name=meetup.get("name", ""),
        link=meetup.get("link", ""),
        event_name=MISSING_EVENT_NAME if event_name is None else event_name,
        event_date=parse_timestamp(next_event["time"]),
    )


def transform_meetups(
    meetups: Iterable[Dict[str, Any]], date_from: datetime, date_to: datetime
) -> List[EventDetail]:
    """
    Order matters: availability filter -> date window -> projection -> sort.
    `sorted` is stable, so equal dates keep the API order.
    """
    available = [m for m in meetups if has_next_event(m)]
    in_range = [m for m in available if in_window(m, date_from, date_to)]
    details = [to_event_detail(m) for m in in_range]
    return sorted(details, key=lambda d: d.event_date)
