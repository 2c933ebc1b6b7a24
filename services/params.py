# services/params.py
# Pulls topic / date range / channel out of the Dialogflow webhook body.

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from services.errors import MalformedParameterError

# upper bound of the search window when the user gave no dates
MAX_DATE = datetime(2040, 12, 31, tzinfo=timezone.utc)


@dataclass(frozen=True)
class DatePeriod:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class QueryParameters:
    topic: str
    date_from: datetime
    date_to: datetime
    period: Optional[DatePeriod] = None
    source: Optional[str] = None


def parse_timestamp(value: Any) -> datetime:
    """
    Numbers are epoch milliseconds (Meetup `next_event.time`),
    strings are ISO-8601 (Dialogflow `date-period`). Naive values are UTC.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
    raise ValueError(f"not a timestamp: {value!r}")


def get_parameters(body: Any) -> Dict[str, Any]:
    query_result = body.get("queryResult") if isinstance(body, dict) else None
    if not isinstance(query_result, dict):
        raise MalformedParameterError("request has no queryResult")
    parameters = query_result.get("parameters")
    if parameters is None:
        return {}
    if not isinstance(parameters, dict):
        raise MalformedParameterError("queryResult.parameters is not an object")
    return parameters


def get_topic(parameters: Dict[str, Any]) -> str:
    topic = parameters.get("Topic")
    if topic is None:
        return ""
    return str(topic)


def get_date_period(parameters: Dict[str, Any]) -> Optional[DatePeriod]:
    # Dialogflow sends "" for an unfilled parameter
    raw = parameters.get("date-period")
    if raw in (None, "", {}):
        return None
    if not isinstance(raw, dict):
        raise MalformedParameterError(f"date-period must be an object, got {raw!r}")
    return DatePeriod(start=get_date_from(raw), end=get_date_to(raw))


def _read_date(period: Dict[str, Any], field: str) -> datetime:
    if field not in period:
        raise MalformedParameterError(f"date-period has no {field}")
    try:
        return parse_timestamp(period[field])
    except ValueError as e:
        raise MalformedParameterError(f"date-period.{field}: {e}") from e


def get_date_from(period: Dict[str, Any]) -> datetime:
    return _read_date(period, "startDate")


def get_date_to(period: Dict[str, Any]) -> datetime:
    return _read_date(period, "endDate")


def get_source(body: Dict[str, Any]) -> Optional[str]:
    original = body.get("originalDetectIntentRequest")
    if isinstance(original, dict):
        return original.get("source")
    return None


def extract_query_parameters(body: Any, now: Optional[datetime] = None) -> QueryParameters:
    parameters = get_parameters(body)
    period = get_date_period(parameters)
    if period is None:
        date_from = now or datetime.now(timezone.utc)
        date_to = MAX_DATE
    else:
        date_from, date_to = period.start, period.end
    return QueryParameters(
        topic=get_topic(parameters),
        date_from=date_from,
        date_to=date_to,
        period=period,
        source=get_source(body),
    )
