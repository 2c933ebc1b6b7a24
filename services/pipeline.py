# services/pipeline.py
# webhook body -> credential -> Meetup query -> filter/sort -> reply text
#
#   PENDING  --credential ok-->  QUERYING  --fetch ok-->  DONE
#      |                             |
#      +----------> FAILED <---------+
#
# No retries between stages; the first error ends the request.

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional

from config import CONFIG_KEY, CONFIG_STORE, FETCH_RETRIES
from services.errors import EventQueryError
from services.meetup_adapter import default_timeout, fetch_meetups
from services.params import QueryParameters, extract_query_parameters
from services.query import build_url, redact_url
from services.transform import transform_meetups
from transport import get_renderer

log = logging.getLogger(__name__)

Fetcher = Callable[..., Awaitable[List[Dict[str, Any]]]]


class Stage(enum.Enum):
    PENDING = "pending"
    QUERYING = "querying"
    DONE = "done"
    FAILED = "failed"


@dataclass
class HandlerResult:
    stage: Stage
    status: int
    payload: Dict[str, Any] = field(default_factory=dict)


def error_payload(kind: str, message: str) -> Dict[str, Any]:
    return {"status": "error", "error": kind, "message": message}


class EventQueryHandler:
    """
    One instance can serve many requests: every value derived from a request
    stays local to `handle`.
    """

    def __init__(
        self,
        secret_store,
        fetcher: Fetcher = fetch_meetups,
        timeout=None,
        retries: int = FETCH_RETRIES,
        store_name: str = CONFIG_STORE,
        key_name: str = CONFIG_KEY,
        renderer_factory=get_renderer,
    ):
        self.secret_store = secret_store
        self.fetcher = fetcher
        self.timeout = timeout or default_timeout()
        self.retries = retries
        self.store_name = store_name
        self.key_name = key_name
        self.renderer_factory = renderer_factory

    def _move(self, current: Stage, new: Stage) -> Stage:
        log.info("stage %s -> %s", current.value, new.value)
        return new

    async def handle(self, body: Any, now: Optional[datetime] = None) -> HandlerResult:
        stage = Stage.PENDING
        try:
            params = extract_query_parameters(body, now=now)
            api_key = await self.secret_store.get_variable(self.store_name, self.key_name)

            stage = self._move(stage, Stage.QUERYING)
            url = build_url(api_key, params.topic)
            log.info("GET %s", redact_url(url, api_key))
            meetups = await self.fetcher(url, timeout=self.timeout, retries=self.retries)

            text = self.reply_text(params, meetups)
            stage = self._move(stage, Stage.DONE)
            return HandlerResult(stage, 200, {"fulfillmentText": text})
        except EventQueryError as e:
            log.error("request failed in %s: %s: %s", stage.value, e.kind, e)
            stage = self._move(stage, Stage.FAILED)
            return HandlerResult(stage, 500, error_payload(e.kind, str(e)))
        except Exception as e:
            log.exception("unexpected error in %s", stage.value)
            stage = self._move(stage, Stage.FAILED)
            return HandlerResult(stage, 500, error_payload("InternalError", str(e)))

    def reply_text(self, params: QueryParameters, meetups: List[Dict[str, Any]]) -> str:
        details = transform_meetups(meetups, params.date_from, params.date_to)
        return self.renderer_factory(params.source).render(params, details)
