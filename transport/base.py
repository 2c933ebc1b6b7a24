# transport/base.py
# Shared Spanish templates. Channels only differ in how one event line reads.

from datetime import datetime
from typing import Sequence
from zoneinfo import ZoneInfo

from config import DISPLAY_TZ
from services.params import QueryParameters
from services.transform import EventDetail

DATE_FORMAT = "%d/%m/%y"

NOT_FOUND = "Lo siento no he podido encontrar nada{extra}"
HEADER = "He encontrado {count} resultados{extra}. Son los siguientes :\n"
ABOUT = " sobre {topic}"
BETWEEN = " entre {start} y {end}"


class Renderer:
    def __init__(self, tz: str = DISPLAY_TZ):
        self.tz = ZoneInfo(tz)

    def format_date(self, value: datetime) -> str:
        return value.astimezone(self.tz).strftime(DATE_FORMAT)

    def qualifier(self, params: QueryParameters) -> str:
        extra = ""
        if params.topic:
            extra += ABOUT.format(topic=params.topic)
        if params.period is not None:
            extra += BETWEEN.format(
                start=self.format_date(params.period.start),
                end=self.format_date(params.period.end),
            )
        return extra

    def render_line(self, detail: EventDetail) -> str:
        raise NotImplementedError

    def render(self, params: QueryParameters, details: Sequence[EventDetail]) -> str:
        extra = self.qualifier(params)
        if not details:
            return NOT_FOUND.format(extra=extra)
        lines = [HEADER.format(count=len(details), extra=extra)]
        lines.extend(self.render_line(d) for d in details)
        return "".join(lines)
