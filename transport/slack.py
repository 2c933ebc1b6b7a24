# transport/slack.py
from services.transform import EventDetail

from .base import Renderer


class SlackRenderer(Renderer):
    # <url | text> is a clickable link, *text* is bold
    def render_line(self, detail: EventDetail) -> str:
        return (
            f"<{detail.link} | {detail.name}> - *{detail.event_name}* "
            f"el próximo día {self.format_date(detail.event_date)}\n"
        )
