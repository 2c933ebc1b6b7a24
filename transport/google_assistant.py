# transport/google_assistant.py
from services.transform import EventDetail

from .base import Renderer


class GoogleAssistantRenderer(Renderer):
    """Meant to be read out loud: no links, no markup."""

    def render_line(self, detail: EventDetail) -> str:
        return (
            f"El grupo {detail.name} organiza {detail.event_name} "
            f"el próximo día {self.format_date(detail.event_date)}.\n"
        )
