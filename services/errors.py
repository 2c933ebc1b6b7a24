# services/errors.py
"""Errors raised along the webhook pipeline.

Every one of them ends up in the same 500 envelope; ``kind`` is what the
caller sees in the ``error`` field.
"""


class EventQueryError(Exception):
    @property
    def kind(self) -> str:
        return type(self).__name__


class ConfigResolutionError(EventQueryError):
    """The API credential could not be read from the config store."""


class FetchError(EventQueryError):
    """The Meetup API call failed at the transport level or returned non-2xx."""


class ParseError(EventQueryError):
    """The Meetup API answered with something that is not a JSON array."""


class MalformedParameterError(EventQueryError):
    """The inbound request or one of its intent parameters has the wrong shape."""
