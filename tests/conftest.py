"""Shared fixtures: Meetup API payloads and fake collaborators."""

from datetime import datetime, timezone

import pytest

# 2024-01-10 12:00 UTC, fixed "now" for window tests
NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


def ms(year, month, day, hour=18):
    """Epoch milliseconds, the way Meetup encodes next_event.time."""
    return int(datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp() * 1000)


class FakeSecretStore:
    def __init__(self, value="test-key", error=None):
        self.value = value
        self.error = error
        self.calls = []

    async def get_variable(self, store, key):
        self.calls.append((store, key))
        if self.error is not None:
            raise self.error
        return self.value


class FakeFetcher:
    def __init__(self, meetups=None, error=None):
        self.meetups = meetups if meetups is not None else []
        self.error = error
        self.urls = []
        self.kwargs = []

    async def __call__(self, url, **kwargs):
        self.urls.append(url)
        self.kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.meetups


@pytest.fixture
def js_meetup():
    return {
        "name": "MadridJS",
        "link": "https://www.meetup.com/MadridJS/",
        "city": "Madrid",
        "score": 1.0,
        "next_event": {"id": "1", "name": "Charla de React", "time": ms(2024, 2, 20)},
    }


@pytest.fixture
def meetups(js_meetup):
    return [
        {
            "name": "Python Madrid",
            "link": "https://www.meetup.com/python-madrid/",
            "next_event": {"name": "PyData night", "time": ms(2024, 3, 1)},
        },
        {"name": "Sin eventos", "link": "https://www.meetup.com/empty/"},
        js_meetup,
        {
            "name": "Go Madrid",
            "link": "https://www.meetup.com/golang-madrid/",
            "next_event": {"time": ms(2024, 1, 15)},
        },
    ]


def dialogflow_body(parameters=None, source=None):
    body = {"queryResult": {"parameters": parameters if parameters is not None else {}}}
    if source is not None:
        body["originalDetectIntentRequest"] = {"source": source}
    return body
