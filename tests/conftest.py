"""Shared test fixtures."""

import json

import pytest
import requests

from zarinpal_payments import Config


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)


class FakeSession:
    """Stands in for ``requests.Session``; records each POST and replays queued replies."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []
        self.closed = False

    def queue(self, payload=None, status_code=200, text=None):
        self.replies.append(FakeResponse(payload, status_code, text))

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append(
            {
                "url": url,
                "body": json.loads(data.decode("utf-8")),
                "raw": data,
                "headers": headers,
                "timeout": timeout,
            }
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self):
        self.closed = True


@pytest.fixture
def config():
    return Config(merchant_id="mid-123", sandbox=True, access_token="tok-abc")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
