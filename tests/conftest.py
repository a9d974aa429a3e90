import json

import pytest
import requests

from transmission_client.client import TransmissionClient
from transmission_client.config import ClientConfig


def build_response(status_code=200, payload=None, headers=None, body=None):
    response = requests.Response()
    response.status_code = status_code
    response.headers.update(headers or {})
    response._content = body if body is not None else json.dumps(payload).encode("utf-8")
    response._content_consumed = True
    return response


class FakeDaemon:
    """Stands in for Session.send: replays queued responses and records what was sent."""

    def __init__(self):
        self.responses = []
        self.sent = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def __call__(self, request, **kwargs):
        self.sent.append({
            "body": request.body,
            "headers": dict(request.headers),
            "url": request.url,
            "method": request.method,
            "timeout": kwargs.get("timeout"),
        })
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def last_envelope(self):
        return json.loads(self.sent[-1]["body"])


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def daemon(monkeypatch):
    fake = FakeDaemon()
    monkeypatch.setattr(requests.Session, "send", fake)
    return fake


@pytest.fixture
def client(daemon):
    client = TransmissionClient(ClientConfig())
    yield client
    client.close()


@pytest.fixture
def auth_client(daemon):
    client = TransmissionClient(ClientConfig(username="admin", password="secret"))
    yield client
    client.close()
