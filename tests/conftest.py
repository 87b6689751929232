# tests/conftest.py

import json

import pytest
import requests


class FakeResponse:
  def __init__(self, status_code=200, payload=None, text=None):
    # mirrors requests.Response.ok, which lets 3xx through
    # same as requests.Response.ok; the cache must not rely on it
    self.status_code = status_code
    self.ok = 200 <= status_code < 400
    self._payload = payload
    self.text = text if text is not None else json.dumps(payload)

  def json(self):
    if self._payload is None:
      return json.loads(self.text)
    return self._payload


class FakeSession:
  """Stands in for requests.Session; replays queued responses or exceptions."""
  def __init__(self, *responses):
    self.responses = list(responses)
    self.calls = list()

  def queue(self, *responses):
    self.responses.extend(responses)

  def get(self, url, timeout=None):
    self.calls.append({"url": url, "timeout": timeout})
    outcome = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
    if isinstance(outcome, Exception):
      raise outcome
    return outcome


class FakeClock:
  def __init__(self, start=1000.0):
    self.now = start

  def advance(self, seconds):
    self.now += seconds

  def __call__(self):
    return self.now


@pytest.fixture(autouse=True)
def set_test_env(monkeypatch):
  monkeypatch.setenv("APP_ENV", "testing")


@pytest.fixture
def clock():
  return FakeClock()


@pytest.fixture
def make_session():
  def factory(*outcomes):
    return FakeSession(*[o if isinstance(o, (FakeResponse, requests.Response, Exception)) else FakeResponse(payload=o) for o in outcomes])
  return factory


@pytest.fixture
def fake_response():
  return FakeResponse


@pytest.fixture
def connection_error():
  return requests.exceptions.ConnectionError("connection refused")
