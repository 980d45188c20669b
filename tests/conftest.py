import io

import pytest
import requests

from app import create_app
from history import HistoryStore

PARIS = {
    "name": "Paris",
    "sys": {"country": "FR", "sunrise": 1700000000, "sunset": 1700040000},
    "main": {"temp": 15.5, "feels_like": 14.2, "humidity": 60, "pressure": 1012},
    "weather": [{"description": "clear sky"}],
    "wind": {"speed": 3.1},
    "clouds": {"all": 10},
    "visibility": 10000,
    "cod": 200,
}

NOT_FOUND = {"cod": "404", "message": "city not found"}

class FakeResponse:
    def __init__(self, json_data, status_code=200, text=None):
        self._json = json_data
        self.status_code = status_code
        self.text = text
        self.closed = False

    def json(self):
        if self._json is None:
            raise ValueError(f"Expecting value: {self.text!r}")
        return self._json

    def close(self):
        self.closed = True

# Replaces requests.get with a stub that records calls and returns the queued responses in order.
def make_requests_get_stub(calls, *responses):
    queue = list(responses)
    def _get(url, params=None, timeout=None, **kwargs):
        calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        item = queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item
    return _get

# Like make_requests_get_stub, but builds the real prepared request first so parameter encoding runs.
def make_preparing_get_stub(calls, *responses):
    stub = make_requests_get_stub(calls, *responses)
    def _get(url, params=None, timeout=None, **kwargs):
        requests.Request("GET", url, params=params).prepare()
        return stub(url, params=params, timeout=timeout, **kwargs)
    return _get

@pytest.fixture()
def history_path(tmp_path):
    return tmp_path / "weather_history.txt"

@pytest.fixture()
def history(history_path):
    return HistoryStore(str(history_path))

# Builds the console app with instant output, no spinner and a captured stream.
@pytest.fixture()
def app(history_path, monkeypatch):
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
    return create_app(
        API_KEY="test-key",
        HISTORY_FILE=str(history_path),
        TYPE_DELAY=0,
        SPINNER_SECONDS=0,
        STREAM=io.StringIO(),
        ERROR_STREAM=io.StringIO(),
    )
