"""
Test helpers for mocking HTTP responses and the poller's stop event
"""

import json
import requests
from unittest.mock import Mock


BASE_URL = "https://vcenter.example.com"


def make_response(status_code=200, body=None, raw=None, reason="OK"):
    """Build a mock requests.Response"""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason

    if raw is None:
        raw = json.dumps(body) if body is not None else ""
    response.content = raw.encode()
    response.text = raw

    def _json():
        return json.loads(raw)
    response.json = Mock(side_effect=_json)
    return response


class FakeStopEvent:
    """Stop event that never sleeps; records every wait timeout.

    ``cancel_on`` is the 1-based wait call that reports the event as set.
    """

    def __init__(self, cancel_on=None):
        self.cancel_on = cancel_on
        self.timeouts = []

    def wait(self, timeout=None):
        self.timeouts.append(timeout)
        return self.cancel_on is not None and len(self.timeouts) >= self.cancel_on

    def is_set(self):
        return False
