"""Test doubles shared across the suite."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, Callable, List, Optional, Tuple, Union

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

API_URL = "http://mrp.test/mrp/"
GRAPHQL_URL = "http://mrp.test/mrp/graphql"

Reply = Union[Exception, Tuple[int, Any]]
class FakeAdapter(BaseAdapter):
    """Transport adapter answering from a callable instead of the network.

    The responder receives the prepared request and returns either an
    exception to raise or a ``(status, body)`` tuple; dict/list bodies are
    JSON encoded, strings are sent verbatim.
    """

    def __init__(self, responder: Callable[[requests.PreparedRequest], Reply]) -> None:
        super().__init__()
        self.responder = responder
        self.requests: List[requests.PreparedRequest] = []

    def send(self, request, **kwargs):
        self.requests.append(request)
        reply = self.responder(request)
        if isinstance(reply, Exception):
            raise reply
        status, body = reply

        response = requests.Response()
        response.status_code = status
        response.reason = HTTPStatus(status).phrase
        response.url = request.url
        response.request = request
        response.encoding = "utf-8"
        if isinstance(body, (dict, list)):
            response._content = json.dumps(body).encode("utf-8")
            response.headers = CaseInsensitiveDict({"Content-Type": "application/json"})
        else:
            response._content = (body or "").encode("utf-8")
            response.headers = CaseInsensitiveDict({"Content-Type": "text/plain"})
        return response

    def close(self) -> None:
        pass

    @property
    def last_request(self) -> requests.PreparedRequest:
        return self.requests[-1]

    def last_payload(self) -> Any:
        return json.loads(self.last_request.body)


def fake_session(responder: Callable[[requests.PreparedRequest], Reply]) -> Tuple[requests.Session, FakeAdapter]:
    session = requests.Session()
    adapter = FakeAdapter(responder)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session, adapter


class RecordingTokenSource:
    """Token source that counts teardown calls."""

    def __init__(self, token: Optional[str] = "token-123") -> None:
        self.token = token
        self.unauthorized_calls = 0

    def get(self) -> Optional[str]:
        return self.token

    def on_unauthorized(self) -> None:
        self.unauthorized_calls += 1
        self.token = None


