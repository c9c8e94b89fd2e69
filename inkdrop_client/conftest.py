"""Shared fixtures: an in-memory transport and sample documents."""

import copy
import json

import pytest
from requests.structures import CaseInsensitiveDict

from inkdrop_client.client import InkdropClient


class FakeResponse:
    def __init__(
        self,
        status=200,
        payload=None,
        *,
        status_text="OK",
        content_type="application/json",
        text=None,
    ):
        self.status = status
        self.status_text = status_text
        self.headers = CaseInsensitiveDict(
            {"Content-Type": content_type} if content_type else {}
        )
        self._payload = payload
        self._text = text
        self.json_calls = 0

    async def json(self):
        self.json_calls += 1
        return copy.deepcopy(self._payload)

    async def text(self):
        if self._text is not None:
            return self._text
        return json.dumps(self._payload)


class FakeTransport:
    """Records every call and replays queued responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *args, **kwargs):
        response = FakeResponse(*args, **kwargs)
        self.responses.append(response)
        return response

    async def __call__(self, url, *, method, headers, body=None, signal=None):
        self.calls.append(
            {
                "url": url,
                "method": method,
                "headers": CaseInsensitiveDict(headers),
                "body": body,
                "signal": signal,
            }
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self):
        return self.calls[-1]


BASE = "http://127.0.0.1:19840"

NOTE = {
    "_id": "note:Bk5Ivk0T",
    "_rev": "3-a1b2",
    "doctype": "markdown",
    "bookId": "book:inbox",
    "status": "active",
    "share": "private",
    "numOfTasks": 2,
    "numOfCheckedTasks": 1,
    "pinned": False,
    "title": "Weekly review",
    "body": "- [x] inbox zero\n- [ ] plan",
    "tags": ["tag:work"],
    "createdAt": 1700000000000,
    "updatedAt": 1700000500000,
}

BOOK = {
    "_id": "book:inbox",
    "_rev": "2-c3d4",
    "name": "Inbox",
    "parentBookId": "book:root",
    "createdAt": 1690000000000,
    "updatedAt": 1690000000000,
}

TAG = {
    "_id": "tag:work",
    "_rev": "1-e5f6",
    "name": "work",
    "color": "orange",
    "count": 12,
}

FILE = {
    "_id": "file:screenshot",
    "_rev": "1-0a0b",
    "name": "screenshot.png",
    "contentType": "image/png",
    "contentLength": 2048,
    "md5digest": "9e107d9d372bb6826bd81d3542a419d6",
    "revpos": 1,
    "publicIn": ["note:Bk5Ivk0T"],
    "_attachments": {
        "index": {
            "digest": "md5-nhB9nTcrtoJr2B01QqQZ1g==",
            "content_type": "image/png",
            "revpos": 1,
        }
    },
}


@pytest.fixture
def note():
    return copy.deepcopy(NOTE)


@pytest.fixture
def book():
    return copy.deepcopy(BOOK)


@pytest.fixture
def tag():
    return copy.deepcopy(TAG)


@pytest.fixture
def file_doc():
    return copy.deepcopy(FILE)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return InkdropClient("user", "pass", transport=transport)
