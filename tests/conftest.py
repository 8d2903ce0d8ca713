"""Shared fixtures for tests."""

from __future__ import annotations

import base64

import httplib2
import pytest
from googleapiclient.errors import HttpError


def encode(text: str) -> str:
    """Encode text the way Gmail does: URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def http_error(status: int = 404, reason: str = "Not Found") -> HttpError:
    return HttpError(httplib2.Response({"status": status}), reason.encode("utf-8"))


def make_part(mime_type: str, text: str = "", parts: list[dict] | None = None) -> dict:
    part: dict = {"mimeType": mime_type, "body": {"size": len(text.encode("utf-8"))}}
    if text:
        part["body"]["data"] = encode(text)
    if parts is not None:
        part["parts"] = parts
    return part


class _Request:
    def __init__(self, fn):
        self._fn = fn

    def execute(self):
        return self._fn()


class _Messages:
    def __init__(self, svc: FakeGmailService) -> None:
        self._svc = svc

    def list(self, userId, q=None, maxResults=None):  # noqa: N803
        self._svc.list_calls.append({"userId": userId, "q": q, "maxResults": maxResults})

        def _do():
            if self._svc.list_error is not None:
                raise self._svc.list_error
            ids = list(self._svc.messages)
            if maxResults is not None:
                ids = ids[:maxResults]
            return {"messages": [{"id": i, "threadId": i} for i in ids], "resultSizeEstimate": len(ids)}

        return _Request(_do)

    def get(self, userId, id):  # noqa: N803, A002
        self._svc.get_calls.append(id)

        def _do():
            if id in self._svc.transport_errors:
                raise self._svc.transport_errors[id]
            if id in self._svc.broken_ids:
                raise http_error()
            return self._svc.messages[id]

        return _Request(_do)


class _Labels:
    def __init__(self, svc: FakeGmailService) -> None:
        self._svc = svc

    def get(self, userId, id):  # noqa: N803, A002
        def _do():
            if id not in self._svc.labels:
                raise http_error(reason="Invalid label")
            return self._svc.labels[id]

        return _Request(_do)

    def list(self, userId):  # noqa: N803
        return _Request(lambda: {"labels": list(self._svc.labels.values())})


class _Users:
    def __init__(self, svc: FakeGmailService) -> None:
        self._svc = svc

    def messages(self) -> _Messages:
        return _Messages(self._svc)

    def labels(self) -> _Labels:
        return _Labels(self._svc)

    def getProfile(self, userId):  # noqa: N802, N803
        return _Request(lambda: {"emailAddress": "me@example.com"})


class FakeGmailService:
    """In-memory stand-in for the Gmail API resource chain."""

    def __init__(self, messages: list[dict] | None = None, labels: list[dict] | None = None) -> None:
        self.messages = {m["id"]: m for m in messages or []}
        self.labels = {lbl["id"]: lbl for lbl in labels or []}
        self.broken_ids: set[str] = set()
        self.transport_errors: dict[str, Exception] = {}
        self.list_error: Exception | None = None
        self.list_calls: list[dict] = []
        self.get_calls: list[str] = []

    def users(self) -> _Users:
        return _Users(self)


@pytest.fixture
def plain_message() -> dict:
    return {
        "id": "msg_001",
        "threadId": "thr_001",
        "labelIds": ["INBOX", "UNREAD", "CATEGORY_UPDATES"],
        "internalDate": "1500000000000",
        "payload": {
            "mimeType": "multipart/mixed",
            "headers": [
                {"name": "Delivered-To", "value": "me@example.com"},
                {"name": "From", "value": "Alice Smith <alice@example.com>"},
                {"name": "To", "value": "me@example.com"},
                {"name": "Subject", "value": "Lunch tomorrow?"},
            ],
            "parts": [
                make_part("text/plain", "See you at noon."),
                make_part("text/html", "<p>See you at noon.</p>"),
            ],
        },
    }


@pytest.fixture
def alternative_message() -> dict:
    return {
        "id": "msg_002",
        "threadId": "thr_002",
        "labelIds": ["INBOX"],
        "internalDate": "1500000360000",
        "payload": {
            "mimeType": "multipart/mixed",
            "headers": [
                {"name": "Sender", "value": "list-owner@groups.example.com"},
                {"name": "From", "value": "Bob <bob@example.com>"},
                {"name": "Subject", "value": "Weekly digest"},
                {"name": "Mailing-list", "value": "list dev@groups.example.com"},
            ],
            "parts": [
                make_part(
                    "multipart/alternative",
                    parts=[
                        make_part("text/plain", "Digest body"),
                        make_part("text/html", "<b>Digest body</b>"),
                    ],
                ),
                make_part("application/pdf"),
            ],
        },
    }


@pytest.fixture
def labels() -> list[dict]:
    return [
        {"id": "UNREAD", "name": "UNREAD", "type": "system", "messagesUnread": 5, "threadsUnread": 2},
        {"id": "INBOX", "name": "INBOX", "type": "system", "messagesUnread": 0, "threadsUnread": 0},
        {"id": "Label_1", "name": "Receipts", "type": "user"},
    ]


@pytest.fixture
def fake_service(plain_message: dict, alternative_message: dict, labels: list[dict]) -> FakeGmailService:
    return FakeGmailService(messages=[plain_message, alternative_message], labels=labels)
