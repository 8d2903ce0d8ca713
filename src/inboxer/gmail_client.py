"""Gmail API client functions for listing messages and reading labels."""

from __future__ import annotations

import logging

import httplib2
from googleapiclient.errors import HttpError

from inboxer.constants import DEFAULT_UNREAD_LABEL, USER_ID
from inboxer.models import FetchFailure, FetchResult

logger = logging.getLogger(__name__)

# API errors plus transport failures (timeouts, refused connections)
FETCH_ERRORS = (HttpError, httplib2.HttpLib2Error, OSError)


def _message_ids(resp: dict) -> list[str]:
    return [msg["id"] for msg in resp.get("messages", [])]


def fetch_by_ids(service, message_ids: list[str], fail_fast: bool = False) -> FetchResult:
    """Fetch full messages one by one.

    The list endpoint only returns stubs, so every message needs its own get.
    With ``fail_fast`` the first error propagates; otherwise API and transport
    errors on single messages are logged and the failed IDs are
    collected in ``FetchResult.failures``.
    """
    result = FetchResult()
    for msg_id in message_ids:
        try:
            msg = service.users().messages().get(userId=USER_ID, id=msg_id).execute()
        except FETCH_ERRORS as exc:
            if fail_fast:
                raise
            logger.warning("Failed to fetch message %s: %s", msg_id, exc)
            result.failures.append(FetchFailure(message_id=msg_id, error=exc))
            continue
        result.messages.append(msg)
    return result


def query(service, q: str, fail_fast: bool = False) -> FetchResult:
    """Search the mailbox with Gmail search syntax and fetch the matches.

    Example query: ``"in:sent after:2017/01/01 before:2017/01/30"``.
    Only the first page of results is fetched.
    """
    resp = service.users().messages().list(userId=USER_ID, q=q).execute()
    ids = _message_ids(resp)
    logger.debug("Query %r matched %d messages", q, len(ids))
    return fetch_by_ids(service, ids, fail_fast=fail_fast)


def get_messages(service, how_many: int, fail_fast: bool = False) -> FetchResult:
    """Fetch up to ``how_many`` of the most recent messages."""
    resp = service.users().messages().list(userId=USER_ID, maxResults=how_many).execute()
    ids = _message_ids(resp)
    logger.debug("Listed %d messages (max %d)", len(ids), how_many)
    return fetch_by_ids(service, ids, fail_fast=fail_fast)


def check_for_unread_by_label(service, label: str) -> int:
    """Return unread messages plus unread threads for ``label``.

    Gmail often reports thousands of forgotten unread messages; search for
    "label:unread" in the web UI to see them.
    """
    info = service.users().labels().get(userId=USER_ID, id=label).execute()
    messages_unread = info.get("messagesUnread", 0)
    threads_unread = info.get("threadsUnread", 0)
    logger.debug("Label %s: %d unread messages, %d unread threads", label, messages_unread, threads_unread)

    if messages_unread == 0 and threads_unread == 0:
        return 0
    return messages_unread + threads_unread


def check_for_unread(service) -> int:
    """Return the unread count for the UNREAD label."""
    return check_for_unread_by_label(service, DEFAULT_UNREAD_LABEL)


def get_labels(service) -> list[dict]:
    """List the labels of the mailbox."""
    resp = service.users().labels().list(userId=USER_ID).execute()
    return resp.get("labels", [])
