"""Helpers that read fields out of a Gmail message resource."""

from __future__ import annotations

import base64
from datetime import datetime
from email.message import Message

from inboxer.constants import DEFAULT_CHARSET, MULTIPART_ALTERNATIVE
from inboxer.models import BodyNotFoundError, PartialMetadata

# header name -> (attribute, accumulates)
_METADATA_HEADERS = {
    "Sender": ("sender", False),
    "From": ("from_", False),
    "Subject": ("subject", False),
    "Mailing-list": ("mailing_list", False),
    "CC": ("cc", True),
    "To": ("to", True),
    "Thread-Topic": ("thread_topic", True),
    "Delivered-To": ("delivered_to", True),
}


def _matches(part: dict, mime_type: str) -> bool:
    # Attached or oversized parts carry an attachmentId instead of inline data.
    body = part.get("body", {})
    return part.get("mimeType") == mime_type and body.get("size", 0) >= 1 and bool(body.get("data"))


def _part_charset(part: dict) -> str:
    for header in part.get("headers", []):
        if header.get("name", "").lower() == "content-type":
            msg = Message()
            msg["Content-Type"] = header.get("value", "")
            return msg.get_content_charset() or DEFAULT_CHARSET
    return DEFAULT_CHARSET


def decode_body(data: str, charset: str = DEFAULT_CHARSET) -> str:
    """Decode a URL-safe base64 body payload into text.

    Gmail strips the trailing ``=`` padding, so it is restored first.
    An unknown ``charset`` falls back to UTF-8, and undecodable bytes become
    U+FFFD.
    """
    padded = data + "=" * (-len(data) % 4)
    raw = base64.urlsafe_b64decode(padded)
    try:
        return raw.decode(charset, errors="replace")
    except LookupError:
        return raw.decode(DEFAULT_CHARSET, errors="replace")


def _decode_part(part: dict) -> str:
    return decode_body(part["body"]["data"], _part_charset(part))


def get_body(message: dict, mime_type: str) -> str:
    """Return the decoded body of ``message`` for ``mime_type``.

    ``mime_type`` is usually "text/plain" or "text/html". Top-level parts are
    checked in order; a "multipart/alternative" part is searched one level
    down. Deeper nesting is not searched. Parts without inline data (stored
    as attachments) are skipped.

    Raises BodyNotFoundError when no matching, non-empty part exists.
    """
    for part in message.get("payload", {}).get("parts", []):
        if part.get("mimeType") == MULTIPART_ALTERNATIVE:
            for sub in part.get("parts", []):
                if _matches(sub, mime_type):
                    return _decode_part(sub)
        if _matches(part, mime_type):
            return _decode_part(part)
    raise BodyNotFoundError(f"no {mime_type} body in message {message.get('id', '?')}")


def has_label(message: dict, label: str) -> bool:
    """Check whether the message carries ``label`` (IDs are upper-case)."""
    return label.upper() in message.get("labelIds", [])


def get_partial_metadata(message: dict) -> PartialMetadata:
    """Collect the sender, recipient and topic headers of a message."""
    info = PartialMetadata()
    for header in message.get("payload", {}).get("headers", []):
        target = _METADATA_HEADERS.get(header.get("name"))
        if target is None:
            continue
        attr, accumulates = target
        if accumulates:
            getattr(info, attr).append(header.get("value", ""))
        else:
            setattr(info, attr, header.get("value", ""))
    return info


def received_time(timestamp: int | str) -> datetime:
    """Convert a millisecond epoch timestamp (e.g. ``internalDate``) to local time.

    The last three digits are cut off the decimal string rather than divided
    away, so inputs of three digits or fewer raise ValueError.
    """
    seconds = str(timestamp)[:-3]
    return datetime.fromtimestamp(int(seconds))
