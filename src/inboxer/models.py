"""Data models for inboxer."""

from __future__ import annotations

from dataclasses import dataclass, field


class BodyNotFoundError(LookupError):
    """No part of the requested MIME type with a non-empty body was found."""


@dataclass
class PartialMetadata:
    """Header fields of interest pulled from a single Gmail message.

    Some fields look redundant but carry different meanings: ``sender`` is
    the entity that created the message, ``from_`` is who relayed it to you
    (often a mailing list such as Google Groups).
    """

    sender: str = ""
    from_: str = ""
    subject: str = ""
    mailing_list: str = ""
    cc: list[str] = field(default_factory=list)
    to: list[str] = field(default_factory=list)
    thread_topic: list[str] = field(default_factory=list)
    delivered_to: list[str] = field(default_factory=list)  # several when forwarded


@dataclass
class FetchFailure:
    """A message that could not be fetched by ID."""

    message_id: str
    error: Exception


@dataclass
class FetchResult:
    """Messages fetched one by one, plus the IDs that failed."""

    messages: list[dict] = field(default_factory=list)
    failures: list[FetchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
