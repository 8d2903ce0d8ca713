"""CLI entry point for inboxer."""

from __future__ import annotations

import logging

import click
from googleapiclient.errors import HttpError
from rich.logging import RichHandler

from .auth import get_account_address, get_gmail_service
from .constants import DEFAULT_MAX_RESULTS, DEFAULT_UNREAD_LABEL, MIME_HTML, MIME_PLAIN, USER_ID
from .display import (
    console,
    display_body,
    display_labels,
    display_messages,
    display_metadata,
    display_unread,
)
from .gmail_client import FETCH_ERRORS, check_for_unread_by_label, get_labels, get_messages, query
from .message import get_body, get_partial_metadata
from .models import BodyNotFoundError


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _service():
    try:
        return get_gmail_service()
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version="0.1.0", prog_name="inboxer")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """inboxer - query your Gmail inbox, read messages and check unread counts."""
    _configure_logging(verbose)


@cli.command(name="query")
@click.argument("q")
@click.option("--fail-fast", is_flag=True, help="Abort on the first message that cannot be fetched.")
def query_cmd(q: str, fail_fast: bool) -> None:
    """Search messages using Gmail search syntax (e.g. 'in:sent after:2017/01/01')."""
    service = _service()
    try:
        result = query(service, q, fail_fast=fail_fast)
    except FETCH_ERRORS as e:
        raise click.ClickException(f"Query failed: {e}") from e
    display_messages(result, title=f"Query: {q}")


@cli.command(name="list")
@click.option("-n", "--max-messages", default=DEFAULT_MAX_RESULTS, type=int, help="Number of messages to fetch.")
@click.option("--fail-fast", is_flag=True, help="Abort on the first message that cannot be fetched.")
def list_cmd(max_messages: int, fail_fast: bool) -> None:
    """List the most recent messages."""
    service = _service()
    try:
        result = get_messages(service, max_messages, fail_fast=fail_fast)
    except FETCH_ERRORS as e:
        raise click.ClickException(f"Listing failed: {e}") from e
    display_messages(result, title="Recent messages")


@cli.command()
@click.option("-l", "--label", default=DEFAULT_UNREAD_LABEL, help="Label ID to check (default UNREAD).")
def unread(label: str) -> None:
    """Show the number of unread messages and threads for a label."""
    service = _service()
    try:
        count = check_for_unread_by_label(service, label)
    except HttpError as e:
        raise click.ClickException(f"Label lookup failed for {label}: {e}") from e
    display_unread(label, count)


@cli.command()
def labels() -> None:
    """List the labels in your mailbox."""
    service = _service()
    try:
        items = get_labels(service)
    except HttpError as e:
        raise click.ClickException(f"Could not list labels: {e}") from e
    display_labels(items)


@cli.command()
@click.argument("message_id")
@click.option("--html", "as_html", is_flag=True, help="Show the HTML body instead of plain text.")
def show(message_id: str, as_html: bool) -> None:
    """Show the metadata and body of a single message."""
    service = _service()
    mime_type = MIME_HTML if as_html else MIME_PLAIN
    try:
        message = service.users().messages().get(userId=USER_ID, id=message_id).execute()
    except HttpError as e:
        raise click.ClickException(f"Could not fetch message {message_id}: {e}") from e

    display_metadata(get_partial_metadata(message))
    try:
        body = get_body(message, mime_type)
    except BodyNotFoundError as e:
        raise click.ClickException(str(e)) from e
    display_body(body, mime_type)


@cli.command()
def auth() -> None:
    """Test Gmail authentication."""
    service = _service()
    try:
        address = get_account_address(service)
    except HttpError as e:
        raise click.ClickException(f"Authentication failed: {e}") from e
    console.print(f"Authenticated as [bold]{address}[/bold]")
