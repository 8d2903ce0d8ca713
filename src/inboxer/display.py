"""Rich-based display functions for inboxer."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .message import get_partial_metadata, received_time
from .models import FetchResult, PartialMetadata

console = Console()


def _format_received(message: dict) -> str:
    internal_date = message.get("internalDate")
    if not internal_date:
        return ""
    return received_time(internal_date).strftime("%Y-%m-%d %H:%M")


def display_messages(result: FetchResult, title: str = "Messages") -> None:
    """Display fetched messages as a table, followed by any fetch failures."""
    table = Table(title=escape(title))
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Received", no_wrap=True)
    table.add_column("From")
    table.add_column("Subject")
    table.add_column("Labels", style="cyan")

    for idx, message in enumerate(result.messages, start=1):
        meta = get_partial_metadata(message)
        table.add_row(
            str(idx),
            escape(message.get("id", "")),
            _format_received(message),
            escape(meta.from_),
            escape(meta.subject),
            escape(", ".join(message.get("labelIds", []))),
        )

    console.print(table)

    if result.failures:
        lines = [f"  - {escape(f.message_id)}: {escape(str(f.error))}" for f in result.failures]
        console.print(
            Panel(
                "\n".join(lines),
                title=f"[yellow]{len(result.failures)} message(s) could not be fetched[/yellow]",
            )
        )


def display_labels(labels: list[dict]) -> None:
    """Display mailbox labels sorted by type, then name."""
    table = Table(title="Labels")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Type", style="dim")

    for label in sorted(labels, key=lambda lbl: (lbl.get("type", ""), lbl.get("name", ""))):
        table.add_row(
            escape(label.get("id", "")),
            escape(label.get("name", "")),
            escape(label.get("type", "")),
        )

    console.print(table)


def display_unread(label: str, count: int) -> None:
    """Display the unread count for a label."""
    color = "green" if count == 0 else "yellow"
    console.print(f"[bold]{escape(label)}:[/bold] [{color}]{count}[/{color}] unread")


def display_metadata(meta: PartialMetadata) -> None:
    """Display the partial metadata of one message, skipping empty fields."""
    fields = [
        ("Sender", meta.sender),
        ("From", meta.from_),
        ("Subject", meta.subject),
        ("Mailing list", meta.mailing_list),
        ("To", ", ".join(meta.to)),
        ("CC", ", ".join(meta.cc)),
        ("Thread topic", ", ".join(meta.thread_topic)),
        ("Delivered to", ", ".join(meta.delivered_to)),
    ]
    lines = [f"[bold]{name}:[/bold] {escape(value)}" for name, value in fields if value]
    console.print(Panel("\n".join(lines), title="Metadata"))


def display_body(body: str, mime_type: str) -> None:
    """Display a decoded message body as plain text, never as markup."""
    console.print(Panel(Text(body), title=mime_type))
