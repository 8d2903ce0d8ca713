"""Constants for inboxer."""

from pathlib import Path

# --- Config paths ---
CONFIG_DIR = Path.home() / ".inboxer"
CREDENTIALS_PATH = CONFIG_DIR / "credentials.json"
TOKEN_PATH = CONFIG_DIR / "token.json"

# --- Gmail API ---
SCOPES = ["https://www.googleapis.com/auth/gmail.readonly"]
USER_ID = "me"
DEFAULT_UNREAD_LABEL = "UNREAD"
DEFAULT_MAX_RESULTS = 10  # messages per unfiltered listing

# --- MIME types ---
MULTIPART_ALTERNATIVE = "multipart/alternative"
MIME_PLAIN = "text/plain"
MIME_HTML = "text/html"
DEFAULT_CHARSET = "utf-8"
