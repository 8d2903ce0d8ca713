"""Authentication helpers for Gmail API."""

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource

from inboxer.constants import CONFIG_DIR, CREDENTIALS_PATH, SCOPES, TOKEN_PATH, USER_ID


def _load_credentials() -> Credentials:
    """Reuse the stored read-only token, refreshing it or re-consenting as needed."""
    creds = None
    if TOKEN_PATH.exists():
        creds = Credentials.from_authorized_user_file(str(TOKEN_PATH), SCOPES)

    if creds and creds.valid:
        return creds
    if creds and creds.expired and creds.refresh_token:
        creds.refresh(Request())
        return creds

    if not CREDENTIALS_PATH.exists():
        raise FileNotFoundError(
            f"Credentials file not found at {CREDENTIALS_PATH}. "
            "inboxer needs a Desktop OAuth client with the Gmail API enabled; "
            "save its client secret JSON to that path and run 'inboxer auth'."
        )
    flow = InstalledAppFlow.from_client_secrets_file(str(CREDENTIALS_PATH), SCOPES)
    return flow.run_local_server(port=0)


def get_gmail_service() -> Resource:
    """Build a Gmail v1 client for the local user, persisting the token in CONFIG_DIR."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    creds = _load_credentials()
    TOKEN_PATH.write_text(creds.to_json())
    return build("gmail", "v1", credentials=creds, cache_discovery=False)


def get_account_address(service) -> str:
    """Return the email address the service is authenticated as."""
    profile = service.users().getProfile(userId=USER_ID).execute()
    return profile["emailAddress"]
