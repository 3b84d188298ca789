"""Google Sheets backend."""

import logging
from pathlib import Path
from typing import Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import settings
from ..errors import DocumentError, SheetAlreadyExistsError, SheetNotFoundError
from ..table.models import Row
from .base import PersistenceBackend, build_grid, parse_grid

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def quote_sheet_name(sheet_name: str) -> str:
    """Quote a sheet title for use in A1 notation, e.g. ``'My Sheet'``."""
    return "'" + sheet_name.replace("'", "''") + "'"


class GoogleSheetsBackend(PersistenceBackend):
    """Reads and writes the sheets of one Google spreadsheet."""

    def __init__(
        self,
        spreadsheet_id: str,
        service=None,
        credentials_path: Optional[Path] = None,
        token_path: Optional[Path] = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self._service = service
        self._credentials_path = credentials_path or settings.google_credentials_path
        self._token_path = token_path or settings.google_token_path

    def _get_credentials(self) -> Credentials:
        """Get or refresh OAuth2 credentials."""
        creds = None

        if self._token_path.exists():
            creds = Credentials.from_authorized_user_file(str(self._token_path), SCOPES)

        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                if not self._credentials_path.exists():
                    raise DocumentError(
                        f"Google credentials file not found at {self._credentials_path}. "
                        "Please download it from Google Cloud Console."
                    )
                flow = InstalledAppFlow.from_client_secrets_file(str(self._credentials_path), SCOPES)
                creds = flow.run_local_server(port=0)

            # Save credentials for next run
            self._token_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._token_path, "w") as token:
                token.write(creds.to_json())

        return creds

    @property
    def service(self):
        """Get or create the Sheets API service."""
        if self._service is None:
            self._service = build("sheets", "v4", credentials=self._get_credentials())
        return self._service

    def list_sheets(self) -> list[str]:
        try:
            result = (
                self.service.spreadsheets()
                .get(spreadsheetId=self.spreadsheet_id, fields="sheets.properties.title")
                .execute()
            )
        except HttpError as e:
            raise DocumentError(f"Failed to get spreadsheet info: {e}") from e
        return [sheet["properties"]["title"] for sheet in result.get("sheets", [])]

    def _require_sheet(self, sheet_name: str):
        if sheet_name not in self.list_sheets():
            raise SheetNotFoundError(sheet_name)

    def load(self, sheet_name: str) -> tuple[list[str], list[Row]]:
        self._require_sheet(sheet_name)
        try:
            result = (
                self.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=quote_sheet_name(sheet_name),
                    valueRenderOption="UNFORMATTED_VALUE",
                )
                .execute()
            )
        except HttpError as e:
            raise DocumentError(f"Failed to read sheet '{sheet_name}': {e}") from e

        schema, rows = parse_grid(result.get("values", []))
        logger.debug(f"Loaded {len(rows)} rows from {self.spreadsheet_id}/{sheet_name}")
        return schema, rows

    def save(self, sheet_name: str, schema: list[str], rows: list[Row]) -> None:
        self._require_sheet(sheet_name)
        quoted = quote_sheet_name(sheet_name)
        # The API skips null cells on write; the sheet is cleared first so use ""
        grid = [["" if raw is None else raw for raw in line] for line in build_grid(schema, rows)]

        try:
            values = self.service.spreadsheets().values()
            values.clear(spreadsheetId=self.spreadsheet_id, range=quoted, body={}).execute()
            if grid:
                values.update(
                    spreadsheetId=self.spreadsheet_id,
                    range=f"{quoted}!A1",
                    valueInputOption="RAW",
                    body={"values": grid},
                ).execute()
        except HttpError as e:
            raise DocumentError(f"Failed to write sheet '{sheet_name}': {e}") from e

        logger.debug(f"Saved {len(rows)} rows to {self.spreadsheet_id}/{sheet_name}")

    def create_sheet(self, sheet_name: str) -> None:
        if sheet_name in self.list_sheets():
            raise SheetAlreadyExistsError(sheet_name)
        body = {"requests": [{"addSheet": {"properties": {"title": sheet_name}}}]}
        try:
            self.service.spreadsheets().batchUpdate(
                spreadsheetId=self.spreadsheet_id, body=body
            ).execute()
        except HttpError as e:
            raise DocumentError(f"Failed to create sheet '{sheet_name}': {e}") from e
        logger.info(f"Created sheet '{sheet_name}' in {self.spreadsheet_id}")
