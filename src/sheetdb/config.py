"""Configuration management for SheetDB."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    """Application settings."""

    # Sheet used when a store is opened without an explicit sheet name
    default_sheet_name: str = os.getenv("SHEETDB_DEFAULT_SHEET", "Sheet1")

    # Workbook used by the CLI when --file is not given
    document_path: Path = Path(os.getenv("SHEETDB_DOCUMENT_PATH", "data.xlsx"))

    # Google Sheets API credentials
    google_credentials_path: Path = Path(os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json"))
    google_token_path: Path = Path(os.getenv("GOOGLE_TOKEN_PATH", "token.json"))

    # Logging
    log_level: str = os.getenv("SHEETDB_LOG_LEVEL", "WARNING").upper()


settings = Settings()
