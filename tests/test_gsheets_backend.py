"""Tests for the Google Sheets backend."""

from unittest.mock import Mock

import pytest
from googleapiclient.errors import HttpError

from sheetdb.backends.gsheets import GoogleSheetsBackend, quote_sheet_name
from sheetdb.errors import DocumentError, SheetAlreadyExistsError, SheetNotFoundError
from sheetdb.table import CellValue, TableStore, coerce_row


def make_http_error() -> HttpError:
    return HttpError(resp=Mock(status=500, reason="Server Error"), content=b"boom")


class TestQuoteSheetName:
    """Test A1 sheet name quoting."""

    def test_plain(self):
        assert quote_sheet_name("Sheet1") == "'Sheet1'"

    def test_embedded_quote(self):
        assert quote_sheet_name("Bob's") == "'Bob''s'"


class TestGoogleSheetsBackend:
    """Test the backend against a mocked API service."""

    def test_list_sheets(self, mock_sheets_service):
        backend = GoogleSheetsBackend("sheet-123", service=mock_sheets_service)
        assert backend.list_sheets() == ["Sheet1", "Notes"]
        mock_sheets_service.spreadsheets.return_value.get.assert_called_with(
            spreadsheetId="sheet-123", fields="sheets.properties.title"
        )

    def test_load(self, mock_sheets_service):
        backend = GoogleSheetsBackend("sheet-123", service=mock_sheets_service)
        schema, rows = backend.load("Sheet1")

        assert schema == ["name", "age", "city"]
        assert rows == [
            coerce_row({"name": "John Doe", "age": 40, "city": "Paris"}),
            {"name": CellValue.text("Jane Doe"), "age": CellValue.number(30), "city": CellValue.empty()},
        ]
        values = mock_sheets_service.spreadsheets.return_value.values.return_value
        values.get.assert_called_with(
            spreadsheetId="sheet-123",
            range="'Sheet1'",
            valueRenderOption="UNFORMATTED_VALUE",
        )

    def test_load_missing_sheet(self, mock_sheets_service):
        backend = GoogleSheetsBackend("sheet-123", service=mock_sheets_service)
        with pytest.raises(SheetNotFoundError):
            backend.load("Nope")

    def test_save_clears_then_writes(self, mock_sheets_service):
        backend = GoogleSheetsBackend("sheet-123", service=mock_sheets_service)
        store = TableStore(backend)
        store.insert({"name": "Alice", "age": 25})

        values = mock_sheets_service.spreadsheets.return_value.values.return_value
        values.clear.assert_called_once_with(spreadsheetId="sheet-123", range="'Sheet1'", body={})
        values.update.assert_called_once_with(
            spreadsheetId="sheet-123",
            range="'Sheet1'!A1",
            valueInputOption="RAW",
            body={
                "values": [
                    ["name", "age", "city"],
                    ["John Doe", 40, "Paris"],
                    ["Jane Doe", 30, ""],
                    ["Alice", 25, ""],
                ]
            },
        )

    def test_save_empty_schema_only_clears(self, mock_sheets_service):
        backend = GoogleSheetsBackend("sheet-123", service=mock_sheets_service)
        backend.save("Notes", [], [])

        values = mock_sheets_service.spreadsheets.return_value.values.return_value
        values.clear.assert_called_once()
        values.update.assert_not_called()

    def test_create_sheet(self, mock_sheets_service):
        backend = GoogleSheetsBackend("sheet-123", service=mock_sheets_service)
        backend.create_sheet("Extra")

        mock_sheets_service.spreadsheets.return_value.batchUpdate.assert_called_once_with(
            spreadsheetId="sheet-123",
            body={"requests": [{"addSheet": {"properties": {"title": "Extra"}}}]},
        )

    def test_create_existing_sheet(self, mock_sheets_service):
        backend = GoogleSheetsBackend("sheet-123", service=mock_sheets_service)
        with pytest.raises(SheetAlreadyExistsError):
            backend.create_sheet("Notes")

    def test_http_error_becomes_document_error(self, mock_sheets_service):
        mock_sheets_service.spreadsheets.return_value.get.return_value.execute.side_effect = (
            make_http_error()
        )
        backend = GoogleSheetsBackend("sheet-123", service=mock_sheets_service)

        with pytest.raises(DocumentError) as exc_info:
            backend.list_sheets()
        assert isinstance(exc_info.value.__cause__, HttpError)

    def test_write_error_keeps_store_dirty(self, mock_sheets_service):
        backend = GoogleSheetsBackend("sheet-123", service=mock_sheets_service)
        store = TableStore(backend)
        values = mock_sheets_service.spreadsheets.return_value.values.return_value
        values.update.return_value.execute.side_effect = make_http_error()

        with pytest.raises(DocumentError):
            store.delete({"name": "John Doe"})
        assert store.dirty
        assert len(store) == 1

    def test_missing_credentials(self, tmp_path):
        backend = GoogleSheetsBackend(
            "sheet-123",
            credentials_path=tmp_path / "credentials.json",
            token_path=tmp_path / "token.json",
        )
        with pytest.raises(DocumentError):
            backend.list_sheets()
