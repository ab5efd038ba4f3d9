from unittest.mock import MagicMock

import pytest
from googleapiclient.errors import HttpError

from quizsheets.features.games.schemas import SpreadsheetRef
from quizsheets.features.layout.schemas import CellRange, FormulaCell, NumberCell, TextCell, ValueRange
from quizsheets.features.sheets.services import GoogleSheetsClient, SpreadsheetServiceError

REF = SpreadsheetRef(id="abc", url="https://docs.google.com/spreadsheets/d/abc")


def _http_error():
    return HttpError(MagicMock(status=500, reason="boom"), b'{"error": {"message": "boom"}}')


@pytest.fixture
def sheets():
    return MagicMock()


@pytest.fixture
def drive():
    return MagicMock()


@pytest.fixture
def client(sheets, drive):
    return GoogleSheetsClient(sheets_service=sheets, drive_service=drive)


def test_create_sheet(client, sheets):
    sheets.spreadsheets.return_value.create.return_value.execute.return_value = {
        "spreadsheetId": "abc",
        "spreadsheetUrl": REF.url,
    }

    assert client.create_sheet("Quiz-manager") == REF
    sheets.spreadsheets.return_value.create.assert_called_once_with(
        body={"properties": {"title": "Quiz-manager"}},
        fields="spreadsheetId,spreadsheetUrl",
    )


def test_create_sheet_failure(client, sheets):
    sheets.spreadsheets.return_value.create.return_value.execute.side_effect = _http_error()

    with pytest.raises(SpreadsheetServiceError):
        client.create_sheet("Quiz-manager")


def test_delete_sheet_goes_through_drive(client, drive):
    client.delete_sheet(REF)

    drive.files.return_value.delete.assert_called_once_with(fileId="abc")


def test_write_ranges(client, sheets):
    vr = ValueRange(range=CellRange(0, 0, 2, 1), values=[[TextCell("Teams"), NumberCell(1)]])
    client.write_ranges(REF, [vr])

    sheets.spreadsheets.return_value.values.return_value.batchUpdate.assert_called_once_with(
        spreadsheetId="abc",
        body={
            "valueInputOption": "USER_ENTERED",
            "data": [{"range": "A1:B1", "majorDimension": "ROWS", "values": [["Teams", 1]]}],
        },
    )


def test_write_nothing(client, sheets):
    client.write_ranges(REF, [])

    sheets.spreadsheets.return_value.values.return_value.batchUpdate.assert_not_called()


def test_read_range(client, sheets):
    values = sheets.spreadsheets.return_value.values.return_value
    values.get.return_value.execute.return_value = {"values": [["Paris"], [3], ["=A1"]]}

    rows = client.read_range(REF, CellRange(1, 1, 2, 4))

    assert rows == [[TextCell("Paris")], [NumberCell(3)], [FormulaCell("=A1")]]
    values.get.assert_called_once_with(spreadsheetId="abc", range="B2:B4", majorDimension="ROWS")


def test_read_empty_range(client, sheets):
    sheets.spreadsheets.return_value.values.return_value.get.return_value.execute.return_value = {}

    assert client.read_range(REF, CellRange(1, 1, 2, 4)) == []


def test_read_range_failure(client, sheets):
    sheets.spreadsheets.return_value.values.return_value.get.return_value.execute.side_effect = _http_error()

    with pytest.raises(SpreadsheetServiceError):
        client.read_range(REF, CellRange(1, 1, 2, 4))


def test_add_borders(client, sheets):
    client.add_borders(REF, [CellRange(0, 3, 12, 5)])

    body = sheets.spreadsheets.return_value.batchUpdate.call_args.kwargs["body"]
    request = body["requests"][0]["updateBorders"]
    assert request["range"] == {
        "sheetId": 0,
        "startRowIndex": 3,
        "endRowIndex": 5,
        "startColumnIndex": 0,
        "endColumnIndex": 12,
    }
    assert request["top"] == {"style": "SOLID"}


def test_from_missing_token_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        GoogleSheetsClient.from_token_file(str(tmp_path / "secret-token"))
