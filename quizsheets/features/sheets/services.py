"""
➡️ But : Parler à l'API Google Sheets (création, écriture, lecture, suppression de spreadsheets).

SpreadsheetClient : le contrat attendu par le reste de l'application.

GoogleSheetsClient : implémentation via google-api-python-client (sheets v4 + drive v3).

🔹 Avantages :

Le workflow ne connaît que le contrat : les tests utilisent un faux client en mémoire.

Les erreurs HTTP de Google sont remontées sous une seule exception (SpreadsheetServiceError).
"""

import logging
import os
from typing import List, Protocol, Sequence

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from quizsheets.features.games.schemas import SpreadsheetRef
from quizsheets.features.layout.schemas import CellRange, CellValue, ValueRange, cell_from_api

logger = logging.getLogger(__name__)

# Si tu modifies ces scopes, supprime le token déjà enregistré.
SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive.file",
]


class SpreadsheetServiceError(Exception):
    """Échec d'un appel à l'API distante."""
    pass


class SpreadsheetClient(Protocol):
    def create_sheet(self, title: str) -> SpreadsheetRef: ...

    def delete_sheet(self, ref: SpreadsheetRef) -> None: ...

    def write_ranges(self, ref: SpreadsheetRef, value_ranges: Sequence[ValueRange]) -> None: ...

    def read_range(self, ref: SpreadsheetRef, cell_range: CellRange) -> List[List[CellValue]]: ...

    def add_borders(self, ref: SpreadsheetRef, cell_ranges: Sequence[CellRange]) -> None: ...


class GoogleSheetsClient:
    def __init__(self, sheets_service, drive_service):
        self.sheets = sheets_service
        self.drive = drive_service

    @classmethod
    def from_token_file(cls, token_file: str) -> "GoogleSheetsClient":
        """
        Construit le client à partir d'un token "authorized user" déjà obtenu.
        L'obtention du token (flow OAuth) n'est pas gérée ici.
        """
        if not os.path.exists(token_file):
            raise FileNotFoundError(f"Google token file not found: {token_file}")
        creds = Credentials.from_authorized_user_file(token_file, SCOPES)
        return cls(
            sheets_service=build("sheets", "v4", credentials=creds, cache_discovery=False),
            drive_service=build("drive", "v3", credentials=creds, cache_discovery=False),
        )

    def create_sheet(self, title: str) -> SpreadsheetRef:
        body = {"properties": {"title": title}}
        try:
            created = self.sheets.spreadsheets().create(
                body=body, fields="spreadsheetId,spreadsheetUrl"
            ).execute()
        except HttpError as e:
            raise SpreadsheetServiceError(f"failed to create spreadsheet {title!r}: {e}") from e
        ref = SpreadsheetRef(id=created["spreadsheetId"], url=created["spreadsheetUrl"])
        logger.info("created spreadsheet %r: %s", title, ref.url)
        return ref

    def delete_sheet(self, ref: SpreadsheetRef) -> None:
        try:
            self.drive.files().delete(fileId=ref.id).execute()
        except HttpError as e:
            raise SpreadsheetServiceError(f"failed to delete spreadsheet {ref.id}: {e}") from e
        logger.info("deleted spreadsheet %s", ref.url)

    def write_ranges(self, ref: SpreadsheetRef, value_ranges: Sequence[ValueRange]) -> None:
        if not value_ranges:
            return
        body = {
            "valueInputOption": "USER_ENTERED",
            "data": [vr.to_api() for vr in value_ranges],
        }
        try:
            self.sheets.spreadsheets().values().batchUpdate(spreadsheetId=ref.id, body=body).execute()
        except HttpError as e:
            raise SpreadsheetServiceError(f"failed to write spreadsheet {ref.id}: {e}") from e

    def read_range(self, ref: SpreadsheetRef, cell_range: CellRange) -> List[List[CellValue]]:
        try:
            resp = self.sheets.spreadsheets().values().get(
                spreadsheetId=ref.id,
                range=cell_range.to_a1(),
                majorDimension="ROWS",
            ).execute()
        except HttpError as e:
            raise SpreadsheetServiceError(f"failed to read spreadsheet {ref.id}: {e}") from e
        return [[cell_from_api(v) for v in row] for row in resp.get("values", [])]

    def add_borders(self, ref: SpreadsheetRef, cell_ranges: Sequence[CellRange]) -> None:
        if not cell_ranges:
            return
        border = {"style": "SOLID"}
        requests = [
            {
                "updateBorders": {
                    "range": r.to_grid_range(),
                    "top": border,
                    "bottom": border,
                    "left": border,
                    "right": border,
                }
            }
            for r in cell_ranges
        ]
        try:
            self.sheets.spreadsheets().batchUpdate(spreadsheetId=ref.id, body={"requests": requests}).execute()
        except HttpError as e:
            raise SpreadsheetServiceError(f"failed to draw borders on spreadsheet {ref.id}: {e}") from e
