"""Fixtures partagées : store temporaire, configuration de partie, faux client Google Sheets."""

from collections import defaultdict

import pytest

from quizsheets.db.repositories.results import RoundResultsLedger
from quizsheets.db.repositories.spreadsheets import GameStateRepository
from quizsheets.db.store import TransactionalStore
from quizsheets.features.games.schemas import GameConfig, SpreadsheetRef
from quizsheets.features.games.services import GameService


class FakeSpreadsheetClient:
    """Client en mémoire : enregistre les écritures, sert les lectures préparées dans `cells`."""

    def __init__(self):
        self.titles = {}
        self.writes = defaultdict(list)
        self.borders = defaultdict(list)
        self.cells = {}
        self.deleted = []
        self._counter = 0

    def create_sheet(self, title):
        self._counter += 1
        sheet_id = f"sheet-{self._counter}"
        self.titles[sheet_id] = title
        return SpreadsheetRef(id=sheet_id, url=f"https://docs.google.com/spreadsheets/d/{sheet_id}")

    def delete_sheet(self, ref):
        self.deleted.append(ref.id)

    def write_ranges(self, ref, value_ranges):
        self.writes[ref.id].extend(value_ranges)

    def read_range(self, ref, cell_range):
        return self.cells.get((ref.id, cell_range), [])

    def add_borders(self, ref, cell_ranges):
        self.borders[ref.id].extend(cell_ranges)


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "bolt-db")


@pytest.fixture
def store(store_path):
    return TransactionalStore(store_path)


@pytest.fixture
def registry_repo(store):
    return GameStateRepository(store)


@pytest.fixture
def ledger(store):
    return RoundResultsLedger(store)


@pytest.fixture
def game_config():
    return GameConfig(
        game_name="Friday Quiz",
        number_of_questions=13,
        has_warm_up_question=True,
        teams=["Alpha", "Beta"],
    )


@pytest.fixture
def fake_client():
    return FakeSpreadsheetClient()


@pytest.fixture
def game_service(game_config, fake_client, registry_repo, ledger):
    return GameService(
        config=game_config,
        client_factory=lambda: fake_client,
        registry_repo=registry_repo,
        ledger=ledger,
    )
