import logging

import pytest

from quizsheets.core.errors import LayoutConstraintError, MissingBucketError, RoundNotFoundError, UnknownTeamError
from quizsheets.features.games.schemas import SpreadsheetRegistry
from quizsheets.features.games.services import GameService
from quizsheets.features.layout.schemas import CellRange, FormulaCell, NumberCell, TextCell
from quizsheets.features.results.schemas import ResponseStatus

# Friday Quiz : 13 questions + échauffement, équipes Alpha et Beta
ROUND_1_RANGE = CellRange(1, 5, 2, 7)


def _fill_round(fake_client, cell_range, rows):
    fake_client.cells[("sheet-1", cell_range)] = rows


# ─── Création ───────────────────────────────────────────────────────

def test_create_game_creates_and_registers_sheets(game_service, fake_client, registry_repo):
    registry = game_service.create_game()

    assert fake_client.titles == {
        "sheet-1": "Friday Quiz-manager",
        "sheet-2": "Friday Quiz: team Alpha",
        "sheet-3": "Friday Quiz: team Beta",
    }
    assert registry.manager.id == "sheet-1"
    assert {team: sheet.id for team, sheet in registry.teams.items()} == {"Alpha": "sheet-2", "Beta": "sheet-3"}
    assert registry_repo.get_registry() == registry


def test_create_game_fills_sheets(game_service, fake_client):
    game_service.create_game()

    manager_writes = fake_client.writes["sheet-1"]
    # 3 groupes (échauffement, 12, 1) : grilles de réponses puis formules de liens
    assert [vr.range.to_a1() for vr in manager_writes] == [
        "A1:B4", "A5:M8", "A9:B12",
        "B2:C4", "B6:N8", "B10:C12",
    ]
    assert manager_writes[1].values[0] == [TextCell("Teams"), TextCell("Alpha"), TextCell("Beta")]
    assert manager_writes[4].values[0][1] == FormulaCell(
        '=IMPORTRANGE("https://docs.google.com/spreadsheets/d/sheet-3", "Sheet1!A5")'
    )

    for sheet_id in ("sheet-2", "sheet-3"):
        team_writes = fake_client.writes[sheet_id]
        assert [vr.range.to_a1() for vr in team_writes] == ["A1:B2", "A4:M5", "A7:B8"]
        assert team_writes[2].values == [[NumberCell(13)], []]
        assert fake_client.borders[sheet_id] == game_service.layout.team_border_ranges()


def test_get_spreadsheets(game_service):
    created = game_service.create_game()

    assert game_service.get_spreadsheets() == created


def test_delete_game(game_service, fake_client, registry_repo):
    game_service.create_game()

    deleted = game_service.delete_game()
    assert [ref.id for ref in deleted] == ["sheet-1", "sheet-2", "sheet-3"]
    assert fake_client.deleted == ["sheet-1", "sheet-2", "sheet-3"]
    # le registre local est conservé
    assert registry_repo.get_registry().manager.id == "sheet-1"


# ─── Fetch ──────────────────────────────────────────────────────────

def test_fetch_round(game_service, fake_client, ledger):
    game_service.create_game()
    _fill_round(fake_client, ROUND_1_RANGE, [[TextCell("Paris")], [TextCell("Lyon")]])

    results = game_service.fetch_round(1)

    assert results.round == 1
    assert {t: r.response for t, r in results.results.items()} == {"Alpha": "Paris", "Beta": "Lyon"}
    assert all(r.status == ResponseStatus.NOT_CHECKED for r in results.results.values())
    assert ledger.get_round(1) == results


def test_fetch_warm_up_round(game_service, fake_client):
    game_service.create_game()
    _fill_round(fake_client, CellRange(1, 1, 2, 3), [[TextCell("warm")], [TextCell("up")]])

    assert game_service.fetch_round(0).results["Beta"].response == "up"


def test_fetch_round_with_blank_trailing_answers(game_service, fake_client):
    game_service.create_game()
    _fill_round(fake_client, ROUND_1_RANGE, [[TextCell("Paris")]])

    results = game_service.fetch_round(1)
    assert results.results["Beta"].response == ""


def test_fetch_round_rejects_non_text_cell(game_service, fake_client):
    game_service.create_game()
    _fill_round(fake_client, ROUND_1_RANGE, [[NumberCell(42)], [TextCell("Lyon")]])

    with pytest.raises(ValueError):
        game_service.fetch_round(1)


def test_fetch_round_rejects_extra_rows(game_service, fake_client):
    game_service.create_game()
    _fill_round(fake_client, ROUND_1_RANGE, [[TextCell("a")], [TextCell("b")], [TextCell("c")]])

    with pytest.raises(ValueError):
        game_service.fetch_round(1)


def test_fetch_round_out_of_range(game_service):
    game_service.create_game()

    with pytest.raises(LayoutConstraintError):
        game_service.fetch_round(14)


def test_fetch_round_before_game_creation(game_service):
    with pytest.raises(MissingBucketError):
        game_service.fetch_round(1)


def test_fetch_round_without_manager(game_service, registry_repo):
    registry_repo.save_registry(SpreadsheetRegistry(manager=None))

    with pytest.raises(LookupError):
        game_service.fetch_round(1)


def test_fetch_resets_previous_grading(game_service, fake_client):
    game_service.create_game()
    _fill_round(fake_client, ROUND_1_RANGE, [[TextCell("Paris")], [TextCell("Lyon")]])
    game_service.fetch_round(1)
    game_service.check_round(1, {"Alpha": ResponseStatus.OK})

    refetched = game_service.fetch_round(1)
    assert refetched.results["Alpha"].status == ResponseStatus.NOT_CHECKED


# ─── Correction et total ────────────────────────────────────────────

def test_check_round_and_total(game_service, fake_client):
    game_service.create_game()
    _fill_round(fake_client, ROUND_1_RANGE, [[TextCell("Paris")], [TextCell("Lyon")]])
    game_service.fetch_round(1)

    graded = game_service.check_round(1, {"Alpha": ResponseStatus.OK, "Beta": ResponseStatus.KO})

    assert graded.results["Alpha"].status == ResponseStatus.OK
    assert game_service.get_round(1) == graded
    assert game_service.total() == {"Alpha": 1, "Beta": 0}


def test_check_round_not_fetched(game_service):
    game_service.create_game()

    with pytest.raises(RoundNotFoundError):
        game_service.check_round(2, {"Alpha": ResponseStatus.OK})


def test_check_round_unknown_team(game_service, fake_client):
    game_service.create_game()
    _fill_round(fake_client, ROUND_1_RANGE, [[TextCell("Paris")], [TextCell("Lyon")]])
    game_service.fetch_round(1)

    with pytest.raises(UnknownTeamError):
        game_service.check_round(1, {"Gamma": ResponseStatus.OK})
    assert game_service.get_round(1).results["Alpha"].status == ResponseStatus.NOT_CHECKED


def test_total_before_any_fetch(game_service):
    game_service.create_game()

    assert game_service.total() == {"Alpha": 0, "Beta": 0}


def test_last_round_is_graded_but_not_counted(game_service, fake_client, caplog):
    game_service.create_game()
    _fill_round(fake_client, CellRange(1, 9, 2, 11), [[TextCell("Paris")], [TextCell("Lyon")]])
    game_service.fetch_round(13)

    with caplog.at_level(logging.WARNING, logger="quizsheets.features.games.services"):
        game_service.check_round(13, {"Alpha": ResponseStatus.OK})

    assert "round 13 is graded but not counted by total" in caplog.text
    assert game_service.total() == {"Alpha": 0, "Beta": 0}


def test_remote_client_is_built_on_first_remote_call(game_config, registry_repo, ledger, fake_client):
    calls = []

    def _factory():
        calls.append(1)
        return fake_client

    svc = GameService(config=game_config, client_factory=_factory, registry_repo=registry_repo, ledger=ledger)
    assert svc.total() == {"Alpha": 0, "Beta": 0}
    assert calls == []

    svc.create_game()
    svc.delete_game()
    assert calls == [1]
