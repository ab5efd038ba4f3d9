from typing import Mapping, Sequence, List

from quizsheets.features.games.schemas import SpreadsheetRef
from quizsheets.features.layout.schemas import (
    FormulaCell,
    NumberCell,
    TextCell,
    ValueRange,
    column_letter,
)
from quizsheets.features.layout.services import LayoutEngine

TEAMS_HEADER = "Teams"
TEAM_SHEET_NAME = "Sheet1"


def build_manager_answer_grids(engine: LayoutEngine, teams: Sequence[str]) -> List[ValueRange]:
    """
    Grille du manager, par colonnes : "Teams" + noms d'équipes, puis une colonne par question.
    """
    if not teams or engine.is_empty:
        return []

    teams_col = [TextCell(TEAMS_HEADER)] + [TextCell(team) for team in teams]
    grids: List[ValueRange] = []
    for group in engine.groups():
        values = [teams_col] + [[NumberCell(label)] for label in group.labels]
        grids.append(
            ValueRange(
                range=engine.manager_range(group.index, group.length),
                values=values,
                major_dimension="COLUMNS",
            )
        )
    return grids


def build_team_answer_grids(engine: LayoutEngine) -> List[ValueRange]:
    """
    Grille d'une équipe, par lignes : numéros de question, puis ligne vide pour les réponses.
    """
    if engine.is_empty:
        return []

    return [
        ValueRange(
            range=engine.team_range(group.index, group.length),
            values=[[NumberCell(label) for label in group.labels], []],
            major_dimension="ROWS",
        )
        for group in engine.groups()
    ]


def build_link_grids(
    engine: LayoutEngine,
    teams: Sequence[str],
    team_sheets: Mapping[str, SpreadsheetRef],
) -> List[ValueRange]:
    """
    Formules IMPORTRANGE du manager : chaque cellule (question, équipe) recopie
    la réponse saisie dans la feuille de l'équipe.
    """
    if not teams or engine.is_empty:
        return []

    grids: List[ValueRange] = []
    for group in engine.groups():
        # ligne des réponses dans la feuille d'équipe (1-based)
        response_row = 3 * group.index + 2
        values = []
        for i in range(group.length):
            cell = f"{TEAM_SHEET_NAME}!{column_letter(i)}{response_row}"
            values.append([
                FormulaCell(f'=IMPORTRANGE("{team_sheets[team].url}", "{cell}")')
                for team in teams
            ])
        grids.append(
            ValueRange(
                range=engine.link_range(group.index, group.length),
                values=values,
                major_dimension="COLUMNS",
            )
        )
    return grids
