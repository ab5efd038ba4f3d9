import logging
from typing import Callable, Dict, List, Mapping, Optional

from quizsheets.db.repositories.results import RoundResultsLedger
from quizsheets.db.repositories.spreadsheets import GameStateRepository
from quizsheets.features.games.schemas import GameConfig, SpreadsheetRef, SpreadsheetRegistry
from quizsheets.features.layout.grids import (
    build_link_grids,
    build_manager_answer_grids,
    build_team_answer_grids,
)
from quizsheets.features.layout.schemas import CellValue, TextCell
from quizsheets.features.layout.services import LayoutEngine
from quizsheets.features.results.schemas import ResponseStatus, RoundResults
from quizsheets.features.results.services import grade_round, new_round_results
from quizsheets.features.sheets.services import SpreadsheetClient

logger = logging.getLogger(__name__)


class GameService:
    """
    Service métier Game : orchestre le client distant, la mise en page et les repositories.

    - create_game : crée et remplit les spreadsheets, enregistre le registre
    - fetch_round : relit les réponses d'un tour dans le manager, les enregistre non corrigées
    - check_round : applique la correction de l'opérateur
    - total : points (réponses OK) par équipe
    """
    def __init__(
        self,
        config: GameConfig,
        client_factory: Callable[[], SpreadsheetClient],
        registry_repo: GameStateRepository,
        ledger: RoundResultsLedger,
    ):
        self.config = config
        self._client_factory = client_factory
        self._client: Optional[SpreadsheetClient] = None
        self.registry = registry_repo
        self.ledger = ledger
        self.layout = LayoutEngine.from_config(config)

    @property
    def client(self) -> SpreadsheetClient:
        """Client distant construit au premier usage : lecture des tours et total n'en ont pas besoin."""
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    # ---------------------------------------------------------------------
    # Création de la partie
    # ---------------------------------------------------------------------

    def create_game(self) -> SpreadsheetRegistry:
        manager = self.client.create_sheet(f"{self.config.game_name}-manager")
        teams: Dict[str, SpreadsheetRef] = {}
        for team in self.config.teams:
            teams[team] = self.client.create_sheet(f"{self.config.game_name}: team {team}")

        registry = SpreadsheetRegistry(manager=manager, teams=teams)
        # enregistré avant le remplissage : les feuilles créées restent retrouvables si la suite échoue
        self.registry.save_registry(registry)

        self._fill_game_sheets(registry)
        return registry

    def _fill_game_sheets(self, registry: SpreadsheetRegistry) -> None:
        self.client.write_ranges(
            registry.manager,
            build_manager_answer_grids(self.layout, self.config.teams),
        )

        team_grids = build_team_answer_grids(self.layout)
        borders = self.layout.team_border_ranges()
        for team in self.config.teams:
            sheet = registry.teams[team]
            self.client.write_ranges(sheet, team_grids)
            self.client.add_borders(sheet, borders)

        self.client.write_ranges(
            registry.manager,
            build_link_grids(self.layout, self.config.teams, registry.teams),
        )

    def get_spreadsheets(self) -> SpreadsheetRegistry:
        return self.registry.get_registry()

    def delete_game(self) -> List[SpreadsheetRef]:
        """Supprime les spreadsheets distants. Le registre local est conservé."""
        registry = self.registry.get_registry()
        deleted: List[SpreadsheetRef] = []
        if registry.manager is not None:
            self.client.delete_sheet(registry.manager)
            deleted.append(registry.manager)
        for sheet in registry.teams.values():
            self.client.delete_sheet(sheet)
            deleted.append(sheet)
        return deleted

    # ---------------------------------------------------------------------
    # Tours
    # ---------------------------------------------------------------------

    def fetch_round(self, round_: int) -> RoundResults:
        registry = self.registry.get_registry()
        if registry.manager is None:
            raise LookupError("MANAGER_SPREADSHEET_NOT_FOUND")
        round_range = self.layout.round_range(round_)
        rows = self.client.read_range(registry.manager, round_range)
        logger.debug("round %d values: %s", round_, rows)

        results = new_round_results(round_, self._responses_by_team(rows))
        self.ledger.save_round(results)
        logger.info("fetched round %d for %d teams", round_, len(results.results))
        return results

    def _responses_by_team(self, rows: List[List[CellValue]]) -> Dict[str, str]:
        """
        Une ligne par équipe, dans l'ordre de la configuration.
        L'API omet les cellules vides en fin de plage : réponse vide.
        """
        if len(rows) > len(self.config.teams):
            raise ValueError(f"unexpected number of rows in round range: {len(rows)}")
        responses: Dict[str, str] = {}
        for i, team in enumerate(self.config.teams):
            row = rows[i] if i < len(rows) else []
            if not row:
                responses[team] = ""
                continue
            cell = row[0]
            if not isinstance(cell, TextCell):
                raise ValueError(f"received value {cell} could not be cast to string")
            responses[team] = cell.text
        return responses

    def get_round(self, round_: int) -> RoundResults:
        return self.ledger.get_round(round_)

    def check_round(self, round_: int, decisions: Mapping[str, ResponseStatus]) -> RoundResults:
        results = self.ledger.get_round(round_)
        graded = grade_round(results, decisions)
        self.ledger.save_round(graded)
        logger.info("graded round %d (%d decisions)", round_, len(decisions))
        if round_ >= self.config.number_of_questions:
            logger.warning(
                "round %d is graded but not counted by total (last counted round is %d)",
                round_,
                self.config.number_of_questions - 1,
            )
        return graded

    def total(self) -> Dict[str, int]:
        return self.ledger.total(
            teams=self.config.teams,
            number_of_questions=self.config.number_of_questions,
            has_warm_up_question=self.config.has_warm_up_question,
        )
