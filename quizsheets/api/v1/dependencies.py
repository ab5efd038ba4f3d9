"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_store() : construit le TransactionalStore sur le fichier de la partie.

get_game_service() : assemble GameService à partir de la config, du client Google (construit à la demande) et des repositories.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à remplacer dans les tests (app.dependency_overrides).
"""

from functools import lru_cache
from typing import Callable

from fastapi import Depends

from quizsheets.core.config import settings
from quizsheets.db.store import TransactionalStore
from quizsheets.db.repositories.results import RoundResultsLedger
from quizsheets.db.repositories.spreadsheets import GameStateRepository
from quizsheets.features.games.schemas import GameConfig
from quizsheets.features.games.services import GameService
from quizsheets.features.sheets.services import GoogleSheetsClient, SpreadsheetClient
from quizsheets.utils.game_config import load_game_config


# -----------------------------
# Store & config
# -----------------------------
def get_store() -> TransactionalStore:
    return TransactionalStore(settings.STORE_PATH)

@lru_cache()
def get_game_config() -> GameConfig:
    # chargée une seule fois par exécution
    return load_game_config(settings.GAME_CONFIG_PATH)


# -----------------------------
# Remote spreadsheets
# -----------------------------
def get_spreadsheet_client_factory() -> Callable[[], SpreadsheetClient]:
    # le token n'est lu qu'au premier appel distant (création, suppression, fetch)
    return lambda: GoogleSheetsClient.from_token_file(settings.GOOGLE_TOKEN_FILE)


# -----------------------------
# Repositories
# -----------------------------
def get_game_state_repository(store: TransactionalStore = Depends(get_store)) -> GameStateRepository:
    return GameStateRepository(store)

def get_round_results_ledger(store: TransactionalStore = Depends(get_store)) -> RoundResultsLedger:
    return RoundResultsLedger(store)


# -----------------------------
# Game service
# -----------------------------
def get_game_service(
    config: GameConfig = Depends(get_game_config),
    client_factory: Callable[[], SpreadsheetClient] = Depends(get_spreadsheet_client_factory),
    registry_repo: GameStateRepository = Depends(get_game_state_repository),
    ledger: RoundResultsLedger = Depends(get_round_results_ledger),
) -> GameService:
    """
    Fournit une instance de GameService avec ses dépendances injectées :
    - aucune logique dans la route
    - dépendances résolues par FastAPI
    """
    return GameService(
        config=config,
        client_factory=client_factory,
        registry_repo=registry_repo,
        ledger=ledger,
    )
