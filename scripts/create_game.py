from quizsheets.core.config import settings
from quizsheets.core.log_config import setup_logging
from quizsheets.db.store import TransactionalStore

from quizsheets.db.repositories.results import RoundResultsLedger
from quizsheets.db.repositories.spreadsheets import GameStateRepository

from quizsheets.features.games.services import GameService
from quizsheets.features.sheets.services import GoogleSheetsClient

from quizsheets.utils.game_config import load_game_config
from quizsheets.utils.game_dir import prepare_game_dir

def run_create_game():
    setup_logging(settings.LOG_LEVEL)
    prepare_game_dir(settings.GAME_DIR, new_game=True)

    config = load_game_config(settings.GAME_CONFIG_PATH)
    store = TransactionalStore(settings.STORE_PATH)

    svc = GameService(
        config=config,
        client_factory=lambda: GoogleSheetsClient.from_token_file(settings.GOOGLE_TOKEN_FILE),
        registry_repo=GameStateRepository(store),
        ledger=RoundResultsLedger(store),
    )

    # crée + remplit les spreadsheets, puis affiche les URLs
    registry = svc.create_game()
    print(registry)

if __name__ == "__main__":
    run_create_game()
