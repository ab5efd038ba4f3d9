import logging
from typing import Dict, Optional

from quizsheets.core.errors import MissingBucketError, SerializationError
from quizsheets.db.repositories.base import BaseRepository
from quizsheets.db.store import (
    BUCKET_GAME_CONFIGURATION,
    BUCKET_TEAMS_SPREADSHEETS,
    Transaction,
)
from quizsheets.features.games.schemas import SpreadsheetRef, SpreadsheetRegistry

logger = logging.getLogger(__name__)

MANAGER_SPREADSHEET_KEY = "manager-spreadsheet"


class GameStateRepository(BaseRepository):
    """
    Registre des spreadsheets de la partie (manager + une par équipe).
    """

    def save_registry(self, registry: SpreadsheetRegistry) -> None:
        """
        Le manager est toujours écrasé (même par null).
        Les équipes sont fusionnées clé par clé : les équipes absentes du registre ne sont pas touchées.
        """
        def _save(tx: Transaction) -> None:
            config_bucket = tx.bucket(BUCKET_GAME_CONFIGURATION)
            config_bucket.put(
                MANAGER_SPREADSHEET_KEY,
                self._encode(Optional[SpreadsheetRef], registry.manager),
            )
            if not registry.teams:
                return
            teams_bucket = tx.bucket(BUCKET_TEAMS_SPREADSHEETS)
            for name, sheet in registry.teams.items():
                teams_bucket.put(name, self._encode(SpreadsheetRef, sheet))

        self.store.update(_save)
        logger.info("saved spreadsheets registry (%d team sheets)", len(registry.teams))

    def get_registry(self) -> SpreadsheetRegistry:
        def _get(tx: Transaction) -> SpreadsheetRegistry:
            config_bucket = tx.bucket(BUCKET_GAME_CONFIGURATION)
            raw_manager = config_bucket.get(MANAGER_SPREADSHEET_KEY)
            if raw_manager is None:
                raise SerializationError(f"{MANAGER_SPREADSHEET_KEY} entry is missing")
            manager = self._decode(Optional[SpreadsheetRef], raw_manager)

            try:
                teams_bucket = tx.bucket(BUCKET_TEAMS_SPREADSHEETS)
            except MissingBucketError:
                # store qui n'a jamais contenu que le manager
                logger.debug("bucket %s is missing, no team spreadsheets", BUCKET_TEAMS_SPREADSHEETS)
                return SpreadsheetRegistry(manager=manager)

            teams: Dict[str, SpreadsheetRef] = {}
            for name, raw in teams_bucket.items():
                teams[name.decode("utf-8")] = self._decode(SpreadsheetRef, raw)
            return SpreadsheetRegistry(manager=manager, teams=teams)

        return self.store.read(_get)
